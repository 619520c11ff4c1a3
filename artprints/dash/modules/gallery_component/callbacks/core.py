"""
Gallery Component - Core Callbacks

- load_gallery_page: serve a load ticket (mount, then every advance)
- advance_gallery: sentinel intersection or "Load more" click -> next ticket,
  skeleton cards appended to the grid until the page arrives
- render_gallery: grid, footer and next sentinel target from the stores
- add_to_cart: append an artwork id to the session cart

The callback bodies are module-level functions taking plain store data, the
registered wrappers only read the Dash callback context.
"""

from __future__ import annotations

from typing import Any

from dash import ALL, MATCH, Input, Output, State, ctx, no_update
from dash.exceptions import PreventUpdate

from artprints.configs.logging_init import logger
from artprints.dash.api_calls import api_call_fetch_artworks
from artprints.dash.layouts.layouts_toolbox import build_notification
from artprints.dash.modules.gallery_component.feed import (
    footer_state,
    pending_skeletons_patch,
    render_feed,
    sentinel_target,
)
from artprints.dash.modules.gallery_component.pagination import LoadTicket, PaginationController
from artprints.dash.modules.gallery_component.sentinel import (
    IntersectionEvent,
    VisibilitySentinel,
)

HIDDEN = {"display": "none"}
VISIBLE: dict[str, str] = {}

INTERSECTION_TRIGGER = "gallery-intersection-store"
LOAD_MORE_TRIGGER = "gallery-load-more"


def load_gallery_page(
    ticket_data: dict[str, Any] | None,
    state_data: dict[str, Any] | None,
    artworks_data: list[dict[str, Any]] | None,
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Fetch the page named by the ticket and append it to the accumulated list."""
    if not ticket_data or not state_data:
        raise PreventUpdate

    ticket = LoadTicket.model_validate(ticket_data)
    controller = PaginationController.from_stores(state_data, artworks_data)

    if not controller.load(api_call_fetch_artworks, ticket):
        raise PreventUpdate

    logger.debug(
        f"Gallery {ticket.mount_id}: page {ticket.page} done, "
        f"{len(controller.artworks)} artworks, has_more={controller.state.has_more}"
    )
    return controller.state_to_store(), controller.artworks_to_store()


def advance_gallery(
    trigger_type: str | None,
    event_data: dict[str, Any] | None,
    state_data: dict[str, Any] | None,
    sentinel_data: dict[str, Any] | None,
) -> tuple[Any, ...]:
    """
    Advance to the next page on an intersection or a "Load more" click.

    A new ticket also appends skeleton cards to the grid and puts "Load more"
    in its loading state; the full render waits for the fetch to complete.

    Returns:
        (pagination state, load ticket, sentinel state, grid patch, load-more
        loading); ``no_update`` for whatever did not change
    """
    if not state_data:
        raise PreventUpdate

    controller = PaginationController.from_stores(state_data)
    sentinel = VisibilitySentinel.from_store(sentinel_data, controller.state.mount_id)
    sentinel_out: Any = no_update

    if trigger_type == INTERSECTION_TRIGGER:
        if not event_data:
            raise PreventUpdate
        before = sentinel.to_store()
        ticket = sentinel.handle_intersection(IntersectionEvent.model_validate(event_data), controller)
        if sentinel.to_store() != before:
            sentinel_out = sentinel.to_store()
    elif trigger_type == LOAD_MORE_TRIGGER:
        ticket = controller.advance()
    else:
        raise PreventUpdate

    if ticket is None:
        if sentinel_out is no_update:
            raise PreventUpdate
        return no_update, no_update, sentinel_out, no_update, no_update

    logger.info(f"Gallery {ticket.mount_id}: requesting page {ticket.page} ({trigger_type})")
    return (
        controller.state_to_store(),
        ticket.model_dump(),
        sentinel_out,
        pending_skeletons_patch(),
        True,
    )


def render_gallery(
    state_data: dict[str, Any] | None,
    artworks_data: list[dict[str, Any]] | None,
    sentinel_data: dict[str, Any] | None,
) -> tuple[Any, ...]:
    """
    Render grid children and footer, and point the sentinel at the last card.

    Returns:
        (grid children, load-more style, load-more loading, end message style,
        empty message style, sentinel state or no_update)
    """
    if not state_data:
        raise PreventUpdate

    controller = PaginationController.from_stores(state_data, artworks_data)
    state = controller.state
    item_count = len(controller.artworks)

    cards = render_feed(controller.artworks, state)
    footer = footer_state(state, item_count)

    sentinel = VisibilitySentinel.from_store(sentinel_data, state.mount_id)
    before = sentinel.to_store()
    sentinel.attach(sentinel_target(state, item_count), state)
    sentinel_out = sentinel.to_store() if sentinel.to_store() != before else no_update

    return (
        cards,
        VISIBLE if footer.show_load_more else HIDDEN,
        footer.load_more_loading,
        VISIBLE if footer.show_end_message else HIDDEN,
        VISIBLE if footer.show_empty_message else HIDDEN,
        sentinel_out,
    )


def add_to_cart(
    triggered_id: dict[str, Any] | None,
    clicked: Any,
    cart_data: list[str] | None,
) -> tuple[list[str], list[dict[str, Any]]]:
    """Add the clicked artwork to the cart; adding it twice is a no-op."""
    if not triggered_id or not clicked:
        raise PreventUpdate

    artwork_id = triggered_id.get("artwork")
    if not artwork_id:
        raise PreventUpdate

    cart = list(cart_data or [])
    if artwork_id in cart:
        return cart, [
            build_notification("Already in cart", "This artwork is already in your cart.", "blue")
        ]

    cart.append(artwork_id)
    logger.debug(f"Cart: added {artwork_id} ({len(cart)} items)")
    return cart, [build_notification("Added to cart", f"{len(cart)} item(s) in your cart.")]


def register_core_callbacks(app):
    """Register the gallery callbacks."""

    @app.callback(
        Output({"type": "gallery-pagination-store", "index": MATCH}, "data"),
        Output({"type": "gallery-artworks-store", "index": MATCH}, "data"),
        Input({"type": "gallery-ticket-store", "index": MATCH}, "data"),
        State({"type": "gallery-pagination-store", "index": MATCH}, "data"),
        State({"type": "gallery-artworks-store", "index": MATCH}, "data"),
    )
    def _load_gallery_page(ticket_data, state_data, artworks_data):
        return load_gallery_page(ticket_data, state_data, artworks_data)

    @app.callback(
        Output({"type": "gallery-pagination-store", "index": MATCH}, "data", allow_duplicate=True),
        Output({"type": "gallery-ticket-store", "index": MATCH}, "data", allow_duplicate=True),
        Output({"type": "gallery-sentinel-store", "index": MATCH}, "data", allow_duplicate=True),
        Output({"type": "gallery-grid", "index": MATCH}, "children", allow_duplicate=True),
        Output({"type": "gallery-load-more", "index": MATCH}, "loading", allow_duplicate=True),
        Input({"type": "gallery-intersection-store", "index": MATCH}, "data"),
        Input({"type": "gallery-load-more", "index": MATCH}, "n_clicks"),
        State({"type": "gallery-pagination-store", "index": MATCH}, "data"),
        State({"type": "gallery-sentinel-store", "index": MATCH}, "data"),
        prevent_initial_call=True,
    )
    def _advance_gallery(event_data, n_clicks, state_data, sentinel_data):
        trigger_type = ctx.triggered_id.get("type") if ctx.triggered_id else None
        if trigger_type == LOAD_MORE_TRIGGER and not n_clicks:
            raise PreventUpdate
        return advance_gallery(trigger_type, event_data, state_data, sentinel_data)

    @app.callback(
        Output({"type": "gallery-grid", "index": MATCH}, "children"),
        Output({"type": "gallery-load-more", "index": MATCH}, "style"),
        Output({"type": "gallery-load-more", "index": MATCH}, "loading"),
        Output({"type": "gallery-end-message", "index": MATCH}, "style"),
        Output({"type": "gallery-empty-message", "index": MATCH}, "style"),
        Output({"type": "gallery-sentinel-store", "index": MATCH}, "data"),
        Input({"type": "gallery-pagination-store", "index": MATCH}, "data"),
        Input({"type": "gallery-artworks-store", "index": MATCH}, "data"),
        State({"type": "gallery-sentinel-store", "index": MATCH}, "data"),
    )
    def _render_gallery(state_data, artworks_data, sentinel_data):
        return render_gallery(state_data, artworks_data, sentinel_data)

    @app.callback(
        Output("cart-store", "data"),
        Output("notification-container", "sendNotifications", allow_duplicate=True),
        Input({"type": "gallery-add-to-cart", "index": ALL, "artwork": ALL}, "n_clicks"),
        State("cart-store", "data"),
        prevent_initial_call=True,
    )
    def _add_to_cart(n_clicks_list, cart_data):
        clicked = ctx.triggered[0]["value"] if ctx.triggered else None
        return add_to_cart(ctx.triggered_id, clicked, cart_data)
