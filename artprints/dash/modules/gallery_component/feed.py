"""
Gallery Component - Artwork Feed Renderer

Turns the accumulated artworks and the pagination state into grid children:
one card per artwork, then skeleton cards while a page is loading. The footer
(manual "Load more" trigger, end-of-content and empty messages) is driven by
``footer_state``.
"""

from __future__ import annotations

from typing import Any, NamedTuple

import dash_mantine_components as dmc
from dash import Patch, html
from dash_iconify import DashIconify

from artprints.configs.config import settings
from artprints.dash.colors import colors
from artprints.dash.modules.gallery_component.pagination import PaginationState
from artprints.dash.modules.gallery_component.utils import (
    blurhash_data_uri,
    build_image_url,
    card_dom_id,
    format_price,
)
from artprints.models.artworks import Artwork

GRID_COLS = {"base": 1, "sm": 2, "md": 3, "lg": 4}


class FeedFooter(NamedTuple):
    show_load_more: bool
    load_more_loading: bool
    show_end_message: bool
    show_empty_message: bool


def _build_placeholder(artwork: Artwork) -> Any:
    """Decoded blurhash when available, generic skeleton block otherwise."""
    data_uri = None
    if artwork.blurhash:
        data_uri = blurhash_data_uri(artwork.blurhash, settings.gallery.blurhash_size)

    if data_uri:
        return html.Img(src=data_uri, alt="", className="artwork-placeholder")
    return dmc.Skeleton(className="artwork-placeholder", height="100%", radius=0)


def build_artwork_card(
    artwork: Artwork,
    position: int,
    scope: str,
    dom_id: str | None = None,
    show_cart: bool = True,
) -> dmc.Card:
    """
    Build a single artwork card.

    Args:
        artwork: Record to display
        position: Index of the record in the accumulated list
        scope: Prefix keeping component ids unique per page / mount
        dom_id: Plain DOM id, set on cards the sentinel may observe
        show_cart: Whether to add the "Add to cart" button
    """
    height = settings.gallery.thumbnail_height

    children: list[Any] = [
        dmc.CardSection(
            html.Div(
                [
                    _build_placeholder(artwork),
                    html.Img(
                        src=build_image_url(artwork.image_url),
                        alt=artwork.title,
                        className="artwork-image",
                    ),
                ],
                className="artwork-image-frame",
                style={"height": f"{height}px"},
            ),
        ),
        dmc.Text(artwork.title, fw=500, size="lg", truncate="end", mt="sm"),
    ]

    if artwork.description:
        children.append(dmc.Text(artwork.description, size="sm", c="dimmed", lineClamp=2))

    price = format_price(artwork.price)
    if price:
        children.append(dmc.Text(price, fw=600, size="sm", mt="xs", c=colors["teal"]))

    if show_cart:
        children.append(
            dmc.Button(
                "Add to cart",
                id={
                    "type": "gallery-add-to-cart",
                    "index": f"{scope}-{position}",
                    "artwork": artwork.id,
                },
                n_clicks=0,
                variant="light",
                size="xs",
                mt="sm",
                fullWidth=True,
                leftSection=DashIconify(icon="mdi:cart-plus", width=16),
            )
        )

    card_kwargs: dict[str, Any] = {}
    if dom_id:
        card_kwargs["id"] = dom_id

    return dmc.Card(
        children=children,
        withBorder=True,
        shadow="sm",
        radius="md",
        padding="md",
        className="artwork-card",
        **card_kwargs,
    )


def build_skeleton_card() -> dmc.Card:
    return dmc.Card(
        children=[
            dmc.CardSection(dmc.Skeleton(height=settings.gallery.thumbnail_height, radius=0)),
            dmc.Skeleton(height=16, mt="md", width="70%", radius="xl"),
            dmc.Skeleton(height=10, mt="sm", radius="xl"),
            dmc.Skeleton(height=10, mt="xs", width="85%", radius="xl"),
        ],
        withBorder=True,
        shadow="sm",
        radius="md",
        padding="md",
        className="artwork-card artwork-card-skeleton",
    )


def render_feed(
    artworks: list[Artwork], state: PaginationState, skeleton_count: int | None = None
) -> list[dmc.Card]:
    """Cards for every artwork, followed by skeleton cards while loading."""
    cards = [
        build_artwork_card(
            artwork,
            position,
            scope=state.mount_id,
            dom_id=card_dom_id(state.mount_id, position),
        )
        for position, artwork in enumerate(artworks)
    ]

    if state.loading:
        count = settings.gallery.skeleton_count if skeleton_count is None else skeleton_count
        cards.extend(build_skeleton_card() for _ in range(count))

    return cards


def pending_skeletons_patch(skeleton_count: int | None = None) -> Patch:
    """
    Grid update appending skeleton cards below the cards already shown.

    Sent with a new load ticket: the full render only runs once the page has
    been fetched, so the in-flight state is shown through this patch.
    """
    count = settings.gallery.skeleton_count if skeleton_count is None else skeleton_count
    patch = Patch()
    patch.extend([build_skeleton_card() for _ in range(count)])
    return patch


def footer_state(state: PaginationState, item_count: int) -> FeedFooter:
    return FeedFooter(
        show_load_more=state.has_more,
        load_more_loading=state.loading,
        show_end_message=not state.has_more and item_count > 0,
        show_empty_message=not state.has_more and item_count == 0,
    )


def sentinel_target(state: PaginationState, item_count: int) -> str | None:
    """DOM id of the last rendered artwork, if any."""
    if item_count == 0:
        return None
    return card_dom_id(state.mount_id, item_count - 1)
