"""
Gallery Component - Layout

``build_gallery`` creates one gallery mount: the grid, the footer and the
stores the callbacks work on. Every id is a pattern-matching id indexed by
the mount id, so responses addressed to a previous mount never reach the
components of the current one.
"""

import dash_mantine_components as dmc
from dash import dcc, html
from dash_iconify import DashIconify

from artprints.configs.logging_init import logger
from artprints.dash.modules.gallery_component.feed import GRID_COLS, render_feed
from artprints.dash.modules.gallery_component.pagination import PaginationController
from artprints.dash.modules.gallery_component.sentinel import SentinelState


def gallery_id(component_type: str, mount_id: str) -> dict[str, str]:
    return {"type": component_type, "index": mount_id}


def build_gallery(mount_id: str | None = None, title: str = "Art Gallery") -> html.Div:
    """
    Build a gallery mount. Page 1 is requested as soon as it is rendered.

    Args:
        mount_id: Token of the mount lifecycle, random by default
        title: Heading shown above the grid
    """
    controller, ticket = PaginationController.mount(mount_id)
    mount_id = controller.state.mount_id
    logger.debug(f"Mounting gallery {mount_id}")

    footer = dmc.Stack(
        [
            dmc.Button(
                "Load more",
                id=gallery_id("gallery-load-more", mount_id),
                n_clicks=0,
                variant="outline",
                loading=True,
                leftSection=DashIconify(icon="mdi:chevron-down", width=18),
            ),
            dmc.Text(
                "You've reached the end of the gallery.",
                id=gallery_id("gallery-end-message", mount_id),
                c="dimmed",
                size="sm",
                style={"display": "none"},
            ),
            dmc.Text(
                "No artworks yet. Check back soon!",
                id=gallery_id("gallery-empty-message", mount_id),
                c="dimmed",
                fs="italic",
                style={"display": "none"},
            ),
        ],
        align="center",
        gap="xs",
        py="xl",
    )

    return html.Div(
        [
            dmc.Title(title, order=2, mb="lg"),
            dmc.SimpleGrid(
                id=gallery_id("gallery-grid", mount_id),
                cols=GRID_COLS,
                spacing="lg",
                verticalSpacing="lg",
                children=render_feed([], controller.state),
            ),
            footer,
            dcc.Store(
                id=gallery_id("gallery-pagination-store", mount_id),
                data=controller.state_to_store(),
            ),
            dcc.Store(id=gallery_id("gallery-artworks-store", mount_id), data=[]),
            dcc.Store(
                id=gallery_id("gallery-ticket-store", mount_id),
                data=ticket.model_dump(),
            ),
            dcc.Store(
                id=gallery_id("gallery-sentinel-store", mount_id),
                data=SentinelState(mount_id=mount_id).model_dump(),
            ),
            # Written by the browser-side observer through set_props
            dcc.Store(id=gallery_id("gallery-intersection-store", mount_id), data=None),
            html.Div(id=gallery_id("gallery-observer", mount_id), style={"display": "none"}),
        ],
        className="gallery-container",
    )
