"""
Application header: navigation links, account and sign-up menus, cart.

The header is rebuilt by the routing callback for every page, from the
session parsed out of ``local-store``.
"""

from typing import Any

import dash_mantine_components as dmc
from dash import Input, Output, State, dcc, no_update
from dash.exceptions import PreventUpdate
from dash_iconify import DashIconify

from artprints.configs.config import settings
from artprints.configs.logging_init import logger
from artprints.dash.api_calls import SessionExpiredError, api_call_create_order
from artprints.dash.colors import colors
from artprints.dash.layouts.layouts_toolbox import build_notification
from artprints.models.users import UserSession

ICON_SIZE = 18

PUBLIC_LINKS = [("Home", "/", "mdi:home-outline")]
MEMBER_LINKS = [
    ("Upload", "/upload", "mdi:cloud-upload-outline"),
    ("Profile", "/profile", "mdi:account-outline"),
    ("Settings", "/settings", "mdi:cog-outline"),
]


def _nav_link(label: str, href: str, icon: str, active: bool) -> dcc.Link:
    return dcc.Link(
        dmc.Button(
            label,
            variant="light" if active else "subtle",
            color=colors["terracotta"] if active else "gray",
            leftSection=DashIconify(icon=icon, width=ICON_SIZE),
        ),
        href=href,
        style={"textDecoration": "none"},
    )


def _join_menu() -> dmc.Menu:
    return dmc.Menu(
        [
            dmc.MenuTarget(
                dmc.Button(
                    "Join ArtPrints Kanairo",
                    variant="outline",
                    color=colors["terracotta"],
                    rightSection=DashIconify(icon="mdi:chevron-down", width=ICON_SIZE),
                )
            ),
            dmc.MenuDropdown(
                [
                    dmc.MenuItem(
                        "Sign up as Artist",
                        href="/signup?type=artist",
                        leftSection=DashIconify(icon="mdi:palette-outline", width=ICON_SIZE),
                    ),
                    dmc.MenuItem(
                        "Sign up as Print Shop",
                        href="/signup?type=printshop",
                        leftSection=DashIconify(icon="mdi:printer-outline", width=ICON_SIZE),
                    ),
                ]
            ),
        ],
        trigger="hover",
    )


def _account_menu(session: UserSession) -> dmc.Menu:
    if session.is_authenticated:
        items = [
            dmc.MenuLabel(session.email or "Signed in"),
            dmc.MenuItem(
                "Sign out",
                id="logout-button",
                n_clicks=0,
                color="red",
                leftSection=DashIconify(icon="mdi:logout", width=ICON_SIZE),
            ),
        ]
    else:
        items = [
            dmc.MenuItem(
                "Sign in",
                href="/signin",
                leftSection=DashIconify(icon="mdi:login", width=ICON_SIZE),
            ),
        ]

    return dmc.Menu(
        [
            dmc.MenuTarget(
                dmc.Button(
                    "Account",
                    variant="subtle",
                    color="gray",
                    leftSection=DashIconify(icon="mdi:account-circle", width=ICON_SIZE),
                )
            ),
            dmc.MenuDropdown(items),
        ]
    )


def _cart_button() -> dmc.Group:
    return dmc.Group(
        [
            dmc.Badge(
                "0",
                id="cart-badge",
                color=colors["teal"],
                variant="filled",
                leftSection=DashIconify(icon="mdi:cart-outline", width=14),
            ),
            dmc.Button(
                "Checkout",
                id="cart-checkout-button",
                n_clicks=0,
                size="xs",
                variant="filled",
                color=colors["teal"],
            ),
        ],
        gap="xs",
    )


def create_header(session: UserSession, pathname: str | None = None) -> dmc.Group:
    """Header content for the AppShell, depending on the signed-in state."""
    links = list(PUBLIC_LINKS)
    if session.is_authenticated:
        links.extend(MEMBER_LINKS)

    nav = dmc.Group(
        [_nav_link(label, href, icon, href == pathname) for label, href, icon in links],
        gap="xs",
    )

    right: list[Any] = [_cart_button(), _account_menu(session)]
    if not session.is_authenticated:
        right.insert(1, _join_menu())

    return dmc.Group(
        [
            dmc.Group(
                [
                    DashIconify(icon="mdi:palette", width=30, color=colors["terracotta"]),
                    dmc.Text(
                        settings.dash.title,
                        fw="bold",
                        size="xl",
                        c=colors["indigo"],
                    ),
                    nav,
                ],
                gap="lg",
            ),
            dmc.Group(right, gap="sm"),
        ],
        justify="space-between",
        align="center",
        style={"padding": "0 20px", "height": "100%"},
    )


def cart_badge_label(cart_data: list[str] | None) -> str:
    return str(len(cart_data or []))


def checkout_cart(
    n_clicks: int | None, cart_data: list[str] | None, local_data: dict[str, Any] | None
) -> tuple[Any, Any, Any, Any]:
    """
    Create an order for the cart content.

    Returns:
        (cart-store, notifications, url pathname, local-store)
    """
    if not n_clicks:
        raise PreventUpdate

    if not cart_data:
        return (
            no_update,
            [build_notification("Cart is empty", "Add artworks from the gallery first.", "blue")],
            no_update,
            no_update,
        )

    session = UserSession.from_store(local_data)
    if not session.is_authenticated:
        return (
            no_update,
            [build_notification("Sign in required", "Please sign in to checkout.", "orange")],
            "/signin",
            no_update,
        )

    try:
        order = api_call_create_order(session, list(cart_data))
    except SessionExpiredError:
        return (
            no_update,
            [build_notification("Session expired", "Please sign in again.", "orange")],
            "/signin",
            UserSession().to_store(),
        )

    if order is None:
        return (
            no_update,
            [build_notification("Checkout failed", "Could not create the order.", "red")],
            no_update,
            no_update,
        )

    logger.info(f"Checkout done for {session.email}: {len(cart_data)} items")
    return (
        [],
        [build_notification("Order placed", f"{len(cart_data)} artwork(s) ordered.")],
        no_update,
        no_update,
    )


def register_callbacks_header(app):
    @app.callback(
        Output("cart-badge", "children"),
        Input("cart-store", "data"),
        Input("header-content", "children"),
    )
    def update_cart_badge(cart_data, _header):
        return cart_badge_label(cart_data)

    @app.callback(
        Output("cart-store", "data", allow_duplicate=True),
        Output("notification-container", "sendNotifications", allow_duplicate=True),
        Output("url", "pathname", allow_duplicate=True),
        Output("local-store", "data", allow_duplicate=True),
        Input("cart-checkout-button", "n_clicks"),
        State("cart-store", "data"),
        State("local-store", "data"),
        prevent_initial_call=True,
    )
    def checkout(n_clicks, cart_data, local_data):
        return checkout_cart(n_clicks, cart_data, local_data)
