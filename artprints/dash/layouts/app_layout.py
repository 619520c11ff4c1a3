import dash_mantine_components as dmc
from dash import dcc, html, no_update

from artprints.configs.logging_init import logger
from artprints.dash.layouts.auth_forms import (
    create_signin_layout,
    create_signup_layout,
    parse_account_type,
)
from artprints.dash.layouts.header import create_header
from artprints.dash.layouts.layouts_toolbox import page_container
from artprints.dash.layouts.profile import create_profile_layout
from artprints.dash.layouts.profile_settings import create_profile_settings_layout
from artprints.dash.layouts.upload import create_upload_layout
from artprints.dash.modules.gallery_component.frontend import build_gallery
from artprints.models.users import UserSession

PROTECTED_PATHS = ("/upload", "/profile", "/settings")


def _local_store_update(local_data, session: UserSession):
    """Signed-out sessions left in the store are reset once."""
    if local_data and local_data.get("logged_in") and not session.is_authenticated:
        return UserSession().to_store()
    return no_update


def _pathname_update(requested, resolved):
    return resolved if resolved != requested else no_update


def create_public_page(pathname, search=None):
    """Content of a page that does not need a session, None if unknown."""
    if pathname == "/":
        return page_container(build_gallery())
    if pathname == "/signin":
        return create_signin_layout()
    if pathname == "/signup":
        return create_signup_layout(parse_account_type(search))
    return None


def handle_unauthenticated_user(pathname, local_data=None, search=None):
    session = UserSession()
    logger.info(f"Anonymous visit: {pathname}")

    resolved = pathname
    content = create_public_page(pathname, search)
    if content is None:
        resolved = "/signin" if pathname in PROTECTED_PATHS else "/"
        content = create_public_page(resolved)

    return (
        content,
        create_header(session, resolved),
        _pathname_update(pathname, resolved),
        _local_store_update(local_data, session),
    )


def handle_authenticated_user(pathname, session: UserSession):
    logger.info(f"User logged in: {session.email} -> {pathname}")

    resolved = pathname
    if pathname in ("/signin", "/signup"):
        resolved = "/"

    if resolved == "/upload":
        content = create_upload_layout()
    elif resolved == "/profile":
        content = create_profile_layout()
    elif resolved == "/settings":
        content = create_profile_settings_layout()
    else:
        content = create_public_page(resolved)
        if content is None:
            # Fallback to the gallery if path is unrecognized
            resolved = "/"
            content = create_public_page(resolved)

    return content, create_header(session, resolved), _pathname_update(pathname, resolved), no_update


def create_app_layout():
    return dmc.MantineProvider(
        id="mantine-provider",
        forceColorScheme="light",
        theme={"primaryColor": "orange", "fontFamily": "Inter, sans-serif"},
        children=[
            dcc.Location(id="url", refresh=False),
            dcc.Store(
                id="local-store",
                storage_type="local",
                data=UserSession().to_store(),
            ),
            # Cart lives for the browser session only
            dcc.Store(id="cart-store", storage_type="session", data=[]),
            html.Div(id="gallery-observer-release", style={"display": "none"}),
            dmc.NotificationContainer(id="notification-container"),
            dmc.AppShell(
                id="app-shell",
                header={"height": 65, "padding": "0"},
                children=[
                    dmc.AppShellHeader(
                        children=[],  # Will be populated by callback
                        id="header-content",
                    ),
                    dmc.AppShellMain(
                        html.Div(
                            id="page-content",
                            style={"minHeight": "calc(100vh - 65px)"},
                        ),
                    ),
                ],
            ),
        ],
    )
