"""
Callback registration for the ArtPrints Dash application.
"""

from dash import Input, Output, State

from artprints.configs.logging_init import logger
from artprints.dash.core.auth import process_authentication


def register_main_callback(app):
    """
    Register the main callback for page routing and authentication.

    Args:
        app (dash.Dash): The Dash application instance
    """

    @app.callback(
        Output("page-content", "children"),
        Output("header-content", "children"),
        Output("url", "pathname"),
        Output("local-store", "data", allow_duplicate=True),
        Input("url", "pathname"),
        Input("url", "search"),
        State("local-store", "data"),
        prevent_initial_call="initial_duplicate",
    )
    def display_page(pathname, search, local_data):
        logger.debug(f"Routing {pathname}{search or ''}")
        return process_authentication(pathname, local_data, search)

    logger.info("Main routing callback registered")


def register_all_callbacks(app):
    """
    Register all callbacks for the application.

    Args:
        app (dash.Dash): The Dash application instance
    """
    from artprints.dash.layouts.auth_forms import register_auth_callbacks
    from artprints.dash.layouts.header import register_callbacks_header
    from artprints.dash.layouts.profile import register_profile_callbacks
    from artprints.dash.layouts.profile_settings import register_profile_settings_callbacks
    from artprints.dash.layouts.upload import register_upload_callbacks
    from artprints.dash.modules.gallery_component.callbacks import (
        register_callbacks_gallery_component,
    )

    register_main_callback(app)
    register_callbacks_header(app)
    register_auth_callbacks(app)
    register_profile_callbacks(app)
    register_profile_settings_callbacks(app)
    register_upload_callbacks(app)
    register_callbacks_gallery_component(app)
