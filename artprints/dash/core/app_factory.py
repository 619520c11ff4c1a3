"""
Factory module for creating and configuring the Dash application.
"""

import os

import dash
import dash_bootstrap_components as dbc

from artprints.configs.config import settings
from artprints.configs.logging_init import logger


def create_dash_app():
    """
    Create and configure a new Dash application instance.

    Returns:
        dash.Dash: Configured Dash application instance
    """
    # Get the root path of the artprints.dash package
    dash_root_path = os.path.dirname(os.path.dirname(__file__))
    assets_folder = os.path.join(dash_root_path, "assets")

    app = dash.Dash(
        __name__,
        requests_pathname_prefix="/",
        external_stylesheets=[dbc.themes.BOOTSTRAP],
        suppress_callback_exceptions=True,
        title=settings.dash.title,
        assets_folder=assets_folder,
        assets_url_path="/assets",
    )

    # Configure Flask's logger to use custom logging settings
    server = app.server
    server.logger.handlers = logger.handlers
    server.logger.setLevel(logger.level)

    logger.info(f"Dash app created (assets: {assets_folder})")
    return app
