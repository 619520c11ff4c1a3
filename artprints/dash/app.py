# ArtPrints core imports
from artprints.configs.config import settings
from artprints.configs.logging_init import logger

# ArtPrints dash core imports
from artprints.dash.core.app_factory import create_dash_app
from artprints.dash.core.callbacks import register_all_callbacks
from artprints.dash.layouts.app_layout import create_app_layout

# Create and configure the Dash application
app = create_dash_app()

# Set the application layout
app.layout = create_app_layout

# Register all callbacks
register_all_callbacks(app)

# Get the Flask server instance for WSGI
server = app.server


def main():
    logger.info(f"Starting Dash server on {settings.dash.host}:{settings.dash.port}")
    app.run(
        host=settings.dash.host,
        port=settings.dash.port,
        debug=settings.dash.debug,
        threaded=True,
    )


# Run the server if executed directly (not through WSGI)
if __name__ == "__main__":
    main()
