"""
Gallery Component Callbacks

- core.py: load / advance / render / cart callbacks (server side)
- clientside.py: IntersectionObserver management (browser side)
"""


def register_callbacks_gallery_component(app):
    """
    Register all gallery callbacks.

    Args:
        app: Dash application instance
    """
    from .clientside import register_clientside_callbacks
    from .core import register_core_callbacks

    register_core_callbacks(app)
    register_clientside_callbacks(app)
