"""
Centralized logging initialization to avoid circular imports.

Modules import ``logger`` from here; ``initialize_loggers`` re-applies the
verbosity level once the settings are loaded.
"""

import logging
from typing import Optional

from artprints.configs.custom_logging import format_pydantic, setup_logging
from artprints.configs.settings_models import Settings

__all__ = ["logger", "initialize_loggers", "format_pydantic"]

settings = Settings()

logger = setup_logging(__name__, level=settings.logging.verbosity_level)


def initialize_loggers(verbose_level: Optional[str] = None) -> logging.Logger:
    """
    Initialize the application logger.

    Args:
        verbose_level: String indicating the verbosity level (DEBUG, INFO, etc.)
            If None, uses the level from settings.

    Returns:
        The configured logger instance
    """
    if verbose_level is None:
        verbose_level = settings.logging.verbosity_level

    # setup_logging always returns the shared "artprints" logger, reconfigured
    return setup_logging(__name__, level=verbose_level)
