import logging
import sys
from io import StringIO
from typing import Any

import pydantic
from colorlog import ColoredFormatter
from rich.console import Console
from rich.pretty import Pretty
from rich.theme import Theme

# Pydantic models are rendered with rich's repr styling
custom_theme = Theme(
    {
        "repr.tag_name": "bold magenta",
        "repr.attrib_name": "yellow",
        "repr.attrib_value": "green",
        "repr.attrib_equal": "dim",
        "repr.bool_true": "bold bright_green",
        "repr.bool_false": "bold bright_red",
        "repr.none": "dim",
        "repr.number": "cyan",
        "repr.str": "green",
    }
)


def _plain_format_value(value: Any) -> str:
    if isinstance(value, str):
        if len(value) > 30:
            return f"'{value[:27]}...'"
        return f"'{value}'"
    if isinstance(value, list | tuple) and len(value) > 3:
        return f"[{len(value)} items]"
    if isinstance(value, dict) and len(value) > 2:
        return f"{{{len(value)} items}}"
    return repr(value)


def format_pydantic(model: pydantic.BaseModel, max_line_length: int = 80) -> str:
    """
    Format a Pydantic model compactly for use in f-strings.

    Long strings are shortened and long collections are summarised by their
    size, so that a list of 24 artworks does not flood the log.

    Args:
        model: A Pydantic model instance
        max_line_length: Maximum length for single-line representation

    Returns:
        Formatted string representation of the model
    """
    if not isinstance(model, pydantic.BaseModel):
        return str(model)

    model_name = model.__class__.__name__
    items = [f"{key}={_plain_format_value(value)}" for key, value in model.model_dump().items()]

    single_line = f"{model_name}({', '.join(items)})"
    if len(single_line) <= max_line_length:
        return single_line

    lines = [f"{model_name}("]
    lines.extend(f"    {item}," for item in items)
    lines.append(")")
    return "\n".join(lines)


class RichReprFormatter(ColoredFormatter):
    """
    Colored log formatter that renders Pydantic models passed directly as the
    log message with rich's pretty printer.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_single_line_length = 80

    def _render_model(self, model: pydantic.BaseModel) -> str:
        # A fresh buffer per record keeps concurrent callbacks from interleaving
        console = Console(
            file=StringIO(), width=120, theme=custom_theme, force_terminal=True, highlight=True
        )
        console.print(Pretty(model, max_length=5, max_string=60), end="")
        return console.file.getvalue()  # type: ignore[attr-defined]

    def format(self, record):
        if isinstance(record.msg, pydantic.BaseModel):
            try:
                record.msg = self._render_model(record.msg)
            except Exception:
                record.msg = format_pydantic(record.msg, self.max_single_line_length)
        return super().format(record)


def setup_logging(name=None, level="INFO"):
    """
    Set up the application logger with:
    - Colored level name
    - Bold line number and function name
    - Rich rendering for Pydantic models logged as the message
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("artprints")
    logger.setLevel(numeric_level)
    logger.propagate = True

    # Avoid duplicate handlers when re-initialised
    if logger.handlers:
        logger.handlers = []

    formatter = RichReprFormatter(
        "%(asctime)s - %(log_color)s%(levelname)s%(reset)s - %(module)s:%(bold)s%(lineno)d%(reset)s - %(bold)s%(funcName)s%(reset)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
        secondary_log_colors={
            "bold": {
                "DEBUG": "bold",
                "INFO": "bold",
                "WARNING": "bold",
                "ERROR": "bold",
                "CRITICAL": "bold",
            }
        },
        style="%",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
