"""Small layout helpers shared by the pages."""

import base64
from typing import Any

import dash_mantine_components as dmc
from dash import set_props
from dash_iconify import DashIconify

from artprints.models.users import UserSession


def build_notification(
    title: str,
    message: str,
    color: str = "green",
    icon: str | None = None,
    notification_id: str | None = None,
    auto_close: int = 5000,
) -> dict[str, Any]:
    """Notification dict for ``notification-container.sendNotifications``."""
    if icon is None:
        icon = "mdi:check-circle" if color == "green" else "mdi:alert-circle"
    notification: dict[str, Any] = {
        "action": "show",
        "title": title,
        "message": message,
        "color": color,
        "icon": DashIconify(icon=icon),
        "autoClose": auto_close,
    }
    if notification_id:
        notification["id"] = notification_id
    return notification


def centered_message(text: str, italic: bool = True) -> dmc.Center:
    """Centered dimmed text for empty states."""
    return dmc.Center(
        dmc.Text(text, c="dimmed", fs="italic" if italic else None),
        style={"padding": "2rem"},
    )


def page_container(children: Any, size: str = "lg") -> dmc.Container:
    return dmc.Container(children, size=size, py="lg", px="md")


def expire_session() -> None:
    """Clear the stored session and send the browser to the sign-in page."""
    set_props("local-store", {"data": UserSession().to_store()})
    set_props("url", {"pathname": "/signin"})


def decode_upload(contents: str, filename: str) -> tuple[str, bytes, str]:
    """
    Decode ``dcc.Upload`` contents (a data URI).

    Returns:
        ``(filename, content, content_type)``, ready for a multipart upload

    Raises:
        ValueError: contents are not a base64 data URI
    """
    header, _, content_string = contents.partition(",")
    if not header.startswith("data:") or not content_string:
        raise ValueError("Not a data URI")
    content_type = header[len("data:") :].split(";")[0] or "application/octet-stream"
    return filename, base64.b64decode(content_string, validate=True), content_type
