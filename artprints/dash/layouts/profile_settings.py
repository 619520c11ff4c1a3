"""Profile settings page: name, date of birth, description, avatar and banner."""

import dash_bootstrap_components as dbc
import dash_mantine_components as dmc
from dash import Input, Output, State, dcc, html, no_update
from dash.exceptions import PreventUpdate
from dash_iconify import DashIconify

from artprints.configs.config import settings
from artprints.configs.logging_init import logger
from artprints.dash.api_calls import (
    SessionExpiredError,
    api_call_fetch_profile,
    api_call_update_profile,
)
from artprints.dash.colors import colors
from artprints.dash.layouts.layouts_toolbox import (
    build_notification,
    decode_upload,
    expire_session,
)
from artprints.dash.modules.gallery_component.utils import build_image_url
from artprints.models.users import UserSession

PREVIEW_STYLE = {
    "width": "100%",
    "height": "140px",
    "objectFit": "cover",
    "borderRadius": "8px",
    "backgroundColor": colors["sand"],
}


def _image_picker(field: str, label: str) -> dmc.Stack:
    return dmc.Stack(
        [
            dmc.Text(label, fw=500, size="sm"),
            html.Img(id=f"settings-{field}-preview", style=PREVIEW_STYLE),
            dcc.Upload(
                id=f"settings-{field}-upload",
                accept="image/*",
                max_size=settings.upload.max_size_bytes,
                children=dmc.Button(
                    f"Choose {label.lower()}",
                    variant="light",
                    size="xs",
                    leftSection=DashIconify(icon="mdi:image-edit-outline", width=16),
                ),
            ),
        ],
        gap="xs",
    )


def create_profile_settings_layout():
    form = dmc.Stack(
        [
            dmc.TextInput(id="settings-name", label="Name", placeholder="Your display name"),
            dmc.DateInput(
                id="settings-date-of-birth",
                label="Date of birth",
                valueFormat="YYYY-MM-DD",
                clearable=True,
            ),
            dmc.Textarea(
                id="settings-description",
                label="Description",
                placeholder="Tell buyers about your work",
                autosize=True,
                minRows=3,
            ),
            dbc.Row(
                [
                    dbc.Col(_image_picker("avatar", "Avatar"), md=6),
                    dbc.Col(_image_picker("background", "Background"), md=6),
                ],
                className="g-3",
            ),
            dmc.Group(
                dmc.Button(
                    "Save changes",
                    id="settings-save",
                    n_clicks=0,
                    color=colors["terracotta"],
                    leftSection=DashIconify(icon="mdi:content-save-outline", width=18),
                ),
                justify="flex-end",
            ),
        ],
        gap="md",
    )

    return dbc.Container(
        dmc.Paper(
            [dmc.Title("Profile settings", order=2, mb="lg"), form],
            shadow="md",
            radius="lg",
            p="xl",
            withBorder=True,
            style={"maxWidth": "720px", "margin": "0 auto"},
        ),
        fluid=True,
        className="py-4",
    )


def prefill_settings(local_data):
    """
    Returns:
        (name, date of birth, description, avatar preview, background preview)
    """
    session = UserSession.from_store(local_data)
    if not session.is_authenticated:
        raise PreventUpdate

    try:
        profile = api_call_fetch_profile(session)
    except SessionExpiredError:
        expire_session()
        raise PreventUpdate

    if profile is None:
        raise PreventUpdate

    user = profile.user
    return (
        user.name,
        user.date_of_birth,
        user.description or "",
        build_image_url(user.avatar_url, width=400) if user.avatar_url else None,
        build_image_url(user.background_url, width=800) if user.background_url else None,
    )


def save_profile(
    local_data,
    name,
    date_of_birth,
    description,
    avatar_contents=None,
    avatar_filename=None,
    background_contents=None,
    background_filename=None,
):
    """Send the form as multipart; returns the notifications to show."""
    session = UserSession.from_store(local_data)
    if not session.is_authenticated:
        raise PreventUpdate

    fields = {
        "name": name or "",
        "description": description or "",
        "dateOfBirth": date_of_birth or "",
    }

    files = {}
    for field, contents, filename in (
        ("avatar", avatar_contents, avatar_filename),
        ("background", background_contents, background_filename),
    ):
        if not contents:
            continue
        try:
            files[field] = decode_upload(contents, filename or field)
        except ValueError as e:
            logger.error(f"Unreadable {field} image: {e}")
            return [build_notification("Failed to update profile", f"Unreadable {field} image", "red")]

    try:
        result = api_call_update_profile(session, fields, files or None)
    except SessionExpiredError:
        expire_session()
        raise PreventUpdate

    if result["success"]:
        return [build_notification("Profile updated", "Your changes have been saved.")]
    return [
        build_notification("Failed to update profile", f"Failed to update profile: {result['message']}", "red")
    ]


def register_profile_settings_callbacks(app):
    @app.callback(
        Output("settings-name", "value"),
        Output("settings-date-of-birth", "value"),
        Output("settings-description", "value"),
        Output("settings-avatar-preview", "src"),
        Output("settings-background-preview", "src"),
        Input("url", "pathname"),
        State("local-store", "data"),
    )
    def populate_settings(pathname, local_data):
        if pathname != "/settings":
            raise PreventUpdate
        return prefill_settings(local_data)

    @app.callback(
        Output("settings-avatar-preview", "src", allow_duplicate=True),
        Input("settings-avatar-upload", "contents"),
        prevent_initial_call=True,
    )
    def preview_avatar(contents):
        return contents or no_update

    @app.callback(
        Output("settings-background-preview", "src", allow_duplicate=True),
        Input("settings-background-upload", "contents"),
        prevent_initial_call=True,
    )
    def preview_background(contents):
        return contents or no_update

    @app.callback(
        Output("notification-container", "sendNotifications", allow_duplicate=True),
        Input("settings-save", "n_clicks"),
        State("local-store", "data"),
        State("settings-name", "value"),
        State("settings-date-of-birth", "value"),
        State("settings-description", "value"),
        State("settings-avatar-upload", "contents"),
        State("settings-avatar-upload", "filename"),
        State("settings-background-upload", "contents"),
        State("settings-background-upload", "filename"),
        running=[(Output("settings-save", "loading"), True, False)],
        prevent_initial_call=True,
    )
    def submit_settings(
        n_clicks,
        local_data,
        name,
        date_of_birth,
        description,
        avatar_contents,
        avatar_filename,
        background_contents,
        background_filename,
    ):
        if not n_clicks:
            raise PreventUpdate
        return save_profile(
            local_data,
            name,
            date_of_birth,
            description,
            avatar_contents,
            avatar_filename,
            background_contents,
            background_filename,
        )
