"""
Upload page.

Flow: pick one image -> validate type and size -> make sure the ID token is
fresh -> POST /artworks/upload -> record the URL in Firestore -> show the
uploaded image and a link back to the gallery.
"""

import os

import dash_mantine_components as dmc
from dash import Input, Output, State, dcc, html, no_update, set_props
from dash.exceptions import PreventUpdate
from dash_iconify import DashIconify

from artprints.configs.config import settings
from artprints.configs.logging_init import logger
from artprints.dash.api_calls import (
    api_call_record_image,
    api_call_refresh_id_token,
    api_call_upload_artwork,
)
from artprints.dash.colors import colors
from artprints.dash.layouts.layouts_toolbox import decode_upload, expire_session, page_container
from artprints.dash.modules.gallery_component.utils import build_image_url
from artprints.models.users import UserSession

HIDDEN = {"display": "none"}


def _max_size_label() -> str:
    return f"{settings.upload.max_size_bytes / (1024 * 1024):.0f}MB"


def create_upload_layout():
    accepted = ", ".join(e.lstrip(".").upper() for e in settings.upload.extensions)

    dropzone = dcc.Upload(
        id="upload-dropzone",
        multiple=False,
        accept=",".join(settings.upload.extensions),
        children=dmc.Paper(
            dmc.Stack(
                [
                    DashIconify(icon="mdi:cloud-upload", width=48, height=48, color="gray"),
                    dmc.Text(
                        "Drag and drop an image here, or click to select",
                        ta="center",
                        size="sm",
                        c="gray",
                    ),
                    dmc.Text(
                        f"{accepted} - maximum file size: {_max_size_label()}",
                        ta="center",
                        size="xs",
                        c="gray",
                    ),
                ],
                align="center",
                gap="sm",
            ),
            withBorder=True,
            radius="md",
            p="xl",
            style={"borderStyle": "dashed", "cursor": "pointer"},
        ),
    )

    return page_container(
        dmc.Stack(
            [
                dmc.Title("Upload artwork", order=2),
                dropzone,
                html.Div(id="upload-file-info"),
                dmc.Progress(
                    id="upload-progress",
                    value=100,
                    striped=True,
                    animated=True,
                    color=colors["teal"],
                    style=HIDDEN,
                ),
                dmc.Text(id="upload-error", c="red", size="sm"),
                dmc.Group(
                    dmc.Button(
                        "Upload",
                        id="upload-submit",
                        n_clicks=0,
                        disabled=True,
                        color=colors["terracotta"],
                        leftSection=DashIconify(icon="mdi:upload", width=18),
                    ),
                    justify="flex-end",
                ),
                html.Div(id="upload-result"),
            ],
            gap="md",
        ),
        size="sm",
    )


def validate_upload(contents, filename):
    """
    Returns:
        An error message, or None if the file can be uploaded
    """
    if not contents or not filename:
        return "Please select an image to upload."

    extension = os.path.splitext(filename)[1].lower()
    if extension not in settings.upload.extensions:
        return f"Unsupported file type: {extension or 'unknown'}"

    try:
        _, content, _ = decode_upload(contents, filename)
    except ValueError:
        return "The selected file could not be read."

    if len(content) > settings.upload.max_size_bytes:
        return (
            f"File size ({len(content) / (1024 * 1024):.1f}MB) exceeds the "
            f"{_max_size_label()} limit"
        )
    return None


def describe_selected_file(contents, filename):
    """File info card (or alert) and whether the upload button is disabled."""
    if not contents or not filename:
        return [], True

    error = validate_upload(contents, filename)
    if error:
        return dmc.Alert(error, color="red", icon=DashIconify(icon="mdi:alert")), True

    _, content, _ = decode_upload(contents, filename)
    info = dmc.Card(
        dmc.Group(
            [
                html.Img(src=contents, style={"height": "64px", "borderRadius": "4px"}),
                dmc.Stack(
                    [
                        dmc.Text(filename, fw="bold", size="sm"),
                        dmc.Text(f"Size: {len(content) / 1024:.1f}KB", size="xs", c="gray"),
                    ],
                    gap="xs",
                ),
            ],
            gap="md",
            align="center",
        ),
        withBorder=True,
        shadow="xs",
        radius="md",
        p="sm",
    )
    return info, False


def ensure_fresh_token(session: UserSession):
    """Session with a valid ID token, refreshed when expired; None if refresh failed."""
    if not session.token_expired():
        return session

    refreshed = api_call_refresh_id_token(session)
    if refreshed is not None:
        set_props("local-store", {"data": refreshed.to_store()})
    return refreshed


def build_upload_result(url):
    return dmc.Card(
        [
            dmc.CardSection(
                html.Img(
                    src=build_image_url(url),
                    alt="Uploaded artwork",
                    style={"width": "100%", "maxHeight": "360px", "objectFit": "contain"},
                )
            ),
            dmc.Group(
                [
                    dmc.Text("Upload complete", fw=500, c=colors["green"]),
                    dcc.Link(
                        dmc.Button(
                            "View Gallery",
                            variant="light",
                            leftSection=DashIconify(icon="mdi:view-grid-outline", width=18),
                        ),
                        href="/",
                    ),
                ],
                justify="space-between",
                mt="md",
            ),
        ],
        withBorder=True,
        shadow="sm",
        radius="md",
        padding="md",
    )


def upload_artwork(local_data, contents, filename):
    """
    Returns:
        (result children, error message)
    """
    session = UserSession.from_store(local_data)
    if not session.logged_in:
        expire_session()
        raise PreventUpdate

    error = validate_upload(contents, filename)
    if error:
        return no_update, error

    session = ensure_fresh_token(session)
    if session is None:
        expire_session()
        raise PreventUpdate

    name, content, content_type = decode_upload(contents, filename)
    uploaded = api_call_upload_artwork(session, name, content, content_type)
    if uploaded is None:
        return no_update, "Upload failed. Please try again."

    if api_call_record_image(session, uploaded.url) is None:
        logger.warning(f"Uploaded {uploaded.url} but no image record was stored")

    return build_upload_result(uploaded.url), ""


def register_upload_callbacks(app):
    @app.callback(
        Output("upload-file-info", "children"),
        Output("upload-submit", "disabled"),
        Input("upload-dropzone", "contents"),
        State("upload-dropzone", "filename"),
        prevent_initial_call=True,
    )
    def handle_file_selection(contents, filename):
        return describe_selected_file(contents, filename)

    @app.callback(
        Output("upload-result", "children"),
        Output("upload-error", "children"),
        Input("upload-submit", "n_clicks"),
        State("local-store", "data"),
        State("upload-dropzone", "contents"),
        State("upload-dropzone", "filename"),
        running=[
            (Output("upload-submit", "loading"), True, False),
            (Output("upload-progress", "style"), {}, HIDDEN),
        ],
        prevent_initial_call=True,
    )
    def submit_upload(n_clicks, local_data, contents, filename):
        if not n_clicks:
            raise PreventUpdate
        return upload_artwork(local_data, contents, filename)
