"""Sign in / sign up pages and the sign out action.

Email and password are checked by the identity provider (Firebase Auth REST
API); the returned ID token is then exchanged at the backend for a session
cookie. The resulting ``UserSession`` is written to ``local-store``.
"""

from typing import Any
from urllib.parse import parse_qs

import dash_mantine_components as dmc
from dash import Input, Output, State, dcc, no_update
from dash.exceptions import PreventUpdate
from dash_iconify import DashIconify
from pydantic import ValidationError

from artprints.configs.logging_init import logger
from artprints.dash.api_calls import (
    AuthProviderError,
    api_call_firebase_sign_in,
    api_call_firebase_sign_up,
    api_call_session_login,
    api_call_session_logout,
)
from artprints.dash.colors import colors
from artprints.models.users import ACCOUNT_TYPES, UserSession

SIGN_IN_FALLBACK = "Failed to sign in. Please try again."
SIGN_UP_FALLBACK = "Failed to create the account. Please try again."

ACCOUNT_TYPE_LABELS = {"artist": "Artist", "printshop": "Print Shop"}


def parse_account_type(search: str | None) -> str:
    """Account type from a ``?type=`` query string, ``artist`` by default."""
    if not search:
        return ACCOUNT_TYPES[0]
    values = parse_qs(search.lstrip("?")).get("type", [])
    if values and values[0] in ACCOUNT_TYPES:
        return values[0]
    return ACCOUNT_TYPES[0]


def _form_paper(title: str, icon: str, children: list[Any]) -> dmc.Center:
    return dmc.Center(
        dmc.Paper(
            [
                dmc.Group(
                    [
                        DashIconify(icon=icon, width=32, color=colors["terracotta"]),
                        dmc.Title(title, order=2),
                    ],
                    gap="sm",
                    mb="lg",
                ),
                dmc.Stack(children, gap="md"),
            ],
            shadow="md",
            radius="lg",
            p="xl",
            withBorder=True,
            style={"width": "100%", "maxWidth": "420px"},
        ),
        style={"paddingTop": "4rem"},
    )


def create_signin_layout() -> dmc.Center:
    return _form_paper(
        "Sign in",
        "mdi:login",
        [
            dmc.TextInput(
                id="signin-email",
                label="Email",
                placeholder="you@example.com",
                type="email",
                required=True,
                leftSection=DashIconify(icon="mdi:email-outline"),
            ),
            dmc.PasswordInput(
                id="signin-password",
                label="Password",
                required=True,
                leftSection=DashIconify(icon="mdi:lock-outline"),
            ),
            dmc.Text(id="signin-error", c="red", size="sm"),
            dmc.Button(
                "Sign in",
                id="signin-submit",
                n_clicks=0,
                fullWidth=True,
                color=colors["terracotta"],
            ),
            dmc.Text(
                [
                    "No account yet? ",
                    dcc.Link("Join as an artist", href="/signup?type=artist"),
                ],
                size="sm",
                c="dimmed",
                ta="center",
            ),
        ],
    )


def create_signup_layout(account_type: str = "artist") -> dmc.Center:
    return _form_paper(
        "Join ArtPrints Kanairo",
        "mdi:account-plus-outline",
        [
            dmc.SegmentedControl(
                id="signup-account-type",
                value=account_type,
                data=[
                    {"value": value, "label": ACCOUNT_TYPE_LABELS[value]}
                    for value in ACCOUNT_TYPES
                ],
                fullWidth=True,
            ),
            dmc.TextInput(
                id="signup-email",
                label="Email",
                type="email",
                required=True,
                leftSection=DashIconify(icon="mdi:email-outline"),
            ),
            dmc.PasswordInput(
                id="signup-password",
                label="Password",
                required=True,
                leftSection=DashIconify(icon="mdi:lock-outline"),
            ),
            dmc.PasswordInput(
                id="signup-password-confirm",
                label="Confirm password",
                required=True,
                leftSection=DashIconify(icon="mdi:lock-check-outline"),
            ),
            dmc.Text(id="signup-error", c="red", size="sm"),
            dmc.Button(
                "Create account",
                id="signup-submit",
                n_clicks=0,
                fullWidth=True,
                color=colors["terracotta"],
            ),
            dmc.Text(
                ["Already registered? ", dcc.Link("Sign in", href="/signin")],
                size="sm",
                c="dimmed",
                ta="center",
            ),
        ],
    )


def _open_session(result, account_type: str | None, fallback: str) -> tuple[Any, Any, str]:
    cookie = api_call_session_login(result.id_token, account_type)
    if not cookie:
        return no_update, no_update, fallback

    session = UserSession.from_auth_result(result, cookie)
    logger.info(f"Signed in: {session.email}")
    return session.to_store(), "/", ""


def sign_in(email: str | None, password: str | None) -> tuple[Any, Any, str]:
    """
    Returns:
        (local-store, url pathname, error message)
    """
    if not email or not password:
        return no_update, no_update, "Please enter your email and password."

    try:
        result = api_call_firebase_sign_in(email, password)
    except AuthProviderError as e:
        return no_update, no_update, e.message
    except ValidationError:
        return no_update, no_update, "Please enter a valid email address."

    return _open_session(result, None, SIGN_IN_FALLBACK)


def sign_up(
    email: str | None, password: str | None, confirm: str | None, account_type: str | None
) -> tuple[Any, Any, str]:
    """
    Returns:
        (local-store, url pathname, error message)
    """
    if not email or not password:
        return no_update, no_update, "Please fill in all fields."
    if password != confirm:
        return no_update, no_update, "Passwords do not match."
    if account_type not in ACCOUNT_TYPES:
        account_type = ACCOUNT_TYPES[0]

    try:
        result = api_call_firebase_sign_up(email, password)
    except AuthProviderError as e:
        return no_update, no_update, e.message
    except ValidationError:
        return no_update, no_update, "Please enter a valid email address."

    return _open_session(result, account_type, SIGN_UP_FALLBACK)


def sign_out(local_data: dict[str, Any] | None) -> tuple[dict[str, Any], str]:
    """Revoke the backend session; the local session is cleared either way."""
    session = UserSession.from_store(local_data)
    if session.session_cookie and not api_call_session_logout(session):
        logger.warning(f"Backend logout failed for {session.email}, clearing local session")
    return UserSession().to_store(), "/signin"


def register_auth_callbacks(app):
    @app.callback(
        Output("local-store", "data", allow_duplicate=True),
        Output("url", "pathname", allow_duplicate=True),
        Output("signin-error", "children"),
        Input("signin-submit", "n_clicks"),
        State("signin-email", "value"),
        State("signin-password", "value"),
        running=[(Output("signin-submit", "loading"), True, False)],
        prevent_initial_call=True,
    )
    def submit_signin(n_clicks, email, password):
        if not n_clicks:
            raise PreventUpdate
        return sign_in(email, password)

    @app.callback(
        Output("local-store", "data", allow_duplicate=True),
        Output("url", "pathname", allow_duplicate=True),
        Output("signup-error", "children"),
        Input("signup-submit", "n_clicks"),
        State("signup-email", "value"),
        State("signup-password", "value"),
        State("signup-password-confirm", "value"),
        State("signup-account-type", "value"),
        running=[(Output("signup-submit", "loading"), True, False)],
        prevent_initial_call=True,
    )
    def submit_signup(n_clicks, email, password, confirm, account_type):
        if not n_clicks:
            raise PreventUpdate
        return sign_up(email, password, confirm, account_type)

    @app.callback(
        Output("local-store", "data", allow_duplicate=True),
        Output("url", "pathname", allow_duplicate=True),
        Input("logout-button", "n_clicks"),
        State("local-store", "data"),
        prevent_initial_call=True,
    )
    def logout_user_callback(n_clicks, local_data):
        if not n_clicks:
            raise PreventUpdate
        return sign_out(local_data)
