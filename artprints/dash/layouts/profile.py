import dash_bootstrap_components as dbc
import dash_mantine_components as dmc
from dash import Input, Output, State, dcc, html
from dash.exceptions import PreventUpdate
from dash_iconify import DashIconify

from artprints.configs.logging_init import logger
from artprints.dash.api_calls import SessionExpiredError, api_call_fetch_profile
from artprints.dash.colors import colors
from artprints.dash.layouts.layouts_toolbox import centered_message, expire_session
from artprints.dash.modules.gallery_component.feed import GRID_COLS, build_artwork_card
from artprints.dash.modules.gallery_component.utils import build_image_url
from artprints.models.users import ProfileResponse, UserSession

# Define consistent theme elements
CARD_SHADOW = "md"
CARD_RADIUS = "lg"
CARD_PADDING = "xl"
ICON_SIZE = 20

ROLE_COLORS = {"artist": "orange", "printshop": "teal", "admin": "red"}


def _profile_skeleton():
    return dmc.Stack(
        [
            dmc.Skeleton(height=180, radius=CARD_RADIUS),
            dmc.Group(
                [
                    dmc.Skeleton(height=96, circle=True),
                    dmc.Stack(
                        [dmc.Skeleton(height=20, width=220), dmc.Skeleton(height=14, width=160)],
                        gap="xs",
                    ),
                ]
            ),
            dmc.Skeleton(height=60),
        ],
        gap="md",
    )


def create_profile_layout():
    return dbc.Container(
        html.Div(_profile_skeleton(), id="profile-content"),
        fluid=True,
        className="py-4",
    )


def _info_row(icon, label, value):
    return dmc.Group(
        [
            DashIconify(icon=icon, width=ICON_SIZE, color=colors["indigo"]),
            dmc.Text(label, fw="bold", size="sm", c=colors["black"]),
            dmc.Text(value or "Not set", size="sm", c="dimmed" if not value else colors["black"]),
        ],
        gap="sm",
    )


def build_profile_view(profile: ProfileResponse):
    """Banner, identity block and the user's artworks."""
    user = profile.user

    banner_style = {
        "height": "180px",
        "borderRadius": "var(--mantine-radius-lg)",
        "backgroundColor": colors["sand"],
        "backgroundSize": "cover",
        "backgroundPosition": "center",
    }
    if user.background_url:
        banner_style["backgroundImage"] = f"url({build_image_url(user.background_url, width=1200)})"

    identity = dbc.Row(
        [
            dbc.Col(
                dmc.Avatar(
                    src=build_image_url(user.avatar_url, width=200) if user.avatar_url else None,
                    name=user.name or user.email,
                    size=96,
                    radius="xl",
                    color="initials",
                    style={"border": "4px solid white", "marginTop": "-48px"},
                ),
                width="auto",
                className="me-3",
            ),
            dbc.Col(
                dmc.Stack(
                    [
                        dmc.Group(
                            [dmc.Title(user.name or "Unnamed artist", order=2)]
                            + [
                                dmc.Badge(role, color=ROLE_COLORS.get(role, "gray"), variant="light")
                                for role in user.roles
                            ],
                            gap="sm",
                        ),
                        _info_row("mdi:email-outline", "Email", user.email),
                        _info_row("mdi:cake-variant-outline", "Date of birth", user.date_of_birth),
                    ],
                    gap="xs",
                )
            ),
        ],
        className="align-items-start",
    )

    if profile.artworks:
        artworks = dmc.SimpleGrid(
            [
                build_artwork_card(artwork, position, scope="profile", show_cart=False)
                for position, artwork in enumerate(profile.artworks)
            ],
            cols=GRID_COLS,
            spacing="lg",
        )
    else:
        artworks = centered_message("No artworks uploaded yet.")

    return dmc.Paper(
        [
            html.Div(style=banner_style),
            dmc.Box(identity, px="lg"),
            dmc.Text(user.description or "", mt="md", px="lg"),
            dmc.Divider(variant="dashed", my="lg"),
            dmc.Group(
                [
                    dmc.Title("My artworks", order=3),
                    dcc.Link(
                        dmc.Button(
                            "Upload",
                            variant="light",
                            leftSection=DashIconify(icon="mdi:cloud-upload-outline", width=ICON_SIZE),
                        ),
                        href="/upload",
                    ),
                ],
                justify="space-between",
                mb="md",
            ),
            artworks,
        ],
        shadow=CARD_SHADOW,
        radius=CARD_RADIUS,
        p=CARD_PADDING,
        withBorder=True,
    )


def render_profile(local_data):
    session = UserSession.from_store(local_data)
    if not session.is_authenticated:
        raise PreventUpdate

    try:
        profile = api_call_fetch_profile(session)
    except SessionExpiredError:
        expire_session()
        raise PreventUpdate

    if profile is None:
        return dmc.Alert(
            "Could not load your profile. Please try again later.",
            title="Profile unavailable",
            color="red",
            icon=DashIconify(icon="mdi:alert"),
        )

    logger.debug(f"Rendering profile of {session.email} with {len(profile.artworks)} artworks")
    return build_profile_view(profile)


def register_profile_callbacks(app):
    # Callback to populate the profile once the page is mounted
    @app.callback(
        Output("profile-content", "children"),
        Input("url", "pathname"),
        State("local-store", "data"),
    )
    def populate_profile(pathname, local_data):
        if pathname != "/profile":
            raise PreventUpdate
        return render_profile(local_data)
