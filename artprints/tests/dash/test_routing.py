from unittest.mock import patch

import pytest
from dash import no_update

from artprints.dash.core.auth import process_authentication
from artprints.dash.layouts.auth_forms import parse_account_type


def _page_ids(component):
    """All string ids found in a component tree."""
    ids = []
    stack = [component]
    while stack:
        node = stack.pop()
        if isinstance(node, (list, tuple)):
            stack.extend(node)
            continue
        node_id = getattr(node, "id", None)
        if isinstance(node_id, str):
            ids.append(node_id)
        elif isinstance(node_id, dict):
            ids.append(node_id.get("type"))
        children = getattr(node, "children", None)
        if children is not None and not isinstance(children, str):
            stack.append(children)
    return ids


class TestRouteProtection:
    @pytest.mark.parametrize("pathname", ["/upload", "/profile", "/settings"])
    def test_protected_pages_redirect_to_signin(self, pathname):
        content, header, new_pathname, local_data = process_authentication(pathname, None)

        assert new_pathname == "/signin"
        assert "signin-submit" in _page_ids(content)
        assert local_data is no_update

    def test_gallery_is_public(self):
        content, _, new_pathname, _ = process_authentication("/", None)

        assert new_pathname is no_update
        assert "gallery-grid" in _page_ids(content)

    def test_unknown_page_falls_back_to_gallery(self):
        content, _, new_pathname, _ = process_authentication("/nowhere", None)

        assert new_pathname == "/"
        assert "gallery-grid" in _page_ids(content)

    def test_session_without_cookie_is_reset(self, signed_in_store):
        signed_in_store["session_cookie"] = None

        _, _, new_pathname, local_data = process_authentication("/profile", signed_in_store)

        assert new_pathname == "/signin"
        assert local_data["logged_in"] is False

    def test_signup_reads_account_type(self):
        content, _, _, _ = process_authentication("/signup", None, "?type=printshop")

        ids = _page_ids(content)
        assert "signup-account-type" in ids


class TestAuthenticatedRoutes:
    def setup_method(self):
        # Page factories only build layouts, no remote call happens while routing
        self.header_patcher = patch("artprints.dash.layouts.app_layout.create_header")
        self.mock_header = self.header_patcher.start()

    def teardown_method(self):
        self.header_patcher.stop()

    @pytest.mark.parametrize(
        "pathname, expected_id",
        [
            ("/upload", "upload-dropzone"),
            ("/profile", "profile-content"),
            ("/settings", "settings-save"),
            ("/", "gallery-grid"),
        ],
    )
    def test_member_pages(self, signed_in_store, pathname, expected_id):
        content, _, new_pathname, local_data = process_authentication(pathname, signed_in_store)

        assert new_pathname is no_update
        assert local_data is no_update
        assert expected_id in _page_ids(content)

    def test_signin_redirects_home_when_signed_in(self, signed_in_store):
        content, _, new_pathname, _ = process_authentication("/signin", signed_in_store)

        assert new_pathname == "/"
        assert "gallery-grid" in _page_ids(content)

    def test_header_receives_session(self, signed_in_store):
        process_authentication("/profile", signed_in_store)

        session, pathname = self.mock_header.call_args.args
        assert session.email == "artist@example.com"
        assert pathname == "/profile"


@pytest.mark.parametrize(
    "search, expected",
    [
        ("?type=printshop", "printshop"),
        ("?type=artist", "artist"),
        ("?type=admin", "artist"),
        ("", "artist"),
        (None, "artist"),
    ],
)
def test_parse_account_type(search, expected):
    assert parse_account_type(search) == expected
