import base64
from io import BytesIO
from unittest.mock import patch

from PIL import Image

from artprints.dash.modules.gallery_component.utils import (
    blurhash_data_uri,
    build_image_url,
    card_dom_id,
    format_price,
)

VALID_BLURHASH = "LEHV6nWB2yk8pyo0adR*.7kCMdnj"


class TestBuildImageUrl:
    def setup_method(self):
        self.settings_patcher = patch(
            "artprints.dash.modules.gallery_component.utils.settings"
        )
        self.mock_settings = self.settings_patcher.start()
        self.mock_settings.cloudinary.cloud_name = "kanairo"
        self.mock_settings.cloudinary.secure = True
        self.mock_settings.cloudinary.thumbnail_width = 600

    def teardown_method(self):
        self.settings_patcher.stop()

    def test_external_image_uses_fetch_delivery(self):
        url = build_image_url("https://images.example.com/a1.jpg")

        assert url.startswith("https://res.cloudinary.com/kanairo/image/fetch/")
        assert "w_600" in url
        assert "c_limit" in url
        assert "f_auto" in url
        assert "q_auto" in url
        assert url.endswith("https://images.example.com/a1.jpg")

    def test_explicit_width(self):
        assert "w_200" in build_image_url("https://images.example.com/a1.jpg", width=200)

    def test_cloudinary_urls_are_unchanged(self):
        original = "https://res.cloudinary.com/kanairo/image/upload/v1/art.jpg"

        assert build_image_url(original) == original

    def test_no_cloud_configured(self):
        self.mock_settings.cloudinary.cloud_name = None
        original = "https://images.example.com/a1.jpg"

        assert build_image_url(original) == original


class TestBlurhash:
    def test_decodes_to_png_of_requested_size(self):
        uri = blurhash_data_uri(VALID_BLURHASH, 16)

        assert uri.startswith("data:image/png;base64,")
        image = Image.open(BytesIO(base64.b64decode(uri.split(",", 1)[1])))
        assert image.size == (16, 16)
        assert image.mode == "RGB"

    def test_invalid_hash_returns_none(self):
        assert blurhash_data_uri("short") is None
        assert blurhash_data_uri("LEHV6nWB2yk8") is None


def test_format_price():
    assert format_price(1234.5, "KES") == "KES 1,234.50"
    assert format_price(0, "USD") == "USD 0.00"
    assert format_price(None) is None


def test_card_dom_id():
    assert card_dom_id("abc", 7) == "gallery-card-abc-7"
