import dash_mantine_components as dmc
from dash import html

from artprints.dash.modules.gallery_component.feed import (
    build_artwork_card,
    footer_state,
    pending_skeletons_patch,
    render_feed,
    sentinel_target,
)
from artprints.dash.modules.gallery_component.pagination import PaginationState
from artprints.dash.modules.gallery_component.utils import card_dom_id
from artprints.models.artworks import Artwork

VALID_BLURHASH = "LEHV6nWB2yk8pyo0adR*.7kCMdnj"


def _is_skeleton(card):
    return "artwork-card-skeleton" in (card.className or "")


def _artwork(**overrides):
    data = {
        "id": "a1",
        "title": "Sunset over Kanairo",
        "description": "Acrylic on canvas",
        "imageUrl": "https://images.example.com/a1.jpg",
        "artistID": "artist-1",
    }
    data.update(overrides)
    return Artwork.model_validate(data)


class TestArtworkCard:
    def test_card_sections_in_order(self):
        card = build_artwork_card(_artwork(price=2500), position=0, scope="m")

        image_section, title, description, price, cart = card.children
        assert isinstance(image_section, dmc.CardSection)
        assert title.children == "Sunset over Kanairo"
        assert title.truncate == "end"
        assert description.children == "Acrylic on canvas"
        assert description.lineClamp == 2
        assert price.children == "KES 2,500.00"
        assert cart.id == {"type": "gallery-add-to-cart", "index": "m-0", "artwork": "a1"}

    def test_image_sits_on_top_of_placeholder(self):
        card = build_artwork_card(_artwork(), position=0, scope="m")

        placeholder, image = card.children[0].children.children
        assert isinstance(placeholder, dmc.Skeleton)
        assert image.className == "artwork-image"
        assert image.src == "https://images.example.com/a1.jpg"

    def test_blurhash_placeholder(self):
        card = build_artwork_card(_artwork(blurhash=VALID_BLURHASH), position=0, scope="m")

        placeholder = card.children[0].children.children[0]
        assert isinstance(placeholder, html.Img)
        assert placeholder.src.startswith("data:image/png;base64,")

    def test_invalid_blurhash_falls_back_to_skeleton(self):
        card = build_artwork_card(_artwork(blurhash="not-a-hash"), position=0, scope="m")

        assert isinstance(card.children[0].children.children[0], dmc.Skeleton)

    def test_optional_fields_are_omitted(self):
        card = build_artwork_card(
            _artwork(description=None), position=0, scope="m", show_cart=False
        )

        assert len(card.children) == 2

    def test_dom_id_only_when_requested(self):
        plain = build_artwork_card(_artwork(), position=0, scope="profile")
        observed = build_artwork_card(_artwork(), position=3, scope="m", dom_id="gallery-card-m-3")

        assert getattr(plain, "id", None) is None
        assert observed.id == "gallery-card-m-3"

    def test_duplicate_artworks_get_distinct_button_ids(self):
        first = build_artwork_card(_artwork(), position=0, scope="m")
        second = build_artwork_card(_artwork(), position=1, scope="m")

        assert first.children[-1].id != second.children[-1].id


class TestRenderFeed:
    def test_skeletons_follow_cards_while_loading(self):
        state = PaginationState(mount_id="m", page=2, loading=True)
        artworks = [_artwork(id=f"a{i}") for i in range(3)]

        cards = render_feed(artworks, state, skeleton_count=4)

        assert len(cards) == 7
        assert not any(_is_skeleton(c) for c in cards[:3])
        assert all(_is_skeleton(c) for c in cards[3:])

    def test_no_skeletons_when_idle(self):
        state = PaginationState(mount_id="m")

        cards = render_feed([_artwork()], state)

        assert len(cards) == 1
        assert cards[0].id == card_dom_id("m", 0)

    def test_footer_while_more_pages(self):
        footer = footer_state(PaginationState(mount_id="m", loading=True), 24)

        assert footer.show_load_more is True
        assert footer.load_more_loading is True
        assert footer.show_end_message is False
        assert footer.show_empty_message is False

    def test_footer_end_of_content(self):
        footer = footer_state(PaginationState(mount_id="m", has_more=False), 24)

        assert footer.show_load_more is False
        assert footer.show_end_message is True
        assert footer.show_empty_message is False

    def test_footer_empty_gallery(self):
        footer = footer_state(PaginationState(mount_id="m", has_more=False), 0)

        assert footer.show_end_message is False
        assert footer.show_empty_message is True

    def test_sentinel_targets_last_card(self):
        state = PaginationState(mount_id="m")

        assert sentinel_target(state, 24) == "gallery-card-m-23"
        assert sentinel_target(state, 0) is None

    def test_pending_skeletons_patch_appends_to_grid(self):
        patch = pending_skeletons_patch(skeleton_count=3)

        operations = patch.to_plotly_json()["operations"]

        assert len(operations) == 1
        assert operations[0]["operation"] == "Extend"
        assert operations[0]["location"] == []
        assert len(operations[0]["params"]["value"]) == 3
        assert all(_is_skeleton(c) for c in operations[0]["params"]["value"])
