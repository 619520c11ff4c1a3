"""End-to-end gallery flows driven through the callback functions and store data."""

from unittest.mock import patch

import pytest
from dash import no_update
from dash.exceptions import PreventUpdate

from artprints.dash.modules.gallery_component.callbacks.core import (
    HIDDEN,
    INTERSECTION_TRIGGER,
    LOAD_MORE_TRIGGER,
    add_to_cart,
    advance_gallery,
    load_gallery_page,
    render_gallery,
)
from artprints.dash.modules.gallery_component.pagination import PaginationController
from artprints.dash.modules.gallery_component.sentinel import SentinelState
from artprints.models.artworks import Artwork


class GalleryHarness:
    """
    Holds the stores and the grid of one mount and runs callbacks in the order
    Dash does: a new ticket only patches the grid, the full render runs after
    the load has written the pagination and artworks stores.
    """

    def __init__(self, mount_id="mount-1"):
        controller, ticket = PaginationController.mount(mount_id)
        self.pagination = controller.state_to_store()
        self.artworks = []
        self.ticket = ticket.model_dump()
        self.sentinel = SentinelState(mount_id=mount_id).model_dump()
        self.rendered = None
        self.grid = []
        self.load_more_loading = True

    def load(self):
        self.pagination, self.artworks = load_gallery_page(
            self.ticket, self.pagination, self.artworks
        )
        self.render()

    def render(self):
        self.rendered = render_gallery(self.pagination, self.artworks, self.sentinel)
        self.grid = list(self.rendered[0])
        self.load_more_loading = self.rendered[2]
        if self.rendered[-1] is not no_update:
            self.sentinel = self.rendered[-1]

    def intersect(self, seq, generation=None, target=None):
        event = {
            "generation": self.sentinel["generation"] if generation is None else generation,
            "seq": seq,
            "target": target or self.sentinel["target"],
        }
        return self._advance(INTERSECTION_TRIGGER, event)

    def click_load_more(self):
        return self._advance(LOAD_MORE_TRIGGER, None)

    def _advance(self, trigger, event):
        """Returns True if a new ticket was issued."""
        try:
            pagination, ticket, sentinel, grid_patch, loading = advance_gallery(
                trigger, event, self.pagination, self.sentinel
            )
        except PreventUpdate:
            return False
        if sentinel is not no_update:
            self.sentinel = sentinel
        if ticket is no_update:
            return False
        self.pagination, self.ticket = pagination, ticket
        self._apply_grid_patch(grid_patch)
        self.load_more_loading = loading
        return True

    def _apply_grid_patch(self, grid_patch):
        for operation in grid_patch.to_plotly_json()["operations"]:
            assert operation["operation"] == "Extend"
            self.grid.extend(operation["params"]["value"])

    @property
    def end_message_visible(self):
        return self.rendered[3] != HIDDEN

    @property
    def skeleton_count(self):
        return sum("artwork-card-skeleton" in (c.className or "") for c in self.grid)


def _pages(artwork_page, *sizes):
    pages, start = {}, 0
    for number, size in enumerate(sizes, start=1):
        pages[number] = [Artwork.model_validate(a) for a in artwork_page(start, size)]
        start += size
    return pages


class TestGalleryScenarios:
    def setup_method(self):
        self.fetch_patcher = patch(
            "artprints.dash.modules.gallery_component.callbacks.core.api_call_fetch_artworks"
        )
        self.mock_fetch = self.fetch_patcher.start()

    def teardown_method(self):
        self.fetch_patcher.stop()

    def test_first_page_renders_cards(self, artwork_page):
        """24 records on page 1: 24 cards, no end message, no skeletons."""
        pages = _pages(artwork_page, 24)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()

        gallery.load()

        self.mock_fetch.assert_called_once_with(1)
        assert len(gallery.grid) == 24
        assert gallery.skeleton_count == 0
        assert not gallery.end_message_visible
        assert gallery.sentinel["target"] == "gallery-card-mount-1-23"

    def test_empty_second_page_exhausts_gallery(self, artwork_page):
        """Sentinel triggers page 2, which is empty: end message, no more requests."""
        pages = _pages(artwork_page, 24, 0)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()
        gallery.load()

        assert gallery.intersect(seq=1) is True
        assert gallery.pagination["page"] == 2
        gallery.load()

        assert gallery.pagination["has_more"] is False
        assert gallery.end_message_visible
        assert len(gallery.grid) == 24

        assert gallery.intersect(seq=2) is False
        assert gallery.click_load_more() is False
        assert [c.args[0] for c in self.mock_fetch.call_args_list] == [1, 2]

    def test_failed_first_page(self, artwork_page):
        """Page 1 fetch fails: loading cleared, list empty, no crash."""
        self.mock_fetch.return_value = None
        gallery = GalleryHarness()

        gallery.load()

        assert gallery.pagination["loading"] is False
        assert gallery.pagination["has_more"] is True
        assert gallery.artworks == []
        assert gallery.grid == []
        assert gallery.rendered[1] != HIDDEN  # "Load more" stays available

    def test_rapid_intersections_issue_one_fetch(self, artwork_page):
        """Two intersections before the page resolves: a single next-page fetch."""
        pages = _pages(artwork_page, 24, 24)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()
        gallery.load()

        assert gallery.intersect(seq=1) is True
        assert gallery.intersect(seq=2) is False
        gallery.load()

        assert [c.args[0] for c in self.mock_fetch.call_args_list] == [1, 2]
        assert len(gallery.artworks) == 48
        assert gallery.skeleton_count == 0

    def test_skeletons_shown_until_next_page_arrives(self, artwork_page):
        # Arrange
        pages = _pages(artwork_page, 24, 24)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()
        gallery.load()
        assert gallery.load_more_loading is False

        # Act
        gallery.intersect(seq=1)

        # Assert: the advance alone puts the grid in its in-flight state
        assert gallery.pagination["loading"] is True
        assert gallery.skeleton_count == 8
        assert len(gallery.grid) == 24 + 8
        assert gallery.grid[23].id == "gallery-card-mount-1-23"
        assert gallery.load_more_loading is True

        gallery.load()

        assert gallery.skeleton_count == 0
        assert len(gallery.grid) == 48
        assert gallery.load_more_loading is False

    def test_load_more_click_shows_skeletons(self, artwork_page):
        pages = _pages(artwork_page, 24)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()
        gallery.load()

        assert gallery.click_load_more() is True

        assert gallery.skeleton_count == 8
        assert gallery.load_more_loading is True

    def test_ignored_intersection_leaves_grid_alone(self, artwork_page):
        pages = _pages(artwork_page, 24)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()
        gallery.load()
        gallery.intersect(seq=1)

        # Second intersection while page 2 is in flight
        event = {
            "generation": gallery.sentinel["generation"],
            "seq": 2,
            "target": gallery.sentinel["target"],
        }
        pagination, ticket, sentinel, grid_patch, loading = advance_gallery(
            INTERSECTION_TRIGGER, event, gallery.pagination, gallery.sentinel
        )

        assert pagination is no_update
        assert ticket is no_update
        assert sentinel["last_event"] == 2
        assert grid_patch is no_update
        assert loading is no_update

    def test_retry_after_failure_requests_same_page(self, artwork_page):
        pages = _pages(artwork_page, 24, 24)
        responses = iter([pages[1], None, pages[2]])
        self.mock_fetch.side_effect = lambda page: next(responses)
        gallery = GalleryHarness()
        gallery.load()

        gallery.intersect(seq=1)
        gallery.load()
        assert gallery.pagination["last_load_failed"] is True

        assert gallery.click_load_more() is True
        gallery.load()

        assert [c.args[0] for c in self.mock_fetch.call_args_list] == [1, 2, 2]
        assert len(gallery.artworks) == 48

    def test_failed_load_does_not_rearm_sentinel(self, artwork_page):
        pages = _pages(artwork_page, 24)
        responses = iter([pages[1], None])
        self.mock_fetch.side_effect = lambda page: next(responses)
        gallery = GalleryHarness()
        gallery.load()
        generation = gallery.sentinel["generation"]

        gallery.intersect(seq=1)
        gallery.load()

        assert gallery.sentinel["generation"] == generation

    def test_stale_intersection_is_ignored(self, artwork_page):
        pages = _pages(artwork_page, 24)
        self.mock_fetch.side_effect = lambda page: pages[page]
        gallery = GalleryHarness()
        gallery.load()

        assert gallery.intersect(seq=1, generation=0, target="gallery-card-old-3") is False
        assert gallery.pagination["page"] == 1

    def test_ticket_from_previous_mount_is_discarded(self, artwork_page):
        self.mock_fetch.return_value = []
        gallery = GalleryHarness("current")
        stale_ticket = {"mount_id": "previous", "page": 1}

        with pytest.raises(PreventUpdate):
            load_gallery_page(stale_ticket, gallery.pagination, gallery.artworks)

        self.mock_fetch.assert_not_called()


class TestAddToCart:
    def test_adds_artwork(self):
        trigger = {"type": "gallery-add-to-cart", "index": "m-0", "artwork": "art-0"}

        cart, notifications = add_to_cart(trigger, 1, [])

        assert cart == ["art-0"]
        assert notifications[0]["title"] == "Added to cart"

    def test_adding_twice_is_noop(self):
        trigger = {"type": "gallery-add-to-cart", "index": "m-4", "artwork": "art-0"}

        cart, notifications = add_to_cart(trigger, 1, ["art-0"])

        assert cart == ["art-0"]
        assert notifications[0]["title"] == "Already in cart"

    def test_ignores_rerendered_buttons(self):
        trigger = {"type": "gallery-add-to-cart", "index": "m-0", "artwork": "art-0"}

        with pytest.raises(PreventUpdate):
            add_to_cart(trigger, 0, [])
