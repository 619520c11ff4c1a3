"""
Gallery Component - Pagination Controller

Tracks which page of the artwork listing is loaded, whether more pages may
exist and whether a fetch is in flight. The state round-trips through a
dcc.Store, so the controller is rebuilt from plain dictionaries in every
callback.

State machine per mount::

    idle -> loading(page=1) -> { idle(has_more) <-> loading(page=n) } -> exhausted

``exhausted`` (``has_more`` false) is terminal for the mount.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from artprints.configs.logging_init import logger
from artprints.models.artworks import Artwork


class PaginationState(BaseModel):
    mount_id: str
    page: int = Field(default=1, ge=1)
    has_more: bool = True
    loading: bool = False
    last_load_failed: bool = False


class LoadTicket(BaseModel):
    """One fetch request, tied to the mount that issued it."""

    mount_id: str
    page: int = Field(ge=1)


def new_mount_id() -> str:
    return uuid.uuid4().hex


class PaginationController:
    """Owns page / has_more / loading and the accumulated artworks of one mount."""

    def __init__(self, state: PaginationState, artworks: list[Artwork] | None = None):
        self.state = state
        self.artworks: list[Artwork] = list(artworks or [])

    @classmethod
    def mount(cls, mount_id: str | None = None) -> tuple[PaginationController, LoadTicket]:
        """Create the state of a fresh mount and the ticket for page 1."""
        controller = cls(PaginationState(mount_id=mount_id or new_mount_id()))
        ticket = controller.begin_load()
        return controller, ticket

    @classmethod
    def from_stores(
        cls, state_data: dict[str, Any], artworks_data: list[dict[str, Any]] | None = None
    ) -> PaginationController:
        state = PaginationState.model_validate(state_data)
        artworks = [Artwork.model_validate(a) for a in artworks_data or []]
        return cls(state, artworks)

    @property
    def can_advance(self) -> bool:
        return not self.state.loading and self.state.has_more

    def advance(self) -> LoadTicket | None:
        """
        Move to the next page and start loading it.

        After a failed fetch the page number is kept, so the same page is
        requested again.

        Returns:
            The ticket for the page to load, or None when a fetch is in flight
            or the listing is exhausted (no-op)
        """
        if not self.can_advance:
            logger.debug(
                f"Advance ignored (page={self.state.page}, loading={self.state.loading}, "
                f"has_more={self.state.has_more})"
            )
            return None
        if not self.state.last_load_failed:
            self.state.page += 1
        return self.begin_load()

    def begin_load(self) -> LoadTicket:
        self.state.loading = True
        return LoadTicket(mount_id=self.state.mount_id, page=self.state.page)

    def accepts(self, ticket: LoadTicket) -> bool:
        """A response is applied only for the current mount, page and in-flight load."""
        return (
            ticket.mount_id == self.state.mount_id
            and ticket.page == self.state.page
            and self.state.loading
        )

    def complete_load(self, records: list[Artwork]) -> None:
        """Append a page; an empty page ends the listing."""
        known_ids = {a.id for a in self.artworks}
        duplicates = [r.id for r in records if r.id in known_ids]
        if duplicates:
            # Not deduplicated: page semantics (offset vs cursor) are the backend's call
            logger.warning(
                f"Page {self.state.page} repeats {len(duplicates)} artwork ids: {duplicates[:5]}"
            )

        self.artworks.extend(records)
        self.state.has_more = len(records) > 0
        self.state.loading = False
        self.state.last_load_failed = False

    def fail_load(self, reason: str | None = None) -> None:
        """Clear the loading flag; has_more and the list are left untouched."""
        logger.error(f"Loading page {self.state.page} failed: {reason or 'unknown error'}")
        self.state.loading = False
        self.state.last_load_failed = True

    def load(
        self, fetch_page: Callable[[int], list[Artwork] | None], ticket: LoadTicket | None = None
    ) -> bool:
        """
        Run one fetch cycle for the current page.

        Args:
            fetch_page: Returns the page records, or None on failure
            ticket: Ticket being served; defaults to a fresh one for the current page

        Returns:
            True if the response was applied, False if the ticket was stale
        """
        if ticket is None:
            ticket = self.begin_load()
        if not self.accepts(ticket):
            logger.debug(f"Discarding stale load ticket {ticket.model_dump()}")
            return False

        records = fetch_page(ticket.page)
        if records is None:
            self.fail_load("fetch returned no data")
        else:
            self.complete_load(records)
        return True

    def state_to_store(self) -> dict[str, Any]:
        return self.state.model_dump()

    def artworks_to_store(self) -> list[dict[str, Any]]:
        return [a.to_store() for a in self.artworks]
