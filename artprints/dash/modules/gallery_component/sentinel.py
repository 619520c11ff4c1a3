"""
Gallery Component - Visibility Sentinel

Decides which DOM node the browser-side IntersectionObserver watches and
turns reported intersections into page advances.

The browser half lives in ``callbacks/clientside.py``: whenever the sentinel
state changes it disconnects the previous observer and observes
``state.target``. Each observer is tagged with ``state.generation`` so that
events from a replaced observer are recognised and dropped here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from artprints.configs.logging_init import logger
from artprints.dash.modules.gallery_component.pagination import (
    LoadTicket,
    PaginationController,
    PaginationState,
)


class SentinelState(BaseModel):
    mount_id: str
    target: str | None = None
    generation: int = 0
    last_event: int = 0


class IntersectionEvent(BaseModel):
    """Reported by the browser when the observed node enters the viewport."""

    generation: int
    seq: int
    target: str


class VisibilitySentinel:
    def __init__(self, state: SentinelState):
        self.state = state

    @classmethod
    def from_store(cls, data: dict[str, Any] | None, mount_id: str) -> VisibilitySentinel:
        if not data:
            return cls(SentinelState(mount_id=mount_id))
        return cls(SentinelState.model_validate(data))

    def attach(self, target_id: str | None, pagination: PaginationState) -> bool:
        """
        Observe ``target_id`` instead of the current node.

        No-op while a page is loading, once the listing is exhausted, or when
        ``target_id`` is already observed (a failed load does not re-arm the
        observer, only a new intersection or a click retries).

        Returns:
            True if a new observer generation was created
        """
        if pagination.loading or not pagination.has_more:
            return False
        if target_id == self.state.target:
            return False
        if target_id is None:
            self.detach()
            return False

        # Disconnecting the previous observer is implied by the new generation
        self.state.generation += 1
        self.state.target = target_id
        return True

    def detach(self) -> None:
        if self.state.target is not None:
            self.state.generation += 1
        self.state.target = None

    def handle_intersection(
        self, event: IntersectionEvent, controller: PaginationController
    ) -> LoadTicket | None:
        """
        Advance the pagination once for a fresh intersection of the live observer.

        Returns:
            The ticket of the page to fetch, or None if nothing should be loaded
        """
        if event.generation != self.state.generation or event.target != self.state.target:
            logger.debug(
                f"Ignoring intersection from observer {event.generation} "
                f"(live: {self.state.generation})"
            )
            return None
        if event.seq <= self.state.last_event:
            return None

        self.state.last_event = event.seq
        return controller.advance()

    def to_store(self) -> dict[str, Any]:
        return self.state.model_dump()
