"""
Summary publishing collaborator.

The command handler hands rendered summaries to a SummaryPublisher and
does not care whether publishing succeeds. A chat integration would
implement this by editing (or posting and pinning) a message; the
in-memory publisher backs the HTTP API and tests.
"""

import itertools
from typing import Protocol

from wantboard.models.wants import SpaceState


class SummaryPublisher(Protocol):
    async def publish(self, space_id: str, space: SpaceState, text: str) -> None:
        """Publish text as the space's current summary."""
        ...


class InMemorySummaryPublisher:
    """
    Keeps the latest published summary per space.

    Assigns `space.summary_location` on first publish and reuses it after,
    the way a chat publisher would reuse its pinned message.
    """

    def __init__(self) -> None:
        self._published: dict[str, str] = {}
        self._ids = itertools.count(1)
        self.publish_count = 0

    async def publish(self, space_id: str, space: SpaceState, text: str) -> None:
        if space.summary_location is None:
            space.summary_location = f"summary-{space_id}-{next(self._ids)}"
        self._published[space.summary_location] = text
        self.publish_count += 1

    def latest(self, space: SpaceState) -> str | None:
        """Last text published for the space, if any."""
        if space.summary_location is None:
            return None
        return self._published.get(space.summary_location)
