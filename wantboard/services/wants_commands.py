"""
Wants command dispatch.

Entry point for the command front-end: takes one raw command from one
user in one space and returns the reply text plus whether shared state
changed. When it did, the summary is re-rendered and published.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from wantboard.config import MAX_QUANTITY, MAX_UNIQUE_CARDS
from wantboard.models.failure import CommandSyntaxError
from wantboard.models.wants import SpaceState, WantListStore
from wantboard.parsers.wants_command import WantsCommandParser
from wantboard.services.summary_publisher import SummaryPublisher
from wantboard.services.summary_renderer import render_summary
from wantboard.services.wants_executor import (
    FAILURE_PREFIX,
    SUCCESS_PREFIX,
    OperationExecutor,
)

logger = logging.getLogger(__name__)

CLEAR_COMMAND = "clear"
HELP_COMMAND = "help"

HELP_TEXT = f"""**WantBoard Commands**

**Add cards**
`+[number] [card name]`
`+[number] [card name] ([set])`
`+[number] [card name] ([set], foil)`
`+[number] [card name] (foil)`

**Remove cards**
`-[number] [card name]` with the same set/foil details you added it with,
e.g. `-1 Lightning Bolt (m25, foil)`

**Multiple operations**
`+1 Lightning Bolt (M25, foil) -2 Opt (eld) +4 Island`

**Clear all cards**
`clear` removes every card from your wants list

**Set specifications**
Set code `(M25)`, set name `(Masters 25)`, with finish `(M25, foil)`, or finish only `(foil)`

Card names and sets are validated against Scryfall and fuzzy-matched, so "bolt" finds \
"Lightning Bolt". Each card/set/foil combination is tracked separately: up to \
{MAX_UNIQUE_CARDS} different specifications, {MAX_QUANTITY} copies each."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Reply for the front-end."""

    result_text: str
    changed: bool


class WantsCommandHandler:
    """
    Dispatches wants commands against the store.

    Usage:
        handler = WantsCommandHandler(store, executor, publisher)
        result = await handler.handle("+2 Lightning Bolt", "u1", "Ana", "guild-1")
    """

    def __init__(
        self,
        store: WantListStore,
        executor: OperationExecutor,
        publisher: SummaryPublisher,
        parser: WantsCommandParser | None = None,
        renderer: Callable[[SpaceState], str] = render_summary,
    ) -> None:
        self._store = store
        self._executor = executor
        self._publisher = publisher
        self._parser = parser or WantsCommandParser()
        self._renderer = renderer

    async def handle(
        self,
        raw_text: str,
        user_id: str,
        display_name: str,
        space_id: str,
    ) -> CommandResult:
        """
        Handle one command.

        Known failures are reported in the result text. Anything else
        propagates to the caller's top-level handler.
        """
        space = self._store.space(space_id)
        text = raw_text.strip()

        if text.lower() == CLEAR_COMMAND:
            result = self.clear(space, user_id, display_name)
        elif not text or text.lower() == HELP_COMMAND:
            return CommandResult(HELP_TEXT, changed=False)
        else:
            operations = self._parser.parse(text)
            if not operations:
                error = CommandSyntaxError(text)
                logger.info("COMMAND_SYNTAX_ERROR", extra={"space_id": space_id})
                return CommandResult(f"{FAILURE_PREFIX} {error.message}", changed=False)

            batch = await self._executor.execute_batch(operations, space, user_id, display_name)
            result = CommandResult(batch.message(), changed=batch.changed)

        if result.changed:
            await self.publish_summary(space_id, space)

        return result

    def clear(self, space: SpaceState, user_id: str, display_name: str) -> CommandResult:
        """Remove the user's whole list."""
        want_list = space.clear_user(user_id)
        if want_list is None or not want_list.items:
            return CommandResult(f"{FAILURE_PREFIX} Your wants list is already empty.", False)

        count = len(want_list.items)
        return CommandResult(
            f"{SUCCESS_PREFIX} Cleared all {count} card specifications "
            f"from {display_name}'s wants list.",
            changed=True,
        )

    async def publish_summary(self, space_id: str, space: SpaceState) -> None:
        """
        Render and publish the space summary.

        Rendering errors propagate. Publishing errors are logged and
        dropped: the reply to the user does not depend on them.
        """
        text = self._renderer(space)
        try:
            await self._publisher.publish(space_id, space, text)
        except Exception:
            logger.exception("SUMMARY_PUBLISH_FAILED", extra={"space_id": space_id})
