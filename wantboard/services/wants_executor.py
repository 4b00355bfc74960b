"""
Operation Executor: applies parsed operations to want lists.

INVARIANTS:
- Operations in a batch run in order, one at a time
- A failed operation never blocks or rolls back its siblings
- A user's list holds at most MAX_UNIQUE_CARDS keys, each 1..MAX_QUANTITY
- A list that becomes empty is removed from its space

CONCURRENCY:
The only suspension points are catalog lookups in prepare_add. The user's
list is read after the lookup returns, and the read, the update and the
sync back into the space run without yielding. Two commands that add the
same key concurrently therefore both count: each sees the other's write
if it landed first.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from wantboard.config import MAX_CARD_NAME_LENGTH, MAX_QUANTITY, MAX_UNIQUE_CARDS
from wantboard.models.card_key import (
    KEY_DELIMITER,
    decode_card_key,
    encode_card_key,
    format_card_display,
)
from wantboard.models.failure import (
    CapacityError,
    KnownError,
    OperationValidationError,
    ResolutionError,
    ResolutionReason,
)
from wantboard.models.operation import Operation, Sign
from wantboard.models.wants import SpaceState, UserWantList
from wantboard.services.catalog_resolver import ResolvedCard

logger = logging.getLogger(__name__)

SUCCESS_PREFIX = "✅"
FAILURE_PREFIX = "❌"


class Resolver(Protocol):
    async def resolve_card(self, name: str, edition_id: str | None = None) -> ResolvedCard: ...

    async def resolve_edition(self, identifier: str) -> str: ...


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    """Result of applying one operation."""

    operation: Operation
    success: bool
    message: str


@dataclass
class BatchResult:
    """Outcomes of one command's operations, in input order."""

    outcomes: list[OperationOutcome] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True if any operation mutated state."""
        return any(outcome.success for outcome in self.outcomes)

    @property
    def successes(self) -> list[str]:
        return [o.message for o in self.outcomes if o.success]

    @property
    def failures(self) -> list[str]:
        return [o.message for o in self.outcomes if not o.success]

    def message(self) -> str:
        """Successes first, then failures, separated by a blank line."""
        blocks = ["\n".join(lines) for lines in (self.successes, self.failures) if lines]
        return "\n\n".join(blocks) or f"{FAILURE_PREFIX} No valid operations found."


class OperationExecutor:
    """
    Applies operations to a space's want lists.

    Usage:
        executor = OperationExecutor(resolver)
        batch = await executor.execute_batch(operations, space, user_id, display_name)
    """

    def __init__(
        self,
        resolver: Resolver,
        max_unique_cards: int = MAX_UNIQUE_CARDS,
        max_quantity: int = MAX_QUANTITY,
        max_name_length: int = MAX_CARD_NAME_LENGTH,
    ) -> None:
        self._resolver = resolver
        self._max_unique_cards = max_unique_cards
        self._max_quantity = max_quantity
        self._max_name_length = max_name_length

    async def execute_batch(
        self,
        operations: list[Operation],
        space: SpaceState,
        user_id: str,
        display_name: str,
    ) -> BatchResult:
        """
        Apply each operation independently and in order.

        A list is attached to the space on its first successful add and
        removed as soon as it is emptied.
        """
        batch = BatchResult()

        for operation in operations:
            outcome = await self.apply(operation, space, user_id, display_name)
            batch.outcomes.append(outcome)

        logger.info(
            "BATCH_APPLIED",
            extra={
                "user_id": user_id,
                "operations": len(operations),
                "succeeded": len(batch.successes),
                "failed": len(batch.failures),
            },
        )
        return batch

    async def apply(
        self,
        operation: Operation,
        space: SpaceState,
        user_id: str,
        display_name: str,
    ) -> OperationOutcome:
        """Apply one operation, converting known failures into a failure line."""
        logger.debug("APPLY_OPERATION", extra={"operation": operation.describe()})
        try:
            if operation.sign is Sign.ADD:
                key, display = await self.prepare_add(operation)
                want_list = space.want_list_for(user_id, display_name)
                message = self.apply_add(operation, key, display, want_list)
            else:
                want_list = space.want_list_for(user_id, display_name)
                message = self.apply_remove(operation, want_list)
            space.sync_user(user_id, want_list)
        except KnownError as e:
            logger.info(
                "OPERATION_FAILED",
                extra={"operation": operation.describe(), "kind": e.kind.value},
            )
            return OperationOutcome(operation, False, f"{FAILURE_PREFIX} {e.message}")

        return OperationOutcome(operation, True, f"{SUCCESS_PREFIX} {message}")

    async def prepare_add(self, operation: Operation) -> tuple[str, str]:
        """
        Validate an add and resolve it against the catalog.

        The key uses the canonical name, and the edition the user gave if
        any, else the edition of the printing Scryfall returned.

        Returns:
            (card key, display text)

        Raises:
            OperationValidationError: Empty/too-long name or quantity out of range
            ResolutionError / CatalogNetworkError: Catalog lookup failed
        """
        self._validate_add(operation)

        resolved = await self._resolver.resolve_card(operation.item_name, operation.edition_id)

        edition = operation.edition_id or resolved.edition_code
        edition_name = await self._edition_display_name(operation.edition_id, resolved)

        key = encode_card_key(resolved.canonical_name, edition, operation.finish)
        return key, decode_card_key(key).display(edition_name)

    def apply_add(
        self, operation: Operation, key: str, display: str, want_list: UserWantList
    ) -> str:
        """
        Add copies of a resolved card specification.

        Raises:
            CapacityError: New key while the list is full
        """
        current = want_list.items.get(key)
        if current is None:
            if len(want_list.items) >= self._max_unique_cards:
                raise CapacityError(self._max_unique_cards)
            want_list.items[key] = operation.quantity
            return f"Added **{operation.quantity}x {display}**."

        new_quantity = min(current + operation.quantity, self._max_quantity)
        want_list.items[key] = new_quantity
        return f"Updated **{display}** to {new_quantity} copies."

    def apply_remove(self, operation: Operation, want_list: UserWantList) -> str:
        """
        Remove copies of a card specification.

        Matching is case-insensitive on name and exact on edition and
        finish. No edition in the operation matches only keys without one.

        Raises:
            OperationValidationError: Empty list or non-positive quantity
            ResolutionError: No matching key
        """
        if not want_list.items:
            raise OperationValidationError("Your wants list is empty.")
        if operation.quantity <= 0:
            raise OperationValidationError(
                f'Quantity for "{operation.item_name}" must be greater than 0.'
            )

        wanted_name = operation.item_name.lower()
        for key, current in want_list.items.items():
            card = decode_card_key(key)
            if card.name.lower() != wanted_name:
                continue
            if card.edition != operation.edition_id:
                continue
            if card.foil != operation.finish:
                continue

            if operation.quantity >= current:
                del want_list.items[key]
                return f"Removed all copies of **{card.display()}**."

            remaining = current - operation.quantity
            want_list.items[key] = remaining
            return f"Removed {operation.quantity}x **{card.display()}**. ({remaining} remaining)"

        searched = format_card_display(operation.item_name, operation.edition_id, operation.finish)
        raise ResolutionError(
            ResolutionReason.NOT_FOUND, f"**{searched}** not found in your wants list."
        )

    def _validate_add(self, operation: Operation) -> None:
        name = operation.item_name
        if not name.strip():
            raise OperationValidationError("Card name cannot be empty.")
        if not 1 <= operation.quantity <= self._max_quantity:
            raise OperationValidationError(
                f'Quantity for "{name}" must be between 1 and {self._max_quantity}.'
            )
        if len(name) > self._max_name_length:
            raise OperationValidationError(
                f'Card name "{name}" is too long (max {self._max_name_length} characters).'
            )
        if operation.edition_id and KEY_DELIMITER in operation.edition_id:
            raise OperationValidationError(f'Invalid set "{operation.edition_id}".')

    async def _edition_display_name(
        self, explicit_edition: str | None, resolved: ResolvedCard
    ) -> str:
        """
        Display name for the edition stored in the key.

        When the user named a set that differs from the printing Scryfall
        returned, look the user's set up; fall back to the printing's name.
        """
        if not explicit_edition or explicit_edition.lower() == resolved.edition_code.lower():
            return resolved.edition_name
        try:
            return await self._resolver.resolve_edition(explicit_edition)
        except KnownError:
            return resolved.edition_name

