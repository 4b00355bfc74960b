from dataclasses import dataclass
from enum import Enum


class Sign(str, Enum):
    """Direction of a wants operation."""

    ADD = "+"
    REMOVE = "-"


@dataclass(frozen=True, slots=True)
class Operation:
    """
    One add/remove directive parsed from a wants command.

    This is UNTRUSTED user input: quantity and name bounds are checked by
    the executor, and the name is resolved against the catalog before use.

    Attributes:
        sign: ADD or REMOVE
        quantity: Copies requested, exactly as typed
        item_name: Card name as typed (trimmed), possibly partial or misspelled
        edition_id: Lower-cased set code or set name, None if not given
        finish: True when the "foil" modifier was present
    """

    sign: Sign
    quantity: int
    item_name: str
    edition_id: str | None = None
    finish: bool = False

    def describe(self) -> str:
        """Short label used in logs and failure lines, e.g. "+2 Lightning Bolt"."""
        return f"{self.sign.value}{self.quantity} {self.item_name}"
