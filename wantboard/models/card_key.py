"""
Card Key Codec.

A card key is the identity of one entry in a user's want list:
canonical name + edition + finish. Keys are stored as strings with three
fixed positions so that every key decodes back to exactly what encoded it:

    "Lightning Bolt|m25|foil"
    "Lightning Bolt||foil"
    "Opt||"

INVARIANTS:
- decode_card_key(encode_card_key(n, e, f)) == (n, e, f)
- Same (name, edition, finish) always yields the same key
- Any difference in the three fields yields a different key
"""

from dataclasses import dataclass

KEY_DELIMITER = "|"
FOIL_MARKER = "foil"


class CardKeyError(ValueError):
    """Raised when a card key cannot be encoded or decoded."""


@dataclass(frozen=True, slots=True)
class CardKey:
    """Decoded form of a card key."""

    name: str
    edition: str | None
    foil: bool

    def encode(self) -> str:
        return encode_card_key(self.name, self.edition, self.foil)

    def display(self, edition_name: str | None = None) -> str:
        """Human-readable form, preferring an edition display name when known."""
        return format_card_display(self.name, self.edition, self.foil, edition_name)


def encode_card_key(name: str, edition: str | None, foil: bool) -> str:
    """
    Encode (name, edition, foil) into a storage key.

    Args:
        name: Canonical card name from the catalog
        edition: Set code or set identifier, None for "any printing"
        foil: Finish flag

    Returns:
        Key string with exactly three delimiter-separated fields

    Raises:
        CardKeyError: If name is empty or a field contains the delimiter
    """
    if not name:
        raise CardKeyError("Card key name cannot be empty")
    if KEY_DELIMITER in name:
        raise CardKeyError(f"Card name may not contain {KEY_DELIMITER!r}: {name!r}")
    if edition is not None and (not edition or KEY_DELIMITER in edition):
        raise CardKeyError(f"Invalid edition for card key: {edition!r}")

    return KEY_DELIMITER.join([name, edition or "", FOIL_MARKER if foil else ""])


def decode_card_key(key: str) -> CardKey:
    """
    Decode a storage key produced by encode_card_key.

    Raises:
        CardKeyError: If the key does not have the three-field shape
    """
    parts = key.split(KEY_DELIMITER)
    if len(parts) != 3 or not parts[0] or parts[2] not in ("", FOIL_MARKER):
        raise CardKeyError(f"Malformed card key: {key!r}")

    name, edition, finish = parts
    return CardKey(name=name, edition=edition or None, foil=finish == FOIL_MARKER)


def format_card_display(
    name: str,
    edition: str | None,
    foil: bool,
    edition_name: str | None = None,
) -> str:
    """
    Format a card specification for display.

    Examples:
        Lightning Bolt (Masters 25, foil)
        Lightning Bolt (m25)
        Lightning Bolt (foil)
        Lightning Bolt
    """
    edition_display = edition_name or edition
    if edition_display:
        return f"{name} ({edition_display}{', foil' if foil else ''})"
    if foil:
        return f"{name} (foil)"
    return name
