"""
Wants Command Parser.

THIS MODULE HANDLES SYNTAX ONLY.

A command is one or more operations with no required separator:

    +1 Lightning Bolt (M25, foil) -2 Opt +3 Island

Grammar:
    command    := noise? operation*
    operation  := HEAD item_spec
    HEAD       := sign digits whitespace        sign in {+, -}
    item_spec  := name ( "(" modifier ("," modifier)* ")" )?
    modifier   := "foil" | edition

An item spec runs until the next HEAD or end of input. Modifiers are
lower-cased; the last non-foil modifier is the edition.

The parser never raises. Quantities and names are NOT validated here;
the executor checks bounds and the catalog resolves names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from wantboard.models.operation import Operation, Sign

# =============================================================================
# TOKENS
# =============================================================================


class TokenType(str, Enum):
    HEAD = "head"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Token:
    """
    A lexical unit of a wants command.

    HEAD tokens carry the sign and raw digits; TEXT tokens carry the
    untrimmed text between heads.
    """

    type: TokenType
    text: str
    sign: Sign | None = None
    digits: str | None = None


# =============================================================================
# PARSER
# =============================================================================


class WantsCommandParser:
    """
    Parser for wants command text.

    Usage:
        parser = WantsCommandParser()
        operations = parser.parse("+2 Lightning Bolt -1 Opt")
    """

    # "+2 " / "-10\t" marks an operation boundary
    _HEAD_PATTERN = re.compile(r"([+-])([0-9]+)\s+")

    # Whole input as exactly one operation
    _SINGLE_OPERATION_PATTERN = re.compile(r"^([+-])([0-9]+)\s+(.+)$", re.DOTALL)

    # "Lightning Bolt (M25, foil)" -> ("Lightning Bolt", "M25, foil")
    _ITEM_SPEC_PATTERN = re.compile(r"^(.+?)\s*(?:\(([^)]+)\))?\s*$", re.DOTALL)

    FOIL_MODIFIER = "foil"

    def parse(self, text: str) -> list[Operation]:
        """
        Parse a command into an ordered list of operations.

        Args:
            text: Raw command text

        Returns:
            Operations in input order. Empty list if nothing matched.
        """
        if not text or not text.strip():
            return []

        operations = self._parse_command(self.tokenize(text))
        if operations:
            return operations

        return self._parse_single_operation(text.strip())

    def tokenize(self, text: str) -> list[Token]:
        """Split text into HEAD and TEXT tokens, preserving order."""
        tokens: list[Token] = []
        position = 0

        for match in self._HEAD_PATTERN.finditer(text):
            if match.start() > position:
                tokens.append(Token(TokenType.TEXT, text[position : match.start()]))
            tokens.append(
                Token(
                    TokenType.HEAD,
                    match.group(0),
                    sign=Sign(match.group(1)),
                    digits=match.group(2),
                )
            )
            position = match.end()

        if position < len(text):
            tokens.append(Token(TokenType.TEXT, text[position:]))

        return tokens

    def _parse_command(self, tokens: list[Token]) -> list[Operation]:
        operations: list[Operation] = []
        index = 0

        # Skip anything before the first operation
        while index < len(tokens) and tokens[index].type is TokenType.TEXT:
            index += 1

        while index < len(tokens):
            operation, index = self._parse_operation(tokens, index)
            if operation is not None:
                operations.append(operation)

        return operations

    def _parse_operation(self, tokens: list[Token], index: int) -> tuple[Operation | None, int]:
        head = tokens[index]
        index += 1

        if index >= len(tokens) or tokens[index].type is not TokenType.TEXT:
            # HEAD immediately followed by another HEAD or end of input
            return None, index

        item_text = tokens[index].text.strip()
        index += 1
        if not item_text or head.sign is None or head.digits is None:
            return None, index

        return self._build_operation(head.sign, head.digits, item_text), index

    def _parse_single_operation(self, text: str) -> list[Operation]:
        match = self._SINGLE_OPERATION_PATTERN.match(text)
        if not match:
            return []

        sign, digits, item_text = match.groups()
        item_text = item_text.strip()
        if not item_text:
            return []

        return [self._build_operation(Sign(sign), digits, item_text)]

    def _build_operation(self, sign: Sign, digits: str, item_text: str) -> Operation:
        name, edition, finish = self.parse_item_spec(item_text)
        return Operation(
            sign=sign,
            quantity=int(digits),
            item_name=name,
            edition_id=edition,
            finish=finish,
        )

    def parse_item_spec(self, item_text: str) -> tuple[str, str | None, bool]:
        """
        Split an item spec into (name, edition, finish).

        Examples:
            "Lightning Bolt"              -> ("Lightning Bolt", None, False)
            "Lightning Bolt (M25, foil)"  -> ("Lightning Bolt", "m25", True)
            "Lightning Bolt (foil)"       -> ("Lightning Bolt", None, True)
        """
        item_text = item_text.strip()
        match = self._ITEM_SPEC_PATTERN.match(item_text)
        if not match:
            return item_text, None, False

        name = match.group(1).strip()
        modifiers = match.group(2)
        if modifiers is None:
            return name, None, False

        return (name, *self._parse_modifiers(modifiers))

    def _parse_modifiers(self, modifiers: str) -> tuple[str | None, bool]:
        edition: str | None = None
        finish = False

        for token in modifiers.split(","):
            token = token.strip().lower()
            if not token:
                continue
            if token == self.FOIL_MODIFIER:
                finish = True
            else:
                # Last edition wins; conflicting editions are not an error
                edition = token

        return edition, finish


_default_parser = WantsCommandParser()


def parse_wants_command(text: str) -> list[Operation]:
    """Convenience function: parse a wants command with the default parser."""
    return _default_parser.parse(text)
