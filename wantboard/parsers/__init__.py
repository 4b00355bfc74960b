from wantboard.parsers.wants_command import (
    Token,
    TokenType,
    WantsCommandParser,
    parse_wants_command,
)

__all__ = [
    "Token",
    "TokenType",
    "WantsCommandParser",
    "parse_wants_command",
]
