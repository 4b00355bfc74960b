"""
Summary Renderer.

Produces the shared wants summary for a space. Output depends only on
the state passed in, so rendering the same state twice yields the same
text.

Ordering:
- Users by display name, case-insensitively
- Cards by name, then edition code (cards without an edition last),
  then non-foil before foil
"""

from wantboard.config import SUMMARY_MAX_CHARS
from wantboard.models.card_key import CardKey
from wantboard.models.wants import SpaceState, UserWantList

TRUNCATION_MARKER = "\n\n*...list truncated due to length*"

EMPTY_SUMMARY = (
    "*No cards wanted yet. Use `+[number] [card name]` to add cards!*\n\n"
    "*Examples:*\n"
    "`+2 Lightning Bolt (M25)`\n"
    "`+1 Lightning Bolt (M25, foil)`\n"
    "`+3 Lightning Bolt (foil)`\n\n"
    "*You can also combine operations:*\n"
    "`+1 Lightning Bolt (M25, foil) -2 Opt`"
)


def render_summary(space: SpaceState, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """
    Render every user's wants as grouped text.

    Args:
        space: State to render (not modified)
        max_chars: Upper bound on the returned text, marker included

    Returns:
        Markdown text, or a placeholder with usage examples when empty
    """
    sections = [
        _render_user(want_list)
        for _, want_list in _sorted_users(space)
        if want_list.items
    ]
    if not sections:
        return EMPTY_SUMMARY

    return truncate_summary("\n\n".join(sections), max_chars)


def truncate_summary(text: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """Cut text to fit max_chars, always ending with the truncation marker when cut."""
    if len(text) <= max_chars:
        return text
    keep = max(max_chars - len(TRUNCATION_MARKER), 0)
    return text[:keep].rstrip() + TRUNCATION_MARKER


def summary_totals(space: SpaceState) -> tuple[int, int]:
    """Return (card specifications, total copies) across all users."""
    specifications = sum(len(w.items) for w in space.users.values())
    copies = sum(w.total_copies() for w in space.users.values())
    return specifications, copies


def summary_footer(space: SpaceState) -> str:
    specifications, copies = summary_totals(space)
    return f"{specifications} card specifications ({copies} total copies)"


def _sorted_users(space: SpaceState) -> list[tuple[str, UserWantList]]:
    return sorted(
        space.users.items(),
        key=lambda item: (item[1].display_name.casefold(), item[1].display_name, item[0]),
    )


def _card_sort_key(item: tuple[CardKey, int]) -> tuple[str, str, bool, str, bool]:
    card, _ = item
    return (
        card.name.casefold(),
        card.name,
        card.edition is None,
        card.edition or "",
        card.foil,
    )


def _render_user(want_list: UserWantList) -> str:
    lines = [
        f"• {quantity}x {card.display()}"
        for card, quantity in sorted(want_list.decoded_items(), key=_card_sort_key)
    ]
    return f"**{want_list.display_name}:**\n" + "\n".join(lines)
