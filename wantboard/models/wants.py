"""
Want list state.

State is volatile: it lives for the lifetime of the process and is
scoped per space (a Discord guild, in practice). Each space exclusively
owns its users' want lists.
"""

from dataclasses import dataclass, field
from typing import Any

from wantboard.models.card_key import CardKey, decode_card_key


@dataclass
class UserWantList:
    """
    One user's wanted cards in one space.

    Items map encoded card keys to wanted quantity (1-99). A list with no
    items is never kept in SpaceState.
    """

    display_name: str
    items: dict[str, int] = field(default_factory=dict)

    def decoded_items(self) -> list[tuple[CardKey, int]]:
        """Decoded keys with their quantities, in insertion order."""
        return [(decode_card_key(key), quantity) for key, quantity in self.items.items()]

    def total_copies(self) -> int:
        return sum(self.items.values())


@dataclass
class SpaceState:
    """
    All want lists for a single space.

    Attributes:
        users: user_id -> UserWantList (non-empty lists only)
        summary_location: Opaque handle owned by the summary publisher
    """

    users: dict[str, UserWantList] = field(default_factory=dict)
    summary_location: Any = None

    def want_list_for(self, user_id: str, display_name: str) -> UserWantList:
        """
        Get the user's attached list, or a new detached one.

        A new list is only attached once it holds an item (see sync_user).
        The stored display name is refreshed on every command.
        """
        want_list = self.users.get(user_id)
        if want_list is None:
            return UserWantList(display_name=display_name)
        want_list.display_name = display_name
        return want_list

    def sync_user(self, user_id: str, want_list: UserWantList) -> None:
        """Attach a non-empty list, or drop the user's entry once it is empty."""
        if want_list.items:
            self.users[user_id] = want_list
        elif self.users.get(user_id) is want_list:
            del self.users[user_id]

    def clear_user(self, user_id: str) -> UserWantList | None:
        """Remove and return the user's list, if any."""
        return self.users.pop(user_id, None)


class WantListStore:
    """Process-lifetime registry of SpaceState, created lazily per space."""

    def __init__(self) -> None:
        self._spaces: dict[str, SpaceState] = {}

    def space(self, space_id: str) -> SpaceState:
        """Get the state for a space, creating it on first use."""
        state = self._spaces.get(space_id)
        if state is None:
            state = SpaceState()
            self._spaces[space_id] = state
        return state

    def get(self, space_id: str) -> SpaceState | None:
        """Get the state for a space without creating it."""
        return self._spaces.get(space_id)

    def __len__(self) -> int:
        return len(self._spaces)
