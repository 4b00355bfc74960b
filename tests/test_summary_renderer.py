"""Tests for summary rendering."""

from wantboard.models.wants import SpaceState, UserWantList
from wantboard.services.summary_renderer import (
    EMPTY_SUMMARY,
    TRUNCATION_MARKER,
    render_summary,
    summary_footer,
    summary_totals,
    truncate_summary,
)


def make_space(**users: tuple[str, dict[str, int]]) -> SpaceState:
    space = SpaceState()
    for user_id, (display_name, items) in users.items():
        space.users[user_id] = UserWantList(display_name=display_name, items=dict(items))
    return space


class TestRenderSummary:
    def test_empty_space(self) -> None:
        """An empty space renders the usage placeholder."""
        assert render_summary(SpaceState()) == EMPTY_SUMMARY

    def test_single_user(self) -> None:
        space = make_space(u1=("Ana", {"Lightning Bolt|m25|foil": 2}))

        assert render_summary(space) == "**Ana:**\n• 2x Lightning Bolt (m25, foil)"

    def test_users_sorted_by_display_name(self) -> None:
        """Users appear by display name, not by id or insertion order."""
        space = make_space(
            u1=("Zed", {"Opt||": 1}),
            u2=("Ana", {"Opt||": 1}),
            u3=("Mia", {"Opt||": 1}),
        )

        text = render_summary(space)

        assert text.index("**Ana:**") < text.index("**Mia:**") < text.index("**Zed:**")

    def test_user_order_ignores_case(self) -> None:
        """Lower-case names sort among capitalised ones."""
        space = make_space(
            u1=("Bob", {"Opt||": 1}),
            u2=("alice", {"Opt||": 1}),
            u3=("carol", {"Opt||": 1}),
        )

        text = render_summary(space)

        assert text.index("**alice:**") < text.index("**Bob:**") < text.index("**carol:**")

    def test_same_name_ties_broken_by_user_id(self) -> None:
        space = make_space(
            u2=("Ana", {"Island||": 1}),
            u1=("Ana", {"Opt||": 1}),
        )

        assert render_summary(space) == "**Ana:**\n• 1x Opt\n\n**Ana:**\n• 1x Island"

    def test_card_ordering(self) -> None:
        """Name, then editions by code with no-edition last, then non-foil before foil."""
        space = make_space(
            u1=(
                "Ana",
                {
                    "Opt||": 1,
                    "Lightning Bolt||foil": 1,
                    "Lightning Bolt||": 2,
                    "Lightning Bolt|m25|foil": 3,
                    "Lightning Bolt|2xm|": 4,
                    "Lightning Bolt|m25|": 5,
                },
            )
        )

        lines = render_summary(space).splitlines()[1:]

        assert lines == [
            "• 4x Lightning Bolt (2xm)",
            "• 5x Lightning Bolt (m25)",
            "• 3x Lightning Bolt (m25, foil)",
            "• 2x Lightning Bolt",
            "• 1x Lightning Bolt (foil)",
            "• 1x Opt",
        ]

    def test_sections_separated_by_blank_line(self) -> None:
        space = make_space(u1=("Ana", {"Opt||": 1}), u2=("Bo", {"Opt||": 2}))

        assert render_summary(space) == "**Ana:**\n• 1x Opt\n\n**Bo:**\n• 2x Opt"

    def test_deterministic(self) -> None:
        """Rendering identical state twice yields identical text."""
        space = make_space(
            u1=("Bo", {"Opt|eld|": 1, "Island||foil": 4}),
            u2=("Ana", {"Lightning Bolt|m25|": 2}),
        )

        assert render_summary(space) == render_summary(space)
        assert render_summary(SpaceState()) == render_summary(SpaceState())

    def test_does_not_modify_state(self) -> None:
        items = {"Opt|eld|": 1, "Island||": 2}
        space = make_space(u1=("Ana", items))

        render_summary(space)

        assert list(space.users["u1"].items) == list(items)

    def test_long_summary_is_truncated(self) -> None:
        """Oversized output is cut and ends with the marker."""
        space = make_space(
            **{
                f"u{i}": (f"User {i:03d}", {f"Card Number {j}|set|": 1 for j in range(20)})
                for i in range(30)
            }
        )

        text = render_summary(space)

        assert len(text) <= 4000
        assert text.endswith(TRUNCATION_MARKER)


class TestTruncateSummary:
    def test_short_text_unchanged(self) -> None:
        assert truncate_summary("hello", 10) == "hello"

    def test_exact_length_unchanged(self) -> None:
        assert truncate_summary("x" * 50, 50) == "x" * 50

    def test_marker_always_present_when_cut(self) -> None:
        text = truncate_summary("x" * 200, 100)

        assert len(text) == 100
        assert text.endswith(TRUNCATION_MARKER)


class TestTotals:
    def test_totals_and_footer(self) -> None:
        space = make_space(
            u1=("Ana", {"Opt||": 2, "Island||": 3}),
            u2=("Bo", {"Opt||": 4}),
        )

        assert summary_totals(space) == (3, 9)
        assert summary_footer(space) == "3 card specifications (9 total copies)"

    def test_empty(self) -> None:
        assert summary_totals(SpaceState()) == (0, 0)
