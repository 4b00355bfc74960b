import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient

from wantboard.config import Settings
from wantboard.main import app
from wantboard.models.failure import ResolutionError, ResolutionReason
from wantboard.services.catalog_resolver import ResolvedCard
from wantboard.services.container import WantBoardServices, build_services, get_services


class FakeResolver:
    """
    In-memory resolver keyed by lower-cased query.

    Unknown names raise NOT_FOUND the way CatalogResolver reports them.
    """

    def __init__(
        self,
        cards: dict[str, ResolvedCard] | None = None,
        editions: dict[str, str] | None = None,
    ) -> None:
        self.cards = cards or {}
        self.editions = editions or {}
        self.card_calls: list[tuple[str, str | None]] = []
        self.edition_calls: list[str] = []

    async def resolve_card(self, name: str, edition_id: str | None = None) -> ResolvedCard:
        self.card_calls.append((name, edition_id))
        card = self.cards.get(name.lower())
        if card is None:
            raise ResolutionError(ResolutionReason.NOT_FOUND, f'Card "{name}" not found')
        if edition_id:
            return ResolvedCard(card.canonical_name, edition_id, self.editions.get(edition_id, ""))
        return card

    async def resolve_edition(self, identifier: str) -> str:
        self.edition_calls.append(identifier)
        edition_name = self.editions.get(identifier.lower())
        if edition_name is None:
            raise ResolutionError(ResolutionReason.NOT_FOUND, f'Set "{identifier}" not found')
        return edition_name


@pytest.fixture
def fake_resolver() -> FakeResolver:
    """Resolver knowing a handful of common cards and sets."""
    return FakeResolver(
        cards={
            "lightning bolt": ResolvedCard("Lightning Bolt", "m25", "Masters 25"),
            "bolt": ResolvedCard("Lightning Bolt", "m25", "Masters 25"),
            "opt": ResolvedCard("Opt", "eld", "Throne of Eldraine"),
            "island": ResolvedCard("Island", "dmu", "Dominaria United"),
            "counterspell": ResolvedCard("Counterspell", "mh2", "Modern Horizons 2"),
        },
        editions={
            "m25": "Masters 25",
            "eld": "Throne of Eldraine",
            "2xm": "Double Masters",
            "dmu": "Dominaria United",
        },
    )


# =============================================================================
# API FIXTURES
# =============================================================================

SCRYFALL_CARDS = {
    "bolt": {"object": "card", "name": "Lightning Bolt", "set": "m25", "set_name": "Masters 25"},
    "lightning bolt": {
        "object": "card",
        "name": "Lightning Bolt",
        "set": "m25",
        "set_name": "Masters 25",
    },
    "opt": {"object": "card", "name": "Opt", "set": "eld", "set_name": "Throne of Eldraine"},
}


def scryfall_named(request: httpx.Request) -> httpx.Response:
    """Stand-in for GET /cards/named answering from SCRYFALL_CARDS."""
    card = SCRYFALL_CARDS.get(request.url.params.get("fuzzy", "").lower())
    if card is None:
        return httpx.Response(
            404,
            json={"object": "error", "code": "not_found", "status": 404, "details": "No card"},
        )
    set_code = request.url.params.get("set")
    if set_code:
        card = {**card, "set": set_code}
    return httpx.Response(200, json=card)


@pytest.fixture
def scryfall():
    """Mocked Scryfall API."""
    with respx.mock(base_url="https://api.scryfall.com", assert_all_called=False) as mock:
        mock.get("/cards/named", name="named").mock(side_effect=scryfall_named)
        yield mock


@pytest.fixture
async def services(scryfall):
    """Service graph wired to the mocked Scryfall API."""
    services = build_services(Settings(request_spacing_seconds=0.0))
    yield services
    await services.aclose()


@pytest.fixture
async def client(services: WantBoardServices):
    """Provide an async test client using the test service graph."""
    app.dependency_overrides[get_services] = lambda: services

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
