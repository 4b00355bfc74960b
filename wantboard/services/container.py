"""
Service wiring.

Builds the process-lifetime objects once: one throttle, one pair of
caches and one Scryfall client shared by every space, plus the store that
owns per-space state.
"""

from dataclasses import dataclass

import httpx
from fastapi import Request

from wantboard.config import Settings, settings
from wantboard.models.wants import WantListStore
from wantboard.services.catalog_cache import CatalogEntry, EditionEntry, FreshnessCache
from wantboard.services.catalog_resolver import CatalogResolver
from wantboard.services.request_throttle import RequestThrottle
from wantboard.services.scryfall_client import ScryfallClient
from wantboard.services.summary_publisher import InMemorySummaryPublisher
from wantboard.services.wants_commands import WantsCommandHandler
from wantboard.services.wants_executor import OperationExecutor


@dataclass
class WantBoardServices:
    throttle: RequestThrottle
    client: ScryfallClient
    card_cache: FreshnessCache[CatalogEntry]
    edition_cache: FreshnessCache[EditionEntry]
    resolver: CatalogResolver
    store: WantListStore
    publisher: InMemorySummaryPublisher
    handler: WantsCommandHandler

    async def aclose(self) -> None:
        await self.client.aclose()


def build_services(
    config: Settings = settings,
    http_client: httpx.AsyncClient | None = None,
) -> WantBoardServices:
    """
    Wire up a complete service graph from settings.

    Args:
        config: Settings to read limits and endpoints from
        http_client: Optional pre-built httpx client (tests, custom transports)
    """
    throttle = RequestThrottle(min_interval=config.request_spacing_seconds)
    client = ScryfallClient(
        throttle,
        base_url=config.scryfall_api_url,
        timeout=config.request_timeout_seconds,
        user_agent=config.user_agent,
        http_client=http_client,
    )

    ttl_seconds = config.cache_ttl_hours * 60 * 60
    card_cache: FreshnessCache[CatalogEntry] = FreshnessCache(
        ttl_seconds, max_entries=config.cache_max_entries
    )
    edition_cache: FreshnessCache[EditionEntry] = FreshnessCache(
        ttl_seconds, max_entries=config.cache_max_entries
    )
    resolver = CatalogResolver(client, card_cache, edition_cache)

    store = WantListStore()
    publisher = InMemorySummaryPublisher()
    handler = WantsCommandHandler(store, OperationExecutor(resolver), publisher)

    return WantBoardServices(
        throttle=throttle,
        client=client,
        card_cache=card_cache,
        edition_cache=edition_cache,
        resolver=resolver,
        store=store,
        publisher=publisher,
        handler=handler,
    )


def get_services(request: Request) -> WantBoardServices:
    """
    Dependency that provides the service graph built at startup.

    Usage in FastAPI:
        @router.get("/items")
        async def items(services: Annotated[WantBoardServices, Depends(get_services)]):
            ...
    """
    services: WantBoardServices = request.app.state.services
    return services
