"""
Catalog Resolver: fuzzy user input to canonical Scryfall identities.

This is the trust boundary for card names and editions: nothing enters a
want list unless Scryfall recognised it.

INVARIANTS:
1. Fresh cache hits never touch the network
2. Stale cache rows read as absent and are overwritten on success
3. Failures are not cached
4. Every outbound call goes through the shared RequestThrottle
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from wantboard.models.failure import (
    CatalogNetworkError,
    KnownError,
    NetworkReason,
    ResolutionError,
    ResolutionReason,
)
from wantboard.services.catalog_cache import CatalogEntry, EditionEntry, FreshnessCache

logger = logging.getLogger(__name__)

# Card used to verify the catalog is reachable
CONNECTION_CHECK_CARD = "Lightning Bolt"


class CatalogClient(Protocol):
    """The Scryfall calls the resolver depends on."""

    async def named_card(self, name: str, set_code: str | None = None) -> dict[str, Any]: ...

    async def get_set(self, code: str) -> dict[str, Any]: ...

    async def search_sets(self, query: str) -> list[dict[str, Any]]: ...


@dataclass(frozen=True, slots=True)
class ResolvedCard:
    """
    Canonical identity of a card printing.

    Attributes:
        canonical_name: Exact card name from Scryfall
        edition_code: Set code of the printing Scryfall returned (lower-case)
        edition_name: Display name of that set
    """

    canonical_name: str
    edition_code: str
    edition_name: str


def card_cache_key(name: str, edition_id: str | None) -> str:
    """Cache key for a card query: lower-cased name, plus edition when given."""
    key = name.strip().lower()
    if edition_id:
        key += f"|{edition_id.strip().lower()}"
    return key


class CatalogResolver:
    """
    Resolves card names and edition identifiers through Scryfall.

    The caches are process-wide and shared by every space; pass the same
    instances to every resolver in the process.
    """

    def __init__(
        self,
        client: CatalogClient,
        card_cache: FreshnessCache[CatalogEntry],
        edition_cache: FreshnessCache[EditionEntry],
    ) -> None:
        self._client = client
        self._card_cache = card_cache
        self._edition_cache = edition_cache

    async def resolve_card(self, name: str, edition_id: str | None = None) -> ResolvedCard:
        """
        Resolve a possibly partial or misspelled card name.

        Args:
            name: Card name as typed by the user
            edition_id: Optional set code/name constraining the printing

        Returns:
            ResolvedCard for the matching printing

        Raises:
            ResolutionError: NOT_FOUND (edition-scoped when constrained) or AMBIGUOUS
            CatalogNetworkError: Transport or response failure
        """
        cache_key = card_cache_key(name, edition_id)
        cached = self._card_cache.get(cache_key)
        if cached is not None:
            logger.debug("CARD_CACHE_HIT", extra={"query": cache_key})
            return ResolvedCard(cached.canonical_name, cached.edition_code, cached.edition_name)

        try:
            payload = await self._client.named_card(name, edition_id)
        except ResolutionError as e:
            raise _card_resolution_error(name, edition_id, e.reason) from e

        if payload.get("object") != "card" or not payload.get("name") or not payload.get("set"):
            raise CatalogNetworkError(NetworkReason.PARSE_FAILED, "Invalid card response")

        entry = CatalogEntry(
            canonical_name=str(payload["name"]),
            edition_code=str(payload["set"]),
            edition_name=str(payload.get("set_name") or payload["set"]),
            fetched_at=self._card_cache.now(),
        )
        self._card_cache.set(cache_key, entry)

        logger.info(
            "CARD_RESOLVED",
            extra={"query": cache_key, "name": entry.canonical_name, "set": entry.edition_code},
        )
        return ResolvedCard(entry.canonical_name, entry.edition_code, entry.edition_name)

    async def resolve_edition(self, identifier: str) -> str:
        """
        Resolve a set code or set name to the set's display name.

        Order of attempts:
        1. Cache (by lower-cased identifier)
        2. Direct code lookup
        3. Set search: exact code/name match, then first substring match

        Raises:
            ResolutionError: NOT_FOUND once every path is exhausted
        """
        cache_key = identifier.strip().lower()
        cached = self._edition_cache.get(cache_key)
        if cached is not None:
            logger.debug("EDITION_CACHE_HIT", extra={"query": cache_key})
            return cached.edition_name

        try:
            payload = await self._client.get_set(identifier)
        except KnownError as e:
            logger.debug("EDITION_CODE_LOOKUP_FAILED", extra={"query": cache_key, "error": str(e)})
        else:
            if payload.get("object") == "set" and payload.get("name") and payload.get("code"):
                return self._remember_edition(cache_key, str(payload["name"]), str(payload["code"]))

        try:
            candidates = await self._client.search_sets(identifier)
        except KnownError as e:
            raise _edition_not_found(identifier) from e

        match = _pick_edition(candidates, cache_key)
        if match is None:
            raise _edition_not_found(identifier)

        return self._remember_edition(cache_key, str(match["name"]), str(match["code"]))

    def _remember_edition(self, cache_key: str, edition_name: str, edition_code: str) -> str:
        entry = EditionEntry(
            edition_name=edition_name,
            edition_code=edition_code,
            fetched_at=self._edition_cache.now(),
        )
        # Cache both forms so a later lookup by either skips the network
        self._edition_cache.set(cache_key, entry)
        self._edition_cache.set(edition_code.lower(), entry)

        logger.info("EDITION_RESOLVED", extra={"query": cache_key, "set": edition_code})
        return edition_name


def _pick_edition(candidates: list[dict[str, Any]], needle: str) -> dict[str, Any] | None:
    """Exact code/name match first, then the first substring match."""
    usable = [c for c in candidates if c.get("name") and c.get("code")]

    for candidate in usable:
        if str(candidate["code"]).lower() == needle or str(candidate["name"]).lower() == needle:
            return candidate

    for candidate in usable:
        if needle in str(candidate["name"]).lower() or needle in str(candidate["code"]).lower():
            return candidate

    return None


def _card_resolution_error(
    name: str, edition_id: str | None, reason: ResolutionReason
) -> ResolutionError:
    if reason is ResolutionReason.AMBIGUOUS:
        return ResolutionError(
            ResolutionReason.AMBIGUOUS,
            f'Card name "{name}" is ambiguous. Please be more specific.',
        )
    if edition_id:
        return ResolutionError(
            ResolutionReason.NOT_FOUND,
            f'Card "{name}" not found in set "{edition_id}"',
        )
    return ResolutionError(ResolutionReason.NOT_FOUND, f'Card "{name}" not found')


def _edition_not_found(identifier: str) -> ResolutionError:
    return ResolutionError(ResolutionReason.NOT_FOUND, f'Set "{identifier}" not found')


async def check_catalog_connection(resolver: CatalogResolver) -> bool:
    """
    Verify Scryfall is reachable by resolving a well-known card.

    Never raises; the outcome is logged and returned.
    """
    logger.info("Testing Scryfall API connection...")
    try:
        card = await resolver.resolve_card(CONNECTION_CHECK_CARD)
    except KnownError as e:
        logger.error("Scryfall API test failed: %s", e.message)
        return False

    logger.info("Scryfall API test successful: %s", card.canonical_name)
    return True
