"""
Scryfall API client.

Thin async wrapper over the three Scryfall endpoints WantBoard needs:

    GET /cards/named?fuzzy=<name>[&set=<code>]   fuzzy card lookup
    GET /sets/<code>                             direct set lookup
    GET /sets?q=<query>                          set list for fallback search

Every request is dispatched through the shared RequestThrottle.

API docs: https://scryfall.com/docs/api
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from wantboard.models.failure import (
    CatalogNetworkError,
    NetworkReason,
    ResolutionError,
    ResolutionReason,
)
from wantboard.services.request_throttle import RequestThrottle

logger = logging.getLogger(__name__)

SCRYFALL_API = "https://api.scryfall.com"
USER_AGENT = "WantBoard/1.0"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Messages the resolver keys on; they are rewritten before reaching users
NOT_FOUND_MESSAGE = "Not found"
AMBIGUOUS_MESSAGE = "Ambiguous name"


class ScryfallClient:
    """
    Async Scryfall client sharing one connection pool and one throttle.

    Raises (from every lookup):
        ResolutionError: Scryfall answered not_found or ambiguous
        CatalogNetworkError: Timeout, connection failure, unparseable body,
            or any other Scryfall error code
    """

    def __init__(
        self,
        throttle: RequestThrottle,
        base_url: str = SCRYFALL_API,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._throttle = throttle
        self._timeout = timeout
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def named_card(self, name: str, set_code: str | None = None) -> dict[str, Any]:
        """Fuzzy-match a card name, optionally constrained to one set."""
        params = {"fuzzy": name.strip()}
        if set_code:
            params["set"] = set_code.strip()
        return await self._get_json("/cards/named", params)

    async def get_set(self, code: str) -> dict[str, Any]:
        """Look up a set by its code."""
        return await self._get_json(f"/sets/{quote(code.strip(), safe='')}")

    async def search_sets(self, query: str) -> list[dict[str, Any]]:
        """
        Fetch the set list for a free-text query.

        Returns the raw `data` entries; callers pick the match.
        """
        payload = await self._get_json("/sets", {"q": query})
        if payload.get("object") != "list":
            return []
        data: list[dict[str, Any]] = payload.get("data") or []
        return data

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        async def call() -> dict[str, Any]:
            return await self._request(path, params)

        return await self._throttle.enqueue(call)

    async def _request(self, path: str, params: dict[str, str] | None) -> dict[str, Any]:
        logger.info("SCRYFALL_REQUEST", extra={"path": path, "params": params or {}})

        try:
            async with asyncio.timeout(self._timeout):
                response = await self._client.get(path, params=params)
        except (httpx.TimeoutException, TimeoutError) as e:
            raise CatalogNetworkError(NetworkReason.TIMEOUT, "API request timed out") from e
        except httpx.RequestError as e:
            raise CatalogNetworkError(
                NetworkReason.CONNECT_FAILED, f"Failed to connect to API: {e}"
            ) from e

        if not response.content:
            raise CatalogNetworkError(
                NetworkReason.PARSE_FAILED, "Empty response from Scryfall API"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise CatalogNetworkError(
                NetworkReason.PARSE_FAILED, "Failed to parse API response"
            ) from e

        if not isinstance(payload, dict):
            raise CatalogNetworkError(NetworkReason.PARSE_FAILED, "Failed to parse API response")

        if response.status_code != 200:
            raise error_from_response(response.status_code, payload)

        return payload


def error_from_response(status_code: int, payload: dict[str, Any]) -> Exception:
    """
    Map a non-200 Scryfall response to a WantBoard error.

    Scryfall error objects look like:
        {"object": "error", "code": "not_found", "status": 404, "details": "..."}
    """
    if payload.get("object") == "error":
        code = payload.get("code")
        if code == "not_found":
            return ResolutionError(ResolutionReason.NOT_FOUND, NOT_FOUND_MESSAGE)
        if code == "ambiguous":
            return ResolutionError(ResolutionReason.AMBIGUOUS, AMBIGUOUS_MESSAGE)
        return CatalogNetworkError(
            NetworkReason.API_ERROR,
            str(payload.get("details") or f"API error: {code}"),
        )

    return CatalogNetworkError(
        NetworkReason.API_ERROR,
        f"HTTP {status_code}: {payload.get('message') or 'Unknown error'}",
    )
