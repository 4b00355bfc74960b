"""
Check Scryfall connectivity.

Resolves a known card through the same throttle, client and resolver the
service uses. Exits non-zero if the catalog cannot be reached.
"""

import asyncio
import logging

from wantboard.services.catalog_resolver import check_catalog_connection
from wantboard.services.container import build_services

logger = logging.getLogger(__name__)


async def run_check() -> bool:
    """Run one connection check and release the HTTP client."""
    logger.info("Checking Scryfall connection...")

    services = build_services()
    try:
        return await check_catalog_connection(services.resolver)
    finally:
        await services.aclose()


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ok = asyncio.run(run_check())
    raise SystemExit(0 if ok else 1)


if __name__ == "__main__":
    main()
