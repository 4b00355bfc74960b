"""
WantBoard services.

Catalog resolution, want list operations and summary rendering.
"""

from wantboard.services.catalog_cache import CatalogEntry, EditionEntry, FreshnessCache
from wantboard.services.catalog_resolver import (
    CatalogResolver,
    ResolvedCard,
    check_catalog_connection,
)
from wantboard.services.request_throttle import RequestThrottle
from wantboard.services.scryfall_client import ScryfallClient
from wantboard.services.summary_publisher import InMemorySummaryPublisher, SummaryPublisher
from wantboard.services.summary_renderer import (
    render_summary,
    summary_footer,
    summary_totals,
    truncate_summary,
)
from wantboard.services.wants_commands import CommandResult, WantsCommandHandler
from wantboard.services.wants_executor import BatchResult, OperationExecutor, OperationOutcome

__all__ = [
    "BatchResult",
    "CatalogEntry",
    "CatalogResolver",
    "CommandResult",
    "EditionEntry",
    "FreshnessCache",
    "InMemorySummaryPublisher",
    "OperationExecutor",
    "OperationOutcome",
    "RequestThrottle",
    "ResolvedCard",
    "ScryfallClient",
    "SummaryPublisher",
    "WantsCommandHandler",
    "check_catalog_connection",
    "render_summary",
    "summary_footer",
    "summary_totals",
    "truncate_summary",
]
