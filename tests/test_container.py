"""Tests for settings and service wiring."""

import pytest

from wantboard.config import Settings
from wantboard.services.container import build_services


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.request_spacing_seconds == 0.1
        assert settings.request_timeout_seconds == 10.0
        assert settings.cache_ttl_hours == 24.0
        assert settings.cache_max_entries is None

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings come from WANTBOARD_* variables."""
        monkeypatch.setenv("WANTBOARD_CACHE_TTL_HOURS", "1")
        monkeypatch.setenv("WANTBOARD_CACHE_MAX_ENTRIES", "500")

        settings = Settings()

        assert settings.cache_ttl_hours == 1.0
        assert settings.cache_max_entries == 500


class TestBuildServices:
    async def test_one_throttle_and_cache_pair_shared(self) -> None:
        """Every space shares the process-wide throttle and caches."""
        services = build_services(Settings(cache_max_entries=2))
        try:
            assert services.handler is not None
            assert services.resolver._card_cache is services.card_cache
            assert services.resolver._edition_cache is services.edition_cache
            assert services.card_cache is not services.edition_cache
            assert len(services.store) == 0
        finally:
            await services.aclose()

    async def test_cache_ttl_from_hours(self) -> None:
        services = build_services(Settings(cache_ttl_hours=2))
        try:
            assert services.card_cache._ttl_seconds == 2 * 60 * 60
        finally:
            await services.aclose()
