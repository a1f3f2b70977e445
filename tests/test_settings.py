"""Tests for settings overrides and their silent fallbacks."""

import pytest


class TestSettings:

    def test_defaults(self):
        from src.config.settings import Settings

        s = Settings()

        assert s.lookback_days == 30
        assert s.per_firm_limit == 6
        assert s.firm_limit == 100
        assert s.max_concurrent_feeds == 6
        assert s.demo_on_fail is False
        assert s.output_path == "data/deals.json"

    @pytest.mark.parametrize("raw,expected", [
        ("14", 14),
        ("7.9", 7),
        ("abc", 30),
        ("nan", 30),
        ("inf", 30),
        ("", 30),
    ])
    def test_numeric_fallback(self, raw, expected):
        from src.config.settings import Settings

        assert Settings(lookback_days=raw).lookback_days == expected

    def test_concurrency_at_least_one(self):
        from src.config.settings import Settings

        assert Settings(max_concurrent_feeds="0").max_concurrent_feeds == 1
        assert Settings(max_concurrent_feeds="-4").max_concurrent_feeds == 1

    def test_invalid_timeout_falls_back(self):
        from src.config.settings import Settings

        assert Settings(feed_fetch_timeout="-3").feed_fetch_timeout == 15.0
        assert Settings(feed_fetch_timeout="soon").feed_fetch_timeout == 15.0
        assert Settings(feed_fetch_timeout="2.5").feed_fetch_timeout == 2.5

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("YES", True),
        ("1", True),
        ("y", True),
        ("false", False),
        ("No", False),
        ("0", False),
        ("maybe", False),
    ])
    def test_demo_flag(self, raw, expected):
        from src.config.settings import Settings

        assert Settings(demo_on_fail=raw).demo_on_fail is expected

    def test_env_override(self, monkeypatch):
        from src.config.settings import Settings

        monkeypatch.setenv("PER_FIRM_LIMIT", "3")

        assert Settings().per_firm_limit == 3
