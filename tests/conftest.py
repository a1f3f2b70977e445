"""
Pytest fixtures for test infrastructure.

This module is automatically loaded by pytest and provides shared fixtures.
No test touches the network: feeds are served through httpx.MockTransport.
"""

from datetime import datetime, timedelta, timezone

import pytest


# =============================================================================
# Shared fixtures
# =============================================================================
@pytest.fixture
def run_time():
    """Fixed run timestamp so cutoffs and demo data are reproducible."""
    return datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def acme_firm():
    from src.config.firms import Firm
    return Firm(id="acme", name="Acme Ventures", hq_city="Boston", hq_state="MA")


@pytest.fixture
def unknown_hq_firm():
    """Firm whose HQ isn't in the gazetteer."""
    from src.config.firms import Firm
    return Firm(id="redpoint", name="Redpoint Ventures", hq_city="Woodside", hq_state="CA")


def rss_pub_date(value: datetime) -> str:
    return value.strftime("%a, %d %b %Y %H:%M:%S GMT")


def build_rss(items) -> str:
    """Render (title, link, pub_date, description, source) tuples as an RSS 2.0 feed."""
    rendered = []
    for title, link, pub_date, description, source in items:
        rendered.append(
            "<item>"
            f"<title>{title}</title>"
            f"<link>{link}</link>"
            f"<pubDate>{pub_date}</pubDate>"
            f"<description>{description}</description>"
            f'<source url="https://example.com">{source}</source>'
            "</item>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>News</title>'
        + "".join(rendered)
        + "</channel></rss>"
    )


@pytest.fixture
def feed_builder():
    """build_rss() plus the pubDate formatter, for tests that need custom feeds."""
    return build_rss, rss_pub_date


@pytest.fixture
def acme_feed_xml(run_time):
    """One qualifying Series A headline published a day before the run."""
    published = rss_pub_date(run_time - timedelta(days=1))
    return build_rss([
        (
            "Acme Ventures backs BrightGrid, a San Francisco, CA-based startup, in $25M Series A round",
            "https://news.example.com/brightgrid",
            published,
            "The round closed this week.",
            "Example News",
        ),
    ])


@pytest.fixture
def make_deal():
    """Factory for Deal objects with sensible defaults."""
    from src.analyst.schemas import Deal, ResolutionMethod

    def _make(**overrides):
        fields = dict(
            id="deal_test",
            firm_id="acme",
            firm_name="Acme Ventures",
            company="BrightGrid",
            title="BrightGrid raises $40M Series B",
            source_url="https://news.example.com/a",
            source_name="Example News",
            published_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
            stage="Series B",
            sector="Other",
            amount_usd_millions=40.0,
            confidence=0.7,
            city="San Francisco",
            state="CA",
            latitude=37.7749,
            longitude=-122.4194,
            resolution_method=ResolutionMethod.CITY_STATE_MATCH,
            location_confidence=0.8,
        )
        fields.update(overrides)
        return Deal(**fields)

    return _make
