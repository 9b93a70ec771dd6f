"""
Tests for the Price Catalog

Tests for deduplication, payload validation and default token selection.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from swapform.core import (
    Catalog,
    FetchError,
    ParseError,
    PriceCatalog,
    TokenRecord,
    build_catalog,
    default_selection,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def raw_prices():
    """Price feed with duplicates and an unpriced token."""
    return [
        {"currency": "BLUR", "date": "2023-08-29T07:10:40.000Z", "price": 0.20811525423728813},
        {"currency": "ETH", "date": "2023-08-29T07:10:52.000Z", "price": 1645.9337373737374},
        {"currency": "USD", "date": "2023-08-29T07:10:30.000Z", "price": 1},
        {"currency": "ETH", "date": "2023-08-29T07:10:40.000Z", "price": 1700.0},
        {"currency": "BTC", "price": None},
        {"currency": "BLUR", "price": 0.3},
    ]


def make_source(payload=None, error=None):
    source = MagicMock()
    source.name = "fake"
    if error is not None:
        source.fetch = AsyncMock(side_effect=error)
    else:
        source.fetch = AsyncMock(return_value=payload)
    return source


# =============================================================================
# build_catalog
# =============================================================================

class TestBuildCatalog:
    """Tests for catalog normalization."""

    def test_one_record_per_currency(self, raw_prices):
        catalog = build_catalog(raw_prices)

        assert catalog.currencies == ["BLUR", "ETH", "USD", "BTC"]
        assert len(catalog) == 4

    def test_first_occurrence_wins(self, raw_prices):
        catalog = build_catalog(raw_prices)

        assert catalog.get("ETH").price == pytest.approx(1645.9337373737374)
        assert catalog.get("BLUR").price == pytest.approx(0.20811525423728813)

    def test_missing_price_kept_as_none(self, raw_prices):
        catalog = build_catalog(raw_prices)

        btc = catalog.get("BTC")
        assert btc is not None
        assert btc.price is None
        assert btc.is_priced is False

    def test_extra_fields_ignored(self, raw_prices):
        catalog = build_catalog(raw_prices)
        assert catalog.get("USD") == TokenRecord(currency="USD", price=1.0)

    def test_empty_payload(self):
        catalog = build_catalog([])
        assert len(catalog) == 0
        assert catalog.currencies == []

    def test_price_omitted_entirely(self):
        catalog = build_catalog([{"currency": "ATOM"}])
        assert catalog[0] == TokenRecord(currency="ATOM", price=None)

    @pytest.mark.parametrize(
        "payload",
        [
            [{"price": 1.0}],
            [{"currency": "", "price": 1.0}],
            [{"currency": "ETH", "price": "not-a-number"}],
            ["ETH"],
            [None],
        ],
    )
    def test_malformed_entries_raise_parse_error(self, payload):
        with pytest.raises(ParseError) as exc_info:
            build_catalog(payload)

        assert exc_info.value.details

    @pytest.mark.parametrize(
        "payload",
        [
            [{"currency": "ETH", "price": True}],
            [{"currency": "ETH", "price": "3000"}],
            [{"currency": 42, "price": 1.0}],
        ],
    )
    def test_coercible_values_are_rejected(self, payload):
        with pytest.raises(ParseError):
            build_catalog(payload)

    def test_integer_prices_accepted(self):
        catalog = build_catalog([{"currency": "USD", "price": 1}])
        assert catalog[0].price == 1.0

    def test_non_iterable_payload_raises_parse_error(self):
        with pytest.raises(ParseError):
            build_catalog(42)

    def test_record_icon_helpers(self):
        token = TokenRecord(currency="SWTH", price=0.004)
        assert token.icon_key == "SWTH"
        assert token.badge == "SW"


# =============================================================================
# default_selection
# =============================================================================

class TestDefaultSelection:
    """Tests for initial from/to token resolution."""

    def test_prefers_eth_and_usd(self, raw_prices):
        pair = default_selection(build_catalog(raw_prices))

        assert pair.from_token.currency == "ETH"
        assert pair.to_token.currency == "USD"

    def test_falls_back_to_first_and_second(self):
        catalog = build_catalog([
            {"currency": "ATOM", "price": 7.2},
            {"currency": "OSMO", "price": 0.4},
            {"currency": "LUNA", "price": 0.5},
        ])

        pair = default_selection(catalog)

        assert pair.from_token.currency == "ATOM"
        assert pair.to_token.currency == "OSMO"

    def test_single_record_leaves_to_empty(self):
        catalog = build_catalog([{"currency": "ATOM", "price": 7.2}])

        pair = default_selection(catalog)

        assert pair.from_token.currency == "ATOM"
        assert pair.to_token is None

    def test_single_usd_record_still_found(self):
        catalog = build_catalog([{"currency": "USD", "price": 1}])

        pair = default_selection(catalog)

        assert pair.from_token.currency == "USD"
        assert pair.to_token.currency == "USD"

    def test_empty_catalog(self):
        pair = default_selection(Catalog())

        assert pair.from_token is None
        assert pair.to_token is None
        assert pair.is_complete is False

    def test_explicit_preferences(self, raw_prices):
        pair = default_selection(build_catalog(raw_prices), "BLUR", "BTC")

        assert pair.from_token.currency == "BLUR"
        assert pair.to_token.currency == "BTC"


# =============================================================================
# PriceCatalog.load
# =============================================================================

class TestPriceCatalogLoad:
    """Tests for loading through a price source."""

    @pytest.mark.asyncio
    async def test_load_builds_catalog(self, raw_prices):
        source = make_source(raw_prices)

        catalog = await PriceCatalog(source).load()

        source.fetch.assert_awaited_once()
        assert catalog.currencies == ["BLUR", "ETH", "USD", "BTC"]

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self):
        source = make_source(error=FetchError("boom", url="https://example.test", status_code=503))

        with pytest.raises(FetchError) as exc_info:
            await PriceCatalog(source).load()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_parse_error_propagates(self):
        source = make_source([{"price": 3}])

        with pytest.raises(ParseError):
            await PriceCatalog(source).load()

    @pytest.mark.asyncio
    async def test_generator_payload(self):
        def feed():
            yield {"currency": "ETH", "price": 3000}
            yield {"currency": "USD", "price": 1}
            yield {"currency": "ETH", "price": 3100}

        source = make_source(feed())

        catalog = await PriceCatalog(source).load()

        assert catalog.currencies == ["ETH", "USD"]
        assert catalog.get("ETH").price == 3000
