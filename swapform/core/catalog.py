"""
Price Catalog

Turns the raw price list into a deduplicated, ordered catalog of token
records and resolves the form's default token selection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..config import settings
from .errors import ParseError
from .models import Catalog, SelectionPair, TokenRecord

if TYPE_CHECKING:
    from ..providers.base import PriceSource

logger = logging.getLogger(__name__)


class RawPrice(BaseModel):
    """One entry of the price feed. Extra keys (e.g. ``date``) are ignored.

    Strict: ``"3000"`` or ``true`` as a price is a malformed feed, not a number.
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    currency: str = Field(min_length=1)
    price: Optional[float] = Field(default=None, allow_inf_nan=False)


_RAW_PRICES = TypeAdapter(List[RawPrice])


def parse_prices(raw: Iterable[Dict[str, Any]]) -> List[RawPrice]:
    try:
        return _RAW_PRICES.validate_python(list(raw))
    except ValidationError as e:
        raise ParseError(
            f"Price payload has {e.error_count()} invalid entries",
            details=e.errors(include_url=False),
        ) from e
    except TypeError as e:
        raise ParseError(f"Price payload is not iterable: {e}") from e


def dedupe(entries: List[RawPrice]) -> Catalog:
    """Keep the first record per currency."""
    seen: Dict[str, TokenRecord] = {}
    for entry in entries:
        if entry.currency not in seen:
            seen[entry.currency] = TokenRecord(currency=entry.currency, price=entry.price)
    # dicts keep insertion order, so this is first-seen order
    return Catalog(records=tuple(seen.values()))


def build_catalog(raw: Iterable[Dict[str, Any]]) -> Catalog:
    """Validate raw entries and keep the first record per currency."""
    return dedupe(parse_prices(raw))


def default_selection(
    catalog: Catalog,
    from_currency: Optional[str] = None,
    to_currency: Optional[str] = None,
) -> SelectionPair:
    """Preferred currencies first, then the first and second records."""
    from_currency = from_currency or settings.default_from_currency
    to_currency = to_currency or settings.default_to_currency

    from_token = catalog.get(from_currency)
    if from_token is None and len(catalog) > 0:
        from_token = catalog[0]

    to_token = catalog.get(to_currency)
    if to_token is None and len(catalog) > 1:
        to_token = catalog[1]

    return SelectionPair(from_token=from_token, to_token=to_token)


class PriceCatalog:
    """Loads catalogs from a price source."""

    def __init__(self, source: "PriceSource"):
        self.source = source

    async def load(self) -> Catalog:
        """Fetch and normalize the price list.

        Raises:
            FetchError: source unreachable or non-success status
            ParseError: payload does not decode into price entries
        """
        entries = parse_prices(await self.source.fetch())
        catalog = dedupe(entries)
        logger.info(
            f"Loaded {len(catalog)} tokens from {self.source.name} source "
            f"({len(entries) - len(catalog)} duplicates dropped) at {catalog.loaded_at.isoformat()}"
        )
        return catalog
