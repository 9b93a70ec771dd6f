"""
Token Filter

Case-insensitive substring search over the catalog for the token picker.
Results are memoized on (catalog, query) so re-running the filter on every
keystroke or redraw only does work when one of them changed.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .models import SLOTS, Catalog, SelectionPair, TokenRecord
from .selection import SelectionState

logger = logging.getLogger(__name__)


def filter_tokens(catalog: Catalog, query: str) -> List[TokenRecord]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(catalog)
    return [record for record in catalog if needle in record.currency.lower()]


class TokenFilter:
    """Memoized filter_tokens."""

    def __init__(self):
        self._key: Optional[Tuple[Catalog, str]] = None
        self._result: List[TokenRecord] = []
        self.computations = 0

    def filter(self, catalog: Catalog, query: str) -> List[TokenRecord]:
        key = self._key
        # Catalogs are immutable, so identity is enough to detect a refresh
        if key is not None and key[0] is catalog and key[1] == query:
            return list(self._result)

        self._result = filter_tokens(catalog, query)
        self._key = (catalog, query)
        self.computations += 1
        return list(self._result)


class TokenPicker:
    """Picker state: which slot it is open for and the search query.

    Choosing a token assigns it to the open slot, closes the picker and
    clears the query, so the next open starts unfiltered.
    """

    def __init__(self, selection: SelectionState, token_filter: Optional[TokenFilter] = None):
        self._selection = selection
        self._filter = token_filter or TokenFilter()
        self.catalog = Catalog()
        self.slot: Optional[str] = None
        self.query = ""

    @property
    def is_open(self) -> bool:
        return self.slot is not None

    @property
    def results(self) -> List[TokenRecord]:
        return self._filter.filter(self.catalog, self.query)

    @property
    def is_empty(self) -> bool:
        return not self.results

    def open(self, slot: str, catalog: Optional[Catalog] = None) -> None:
        if slot not in SLOTS:
            raise ValueError(f"Unknown slot {slot!r}, expected one of {SLOTS}")
        if catalog is not None:
            self.catalog = catalog
        self.slot = slot

    def close(self) -> None:
        self.slot = None

    def search(self, query: str) -> List[TokenRecord]:
        self.query = query
        return self.results

    def choose(self, token: TokenRecord) -> SelectionPair:
        if self.slot is None:
            raise RuntimeError("Token picker is not open")
        pair = self._selection.select(self.slot, token)
        logger.debug(f"Picked {token.currency} for {self.slot}")
        self.close()
        self.query = ""
        return pair
