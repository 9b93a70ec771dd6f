"""
SwapForm ties the catalog, selection, picker, quote engine and submission
together the way the swap screen uses them. All derived values are computed
on read, so they always reflect the current inputs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import settings
from .core import quote
from .core.catalog import PriceCatalog, default_selection
from .core.errors import FetchError, ParseError
from .core.models import Catalog, Feedback, SelectionPair, SubmissionStatus, SubmitResult, TokenRecord
from .core.selection import SelectionState
from .core.submission import SwapSubmission
from .core.token_filter import TokenPicker
from .providers.base import PriceSource, SwapExecutor
from .providers.prices import HttpPriceSource
from .providers.simulated import SimulatedSwapExecutor

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load token prices. Please refresh."

LABEL_ENTER_AMOUNT = "Enter Amount"
LABEL_SWAP = "Swap Now"
LABEL_SWAPPING = "Swapping..."


class SwapForm:
    """Currency swap form state."""

    def __init__(
        self,
        *,
        price_source: Optional[PriceSource] = None,
        executor: Optional[SwapExecutor] = None,
    ):
        self._catalog_loader = PriceCatalog(price_source or HttpPriceSource())
        self._executor = executor or SimulatedSwapExecutor()

        self.catalog = Catalog()
        self.selection = SelectionState()
        self.picker = TokenPicker(self.selection)
        self.submission = SwapSubmission(self._executor.execute)

        self.amount = ""
        self.loading = False
        self.load_notice: Optional[Feedback] = None

    # =========================================================================
    # Catalog
    # =========================================================================

    async def load_prices(self) -> bool:
        """Load the catalog and install the default selection.

        Returns False when the prices could not be loaded; the catalog is left
        empty, the selection unset, and a notice is shown. There is no
        automatic retry; call refresh() again.
        """
        self.loading = True
        self.load_notice = None
        try:
            catalog = await self._catalog_loader.load()
        except (FetchError, ParseError) as e:
            logger.error(f"Price load failed: {e.message}")
            self.catalog = Catalog()
            self.picker.catalog = self.catalog
            self.selection.reset()
            self.load_notice = Feedback.error(LOAD_FAILED_MESSAGE)
            return False
        finally:
            self.loading = False

        self.catalog = catalog
        self.picker.catalog = catalog
        self.selection.reset(default_selection(catalog))
        return True

    async def refresh(self) -> bool:
        return await self.load_prices()

    # =========================================================================
    # Inputs
    # =========================================================================

    @property
    def from_token(self) -> Optional[TokenRecord]:
        return self.selection.from_token

    @property
    def to_token(self) -> Optional[TokenRecord]:
        return self.selection.to_token

    def set_amount(self, text: str) -> None:
        self.amount = text

    def fill_max(self) -> None:
        self.amount = settings.max_amount_preset

    def swap_tokens(self) -> SelectionPair:
        return self.selection.swap()

    def select(self, slot: str, token: TokenRecord) -> SelectionPair:
        return self.selection.select(slot, token)

    def open_picker(self, slot: str) -> List[TokenRecord]:
        self.picker.open(slot, self.catalog)
        return self.picker.results

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def exchange_rate(self) -> float:
        return quote.rate(self.from_token, self.to_token)

    @property
    def output_amount(self) -> str:
        return quote.output_amount(self.amount, self.exchange_rate)

    @property
    def input_usd_value(self) -> str:
        return quote.usd_value(self.amount, self.from_token)

    @property
    def output_usd_value(self) -> str:
        return quote.usd_value(self.output_amount, self.to_token)

    @property
    def rate_label(self) -> Optional[str]:
        return quote.rate_label(self.from_token, self.to_token, self.exchange_rate)

    @property
    def is_submitting(self) -> bool:
        return self.submission.is_pending

    @property
    def can_submit(self) -> bool:
        return self.submission.check(self.selection.pair, self.amount) is None

    @property
    def button_label(self) -> str:
        if self.is_submitting:
            return LABEL_SWAPPING
        if not self.amount:
            return LABEL_ENTER_AMOUNT
        return LABEL_SWAP

    @property
    def feedback(self) -> Optional[Feedback]:
        state = self.submission.state
        if state.status == SubmissionStatus.SUCCEEDED:
            return Feedback.success(state.message or "")
        if state.status == SubmissionStatus.FAILED:
            return Feedback.error(state.message or "")
        return self.load_notice

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit(self) -> SubmitResult:
        result = await self.submission.submit(self.selection.pair, self.amount)
        if result.accepted:
            self.load_notice = None
        if result.clear_input:
            self.amount = ""
        return result
