"""
Simulated swap execution.

Resolves after a fixed delay and succeeds with a configurable probability.
Tests inject a seeded or stubbed ``random.Random`` instead of relying on chance.
"""

import asyncio
import logging
import random
from typing import Optional

from ..config import settings
from ..core.errors import SubmissionFailure
from ..core.models import Receipt, TokenRecord
from .base import SwapExecutor

logger = logging.getLogger(__name__)

SIMULATED_TX_HASH = "0x123...abc"
SLIPPAGE_FAILURE_REASON = "Slippage tolerance exceeded. Please try again."


class SimulatedSwapExecutor(SwapExecutor):
    name = "simulated"

    def __init__(
        self,
        success_rate: Optional[float] = None,
        latency_s: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.success_rate = settings.simulated_success_rate if success_rate is None else success_rate
        self.latency_s = settings.simulated_latency_seconds if latency_s is None else latency_s
        self._rng = rng or random.Random()
        self.attempts = 0

    async def execute(self, from_token: TokenRecord, to_token: TokenRecord, amount: str) -> Receipt:
        self.attempts += 1
        if self.latency_s:
            await asyncio.sleep(self.latency_s)

        # random() is in [0, 1), so a rate of 1.0 always succeeds and 0.0 never does
        if self._rng.random() < self.success_rate:
            logger.debug(f"Simulated swap {amount} {from_token.currency} -> {to_token.currency} succeeded")
            return Receipt(status="success", tx_hash=SIMULATED_TX_HASH)

        logger.debug(f"Simulated swap {amount} {from_token.currency} -> {to_token.currency} failed")
        raise SubmissionFailure(SLIPPAGE_FAILURE_REASON)
