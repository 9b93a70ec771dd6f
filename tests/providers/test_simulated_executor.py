import random

import pytest
from unittest.mock import MagicMock

from swapform.core import SubmissionFailure, TokenRecord
from swapform.providers import SimulatedSwapExecutor
from swapform.providers.simulated import SIMULATED_TX_HASH, SLIPPAGE_FAILURE_REASON


ETH = TokenRecord("ETH", 3000.0)
USD = TokenRecord("USD", 1.0)


def rng_returning(value: float) -> random.Random:
    rng = MagicMock(spec=random.Random)
    rng.random.return_value = value
    return rng


@pytest.mark.asyncio
async def test_success_receipt():
    executor = SimulatedSwapExecutor(success_rate=0.9, latency_s=0, rng=rng_returning(0.5))

    receipt = await executor.execute(ETH, USD, "1")

    assert receipt.status == "success"
    assert receipt.tx_hash == SIMULATED_TX_HASH
    assert executor.attempts == 1


@pytest.mark.asyncio
async def test_failure_reason():
    executor = SimulatedSwapExecutor(success_rate=0.9, latency_s=0, rng=rng_returning(0.95))

    with pytest.raises(SubmissionFailure) as exc_info:
        await executor.execute(ETH, USD, "1")

    assert exc_info.value.reason == SLIPPAGE_FAILURE_REASON


@pytest.mark.asyncio
async def test_rate_bounds():
    always = SimulatedSwapExecutor(success_rate=1.0, latency_s=0, rng=rng_returning(0.999999))
    never = SimulatedSwapExecutor(success_rate=0.0, latency_s=0, rng=rng_returning(0.0))

    assert (await always.execute(ETH, USD, "1")).status == "success"
    with pytest.raises(SubmissionFailure):
        await never.execute(ETH, USD, "1")


@pytest.mark.asyncio
async def test_seeded_rng_is_reproducible():
    outcomes = []
    for _ in range(2):
        executor = SimulatedSwapExecutor(success_rate=0.5, latency_s=0, rng=random.Random(42))
        run = []
        for _ in range(20):
            try:
                await executor.execute(ETH, USD, "1")
                run.append(True)
            except SubmissionFailure:
                run.append(False)
        outcomes.append(run)

    assert outcomes[0] == outcomes[1]


@pytest.mark.asyncio
async def test_latency_is_awaited(monkeypatch):
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr("swapform.providers.simulated.asyncio.sleep", fake_sleep)
    executor = SimulatedSwapExecutor(success_rate=1.0, latency_s=1.5)

    await executor.execute(ETH, USD, "1")

    assert slept == [1.5]


def test_defaults_from_settings():
    from swapform.config import settings

    executor = SimulatedSwapExecutor()
    assert executor.success_rate == settings.simulated_success_rate
    assert executor.latency_s == settings.simulated_latency_seconds
