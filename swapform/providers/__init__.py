from .base import PriceSource, SwapExecutor
from .prices import FilePriceSource, HttpPriceSource
from .simulated import SimulatedSwapExecutor

__all__ = [
    "PriceSource",
    "SwapExecutor",
    "HttpPriceSource",
    "FilePriceSource",
    "SimulatedSwapExecutor",
]
