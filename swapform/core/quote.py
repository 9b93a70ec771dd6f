"""
Quote Engine

Pure derivations of exchange rate, output amount and USD values from the
current token selection and the raw amount text. Nothing here raises:
missing inputs degrade to the "no quote" sentinels (rate 0, empty output).
"""

from __future__ import annotations

import math
import re
from typing import Optional

from .models import TokenRecord

NO_OUTPUT = ""

OUTPUT_DECIMALS = 6
USD_DECIMALS = 2
RATE_DECIMALS = 5
PRICE_DECIMALS = 4

# Optional sign, digits with optional fraction (or a bare fraction), optional exponent
_AMOUNT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_amount(raw_amount: Optional[str]) -> Optional[float]:
    """Parse user-typed amount text; None when it is not a finite number."""
    if raw_amount is None:
        return None
    text = str(raw_amount).strip()
    if not _AMOUNT_RE.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def is_submittable(raw_amount: Optional[str]) -> bool:
    value = parse_amount(raw_amount)
    return value is not None and value > 0


def rate(from_token: Optional[TokenRecord], to_token: Optional[TokenRecord]) -> float:
    if from_token is None or to_token is None:
        return 0.0
    if not from_token.is_priced or not to_token.is_priced:
        return 0.0
    return from_token.price / to_token.price


def output_amount(raw_amount: Optional[str], exchange_rate: float) -> str:
    """Converted amount as a 6-decimal display string, or NO_OUTPUT.

    The string is for display; re-parse it rather than feeding it back in.
    """
    value = parse_amount(raw_amount)
    if value is None or value < 0:
        return NO_OUTPUT
    result = value * exchange_rate
    if not math.isfinite(result):
        return NO_OUTPUT
    return f"{result:.{OUTPUT_DECIMALS}f}"


def usd_value(raw_amount: Optional[str], token: Optional[TokenRecord]) -> str:
    value = parse_amount(raw_amount)
    if value is None or value < 0 or token is None or not token.is_priced:
        return f"{0:.{USD_DECIMALS}f}"
    return f"{value * token.price:.{USD_DECIMALS}f}"


def rate_label(
    from_token: Optional[TokenRecord],
    to_token: Optional[TokenRecord],
    exchange_rate: float,
) -> Optional[str]:
    if exchange_rate <= 0 or from_token is None or to_token is None:
        return None
    return f"1 {from_token.currency} = {exchange_rate:.{RATE_DECIMALS}f} {to_token.currency}"


def price_label(token: TokenRecord) -> Optional[str]:
    if not token.is_priced:
        return None
    return f"${token.price:.{PRICE_DECIMALS}f}"

