"""
Swap Form Core

Price catalog, quote derivation, token search, selection and the swap
submission state machine.
"""

from .catalog import PriceCatalog, build_catalog, default_selection
from .errors import (
    FetchError,
    InvalidTransitionError,
    ParseError,
    SubmissionFailure,
    SwapFormError,
)
from .models import (
    Catalog,
    Feedback,
    Receipt,
    RejectReason,
    SelectionPair,
    SubmissionState,
    SubmissionStatus,
    SubmitResult,
    TokenRecord,
)
from .selection import SelectionState
from .submission import SwapSubmission
from .token_filter import TokenFilter, TokenPicker, filter_tokens

__all__ = [
    # Catalog
    "PriceCatalog",
    "build_catalog",
    "default_selection",
    # Selection & search
    "SelectionState",
    "TokenFilter",
    "TokenPicker",
    "filter_tokens",
    # Submission
    "SwapSubmission",
    # Models
    "Catalog",
    "Feedback",
    "Receipt",
    "RejectReason",
    "SelectionPair",
    "SubmissionState",
    "SubmissionStatus",
    "SubmitResult",
    "TokenRecord",
    # Errors
    "SwapFormError",
    "FetchError",
    "ParseError",
    "SubmissionFailure",
    "InvalidTransitionError",
]
