"""
Error Types

Errors raised by the price catalog and the swap submission lifecycle.
Fetch and parse errors are non-fatal: the form turns them into a notice.
Invalid amounts are never raised; the submission guard rejects them silently.
"""

from typing import Any, Dict, Optional


class SwapFormError(Exception):
    """Base class for swapform errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(SwapFormError):
    """Price source unreachable or answered with a non-success status."""

    def __init__(
        self,
        message: str = "Failed to fetch prices",
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(SwapFormError):
    """Price payload could not be decoded into price records."""

    def __init__(self, message: str = "Malformed price payload", details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class SubmissionFailure(SwapFormError):
    """The swap execution dependency rejected an attempt.

    The reason is opaque and surfaced to the user verbatim.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidTransitionError(SwapFormError):
    """Submission state transition not allowed from the current state."""

    def __init__(self, from_state: Any, to_state: Any, message: str):
        super().__init__(message)
        self.from_state = from_state
        self.to_state = to_state

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fromState": getattr(self.from_state, "value", self.from_state),
            "toState": getattr(self.to_state, "value", self.to_state),
            "message": self.message,
        }
