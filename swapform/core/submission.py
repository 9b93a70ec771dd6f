"""
Swap Submission

Lifecycle of a submitted swap:

    IDLE -> PENDING -> SUCCEEDED | FAILED -> IDLE -> PENDING ...

A submit is accepted only for a positive amount, a complete selection and
no attempt already in flight. Rejected submits change nothing and never
reach the execution dependency.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, Dict, List, Optional, Set

import structlog

from . import quote
from .errors import InvalidTransitionError, SubmissionFailure
from .models import (
    Receipt,
    RejectReason,
    SelectionPair,
    SubmissionState,
    SubmissionStatus,
    SubmissionTransition,
    SubmitResult,
    TokenRecord,
)

logger = structlog.stdlib.get_logger("swapform.submission")

ExecuteFn = Callable[[TokenRecord, TokenRecord, str], Coroutine[Any, Any, Receipt]]

CANCELLED_MESSAGE = "Swap cancelled"


def success_message(amount: str, from_token: TokenRecord, to_token: TokenRecord) -> str:
    converted = quote.output_amount(amount, quote.rate(from_token, to_token))
    return f"Successfully swapped {amount} {from_token.currency} to {converted} {to_token.currency}"


class SwapSubmission:
    """Single in-flight swap submission state machine."""

    TRANSITIONS: Dict[SubmissionStatus, Set[SubmissionStatus]] = {
        SubmissionStatus.IDLE: {
            SubmissionStatus.PENDING,
        },
        SubmissionStatus.PENDING: {
            SubmissionStatus.SUCCEEDED,
            SubmissionStatus.FAILED,
        },
        SubmissionStatus.SUCCEEDED: {
            SubmissionStatus.IDLE,  # Dismissed or superseded by a new submit
        },
        SubmissionStatus.FAILED: {
            SubmissionStatus.IDLE,
        },
    }

    def __init__(self, execute: ExecuteFn):
        """
        Args:
            execute: async callable ``(from_token, to_token, amount) -> Receipt``
                that performs one swap attempt
        """
        self._execute = execute
        self._state = SubmissionState()
        self.history: List[SubmissionTransition] = []

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def status(self) -> SubmissionStatus:
        return self._state.status

    @property
    def is_pending(self) -> bool:
        return self._state.is_pending

    def can_transition_to(self, to_status: SubmissionStatus) -> bool:
        return to_status in self.TRANSITIONS.get(self.status, set())

    def _transition(self, to_status: SubmissionStatus, message: Optional[str] = None) -> SubmissionTransition:
        from_status = self.status
        if not self.can_transition_to(to_status):
            allowed = sorted(s.value for s in self.TRANSITIONS.get(from_status, set()))
            raise InvalidTransitionError(
                from_state=from_status,
                to_state=to_status,
                message=f"Invalid transition from {from_status.value} to {to_status.value}. "
                        f"Allowed: {allowed}",
            )

        transition = SubmissionTransition(from_status=from_status, to_status=to_status, message=message)
        self._state = SubmissionState(status=to_status, message=message)
        self.history.append(transition)
        logger.info(
            "submission_transition",
            from_status=from_status.value,
            to_status=to_status.value,
            message=message,
        )
        return transition

    def dismiss(self) -> None:
        """Clear a finished outcome back to IDLE."""
        if self.status.is_terminal:
            self._transition(SubmissionStatus.IDLE)

    def check(self, selection: SelectionPair, amount: str) -> Optional[RejectReason]:
        """Reason a submit would be rejected right now, or None."""
        if self.is_pending:
            return RejectReason.IN_FLIGHT
        if not quote.is_submittable(amount):
            return RejectReason.INVALID_AMOUNT
        if not selection.is_complete:
            return RejectReason.INCOMPLETE_SELECTION
        return None

    async def submit(self, selection: SelectionPair, amount: str) -> SubmitResult:
        reject_reason = self.check(selection, amount)
        if reject_reason is not None:
            logger.debug("submission_rejected", reason=reject_reason.value, amount=amount)
            return SubmitResult(accepted=False, state=self._state, reject_reason=reject_reason)

        from_token = selection.from_token
        to_token = selection.to_token

        # Every event of this attempt, stdlib loggers included, carries the pair
        with structlog.contextvars.bound_contextvars(
            from_currency=from_token.currency,
            to_currency=to_token.currency,
            amount=amount,
        ):
            return await self._attempt(from_token, to_token, amount)

    async def _attempt(self, from_token: TokenRecord, to_token: TokenRecord, amount: str) -> SubmitResult:
        self.dismiss()
        self._transition(SubmissionStatus.PENDING)

        try:
            receipt = await self._execute(from_token, to_token, amount)
        except asyncio.CancelledError:
            self._transition(SubmissionStatus.FAILED, message=CANCELLED_MESSAGE)
            raise
        except SubmissionFailure as e:
            self._transition(SubmissionStatus.FAILED, message=e.reason)
            return SubmitResult(accepted=True, state=self._state)
        except Exception as e:
            logger.warning("submission_error", error_type=type(e).__name__, error=str(e))
            self._transition(SubmissionStatus.FAILED, message=str(e))
            return SubmitResult(accepted=True, state=self._state)

        self._transition(
            SubmissionStatus.SUCCEEDED,
            message=success_message(amount, from_token, to_token),
        )
        return SubmitResult(accepted=True, state=self._state, receipt=receipt, clear_input=True)
