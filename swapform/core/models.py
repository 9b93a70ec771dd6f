"""
Swap Form Models

Token records, the catalog, token selection and submission state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


FROM_SLOT = "from"
TO_SLOT = "to"
SLOTS: Tuple[str, ...] = (FROM_SLOT, TO_SLOT)


@dataclass(frozen=True)
class TokenRecord:
    """A named asset with an optional quoted price."""

    currency: str
    price: Optional[float] = None

    @property
    def is_priced(self) -> bool:
        # A zero price is as good as no price for conversions
        return bool(self.price)

    @property
    def icon_key(self) -> str:
        return self.currency

    @property
    def badge(self) -> str:
        """Text shown in place of the icon when it cannot be loaded."""
        return self.currency[:2]


@dataclass(frozen=True)
class Catalog:
    """Deduplicated token records in first-seen order."""

    records: Tuple[TokenRecord, ...] = ()
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TokenRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> TokenRecord:
        return self.records[index]

    @property
    def currencies(self) -> List[str]:
        return [record.currency for record in self.records]

    def get(self, currency: str) -> Optional[TokenRecord]:
        for record in self.records:
            if record.currency == currency:
                return record
        return None


@dataclass(frozen=True)
class SelectionPair:
    """Tokens assigned to the from/to slots."""

    from_token: Optional[TokenRecord] = None
    to_token: Optional[TokenRecord] = None

    @property
    def is_complete(self) -> bool:
        return self.from_token is not None and self.to_token is not None


class SubmissionStatus(str, Enum):
    """States of a swap submission."""

    IDLE = "idle"            # Nothing submitted, or previous outcome dismissed
    PENDING = "pending"      # Waiting on the execution dependency
    SUCCEEDED = "succeeded"  # Swap executed
    FAILED = "failed"        # Execution rejected

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionStatus.SUCCEEDED, SubmissionStatus.FAILED)


class RejectReason(str, Enum):
    """Why a submit request was ignored."""

    INVALID_AMOUNT = "invalid_amount"
    INCOMPLETE_SELECTION = "incomplete_selection"
    IN_FLIGHT = "in_flight"


@dataclass(frozen=True)
class SubmissionState:
    status: SubmissionStatus = SubmissionStatus.IDLE
    message: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == SubmissionStatus.PENDING


@dataclass
class SubmissionTransition:
    """Record of a submission state change."""

    from_status: SubmissionStatus
    to_status: SubmissionStatus
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fromStatus": self.from_status.value,
            "toStatus": self.to_status.value,
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
        }


@dataclass(frozen=True)
class Receipt:
    """What the execution dependency returns for a completed swap."""

    status: str = "success"
    tx_hash: Optional[str] = None


@dataclass
class SubmitResult:
    """Outcome of a submit request."""

    accepted: bool
    state: SubmissionState
    reject_reason: Optional[RejectReason] = None
    receipt: Optional[Receipt] = None
    clear_input: bool = False


@dataclass(frozen=True)
class Feedback:
    """Single user-visible notice."""

    kind: str  # "success" | "error"
    message: str

    @classmethod
    def success(cls, message: str) -> "Feedback":
        return cls(kind="success", message=message)

    @classmethod
    def error(cls, message: str) -> "Feedback":
        return cls(kind="error", message=message)
