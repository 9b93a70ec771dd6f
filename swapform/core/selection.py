from __future__ import annotations

from typing import Optional

from .models import FROM_SLOT, SLOTS, TO_SLOT, SelectionPair, TokenRecord


class SelectionState:
    """Which token sits in the from/to slots.

    The pair is replaced as a whole on every change, so readers never see a
    half-applied swap. Nothing prevents from and to being the same token.
    """

    def __init__(self, pair: Optional[SelectionPair] = None):
        self._pair = pair or SelectionPair()

    @property
    def pair(self) -> SelectionPair:
        return self._pair

    @property
    def from_token(self) -> Optional[TokenRecord]:
        return self._pair.from_token

    @property
    def to_token(self) -> Optional[TokenRecord]:
        return self._pair.to_token

    def select(self, slot: str, token: Optional[TokenRecord]) -> SelectionPair:
        if slot == FROM_SLOT:
            self._pair = SelectionPair(from_token=token, to_token=self._pair.to_token)
        elif slot == TO_SLOT:
            self._pair = SelectionPair(from_token=self._pair.from_token, to_token=token)
        else:
            raise ValueError(f"Unknown slot {slot!r}, expected one of {SLOTS}")
        return self._pair

    def swap(self) -> SelectionPair:
        self._pair = SelectionPair(from_token=self._pair.to_token, to_token=self._pair.from_token)
        return self._pair

    def reset(self, pair: Optional[SelectionPair] = None) -> SelectionPair:
        self._pair = pair or SelectionPair()
        return self._pair
