from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..core.models import Receipt, TokenRecord


class PriceSource(ABC):
    """Supplies the raw price list"""

    name: str

    @abstractmethod
    async def fetch(self) -> List[Dict[str, Any]]:
        """Return raw {currency, price} entries.

        Raises FetchError when the source is unreachable and ParseError
        when the payload is not a JSON list.
        """
        pass


class SwapExecutor(ABC):
    """Executes a swap on behalf of the form"""

    name: str

    @abstractmethod
    async def execute(self, from_token: TokenRecord, to_token: TokenRecord, amount: str) -> Receipt:
        """Execute one swap attempt.

        Raises SubmissionFailure (or any exception) with the reason to show.
        """
        pass
