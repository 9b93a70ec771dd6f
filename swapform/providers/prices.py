import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from ..config import settings
from ..core.errors import FetchError, ParseError
from .base import PriceSource

logger = logging.getLogger(__name__)


def _ensure_list(data: Any, origin: str) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise ParseError(
            f"Expected a list of prices from {origin}, got {type(data).__name__}",
            details={"origin": origin},
        )
    return data


class HttpPriceSource(PriceSource):
    """Price list served as a JSON array over HTTP"""

    name = "http"

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url or settings.prices_url
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._client = client

    async def fetch(self) -> List[Dict[str, Any]]:
        if self._client is not None:
            response = await self._get(self._client)
        else:
            async with httpx.AsyncClient() as client:
                response = await self._get(client)

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Price payload from {self.url} is not valid JSON: {e}") from e

        return _ensure_list(data, self.url)

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        try:
            response = await client.get(self.url, timeout=self.timeout_s)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Price feed returned {e.response.status_code}: {self.url}")
            raise FetchError(
                "Failed to fetch prices",
                url=self.url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Price feed unreachable: {self.url} ({e})")
            raise FetchError("Failed to fetch prices", url=self.url) from e
        return response


class FilePriceSource(PriceSource):
    """Price list stored as a JSON array on disk"""

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def fetch(self) -> List[Dict[str, Any]]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FetchError(f"Cannot read price file: {e}", url=str(self.path)) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Price file {self.path} is not valid JSON: {e}") from e

        return _ensure_list(data, str(self.path))
