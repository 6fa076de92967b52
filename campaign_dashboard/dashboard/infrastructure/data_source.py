"""Infrastructure adapter that fetches the marketing data bundle."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from dashboard.config import DATA_SOURCE, FETCH_TIMEOUT_SECONDS
from dashboard.domain.errors import FetchError
from dashboard.domain.models import MarketingData

logger = logging.getLogger(__name__)

HTTP_SCHEMES: tuple[str, ...] = ("http://", "https://")


def _is_remote(location: str) -> bool:
    return location.lower().startswith(HTTP_SCHEMES)


def parse_marketing_data(raw: str | bytes) -> MarketingData:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FetchError(f"Marketing data is not valid JSON: {exc}") from exc
    try:
        return MarketingData.from_payload(payload)
    except (AttributeError, TypeError, ValueError) as exc:
        raise FetchError(f"Malformed marketing data: {exc}") from exc


class MarketingDataSource:
    """Single-attempt loader for a local JSON file or an HTTP(S) endpoint."""

    def __init__(
        self,
        location: str | Path = DATA_SOURCE,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.location = str(location)
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> MarketingData:
        if _is_remote(self.location):
            raw = await self._fetch_remote()
        else:
            raw = await self._read_local()
        data = parse_marketing_data(raw)
        logger.info("Fetched %d campaigns from %s", len(data.campaigns), self.location)
        return data

    async def _fetch_remote(self) -> bytes:
        client_kwargs: dict[str, Any] = {"timeout": self.timeout, "follow_redirects": True}
        if self._transport is not None:
            client_kwargs["transport"] = self._transport
        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.get(self.location)
                response.raise_for_status()
                return response.content
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Marketing data request failed with status {exc.response.status_code}: {self.location}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Marketing data request failed: {exc}") from exc

    async def _read_local(self) -> str:
        path = Path(self.location)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(f"Unable to read marketing data from {path}: {exc}") from exc


async def fetch_marketing_data() -> MarketingData:
    """Fetch the bundle from the configured ``DASHBOARD_DATA_SOURCE``."""
    return await MarketingDataSource().fetch()
