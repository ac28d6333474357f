import math
from typing import Any, Dict, Optional

import httpx

from app.config import Settings
from app.utils.errors import UpstreamFailure, UpstreamNotFound
from app.utils.logger import logger


class UpstreamClient:
    """
    Async client for the financial-data API (prices and earnings transcripts).

    Authenticates with the configured key header. No retries; no timeout
    unless `upstream.timeout_seconds` is configured.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        api_key_header: str = "X-Api-Key",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={api_key_header: api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "UpstreamClient":
        return cls(
            api_key=settings.api_key,
            base_url=settings.upstream_base_url,
            api_key_header=settings.api_key_header,
            timeout=settings.upstream_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "UpstreamClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_stock_price(self, ticker: str) -> Dict[str, Any]:
        """
        Fetch the latest price for one ticker.
        Raises UpstreamFailure on a non-2xx status or a payload without a numeric price.
        """
        response = await self._client.get("/v1/stockprice", params={"ticker": ticker})
        if not response.is_success:
            raise UpstreamFailure(
                f"API request failed for {ticker}: {response.status_code} {response.reason_phrase}"
            )

        data = _json_or_none(response)
        if not isinstance(data, dict) or not _is_finite_number(data.get("price")):
            raise UpstreamFailure(f"Invalid data received for {ticker}")
        return data

    async def get_earnings_transcript(self, ticker: str, year: int, quarter: int) -> Dict[str, Any]:
        """
        Fetch one earnings-call transcript.
        Raises UpstreamNotFound on 404 and UpstreamFailure on any other error
        status or when the payload carries no transcript text.
        """
        response = await self._client.get(
            "/v1/earningstranscript",
            params={"ticker": ticker, "year": str(year), "quarter": str(quarter)},
        )
        label = f"{ticker} {year} Q{quarter}"
        if response.status_code == 404:
            raise UpstreamNotFound(
                f"No transcript found for {label}. The earnings call may not be "
                f"available yet or the parameters may be incorrect."
            )
        if not response.is_success:
            raise UpstreamFailure(f"API request failed: {response.status_code} {response.reason_phrase}")

        data = _json_or_none(response)
        if not isinstance(data, dict) or not data.get("transcript"):
            raise UpstreamFailure(f"No transcript data available for {label}")
        return data


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        logger.warning(f"⚠️ Non-JSON body from {response.request.url.path} (status {response.status_code})")
        return None


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False
