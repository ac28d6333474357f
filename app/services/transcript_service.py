import re
from typing import Any, Dict, Optional

from app.models.transcript import TranscriptRequest
from app.services.upstream_client import UpstreamClient
from app.utils.clock import utc_timestamp
from app.utils.errors import InvalidParameter, MissingParameter
from app.utils.logger import logger

TICKER_PATTERN = re.compile(r"^[A-Z]{1,5}$")
# Leading integer, e.g. " 2024", "+3", "2024abc" -> 2024
LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?[0-9]+)")

MIN_YEAR, MAX_YEAR = 2000, 2030
MIN_QUARTER, MAX_QUARTER = 1, 4


def parse_leading_int(value: str) -> Optional[int]:
    match = LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else None


def parse_transcript_request(
    ticker: Optional[str],
    year: Optional[str],
    quarter: Optional[str],
) -> TranscriptRequest:
    """
    Validate raw query parameters.

    Presence is checked first (ticker, then year, then quarter), then the
    ticker format, the year range and the quarter range. The first failed
    check raises MissingParameter or InvalidParameter.
    """
    if not ticker:
        raise MissingParameter("Ticker symbol is required")
    if not year:
        raise MissingParameter("Year is required")
    if not quarter:
        raise MissingParameter("Quarter is required")

    ticker_upper = ticker.upper().strip()
    year_num = parse_leading_int(year)
    quarter_num = parse_leading_int(quarter)

    if not TICKER_PATTERN.match(ticker_upper):
        raise InvalidParameter("Ticker must be 1-5 letters")
    if year_num is None or not MIN_YEAR <= year_num <= MAX_YEAR:
        raise InvalidParameter(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    if quarter_num is None or not MIN_QUARTER <= quarter_num <= MAX_QUARTER:
        raise InvalidParameter(f"Quarter must be between {MIN_QUARTER} and {MAX_QUARTER}")

    return TranscriptRequest(ticker=ticker_upper, year=year_num, quarter=quarter_num)


async def fetch_transcript(client: UpstreamClient, request: TranscriptRequest) -> Dict[str, Any]:
    """Upstream transcript payload plus a `fetchedAt` timestamp."""
    logger.info(f"Fetching transcript for {request.label}...")
    data = await client.get_earnings_transcript(request.ticker, request.year, request.quarter)
    logger.info(f"✅ Successfully fetched transcript for {request.label}")
    return {**data, "fetchedAt": utc_timestamp()}
