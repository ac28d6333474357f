import traceback
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.dependencies import get_upstream_client
from app.services.transcript_service import fetch_transcript, parse_transcript_request
from app.services.upstream_client import UpstreamClient
from app.utils.errors import ApiError, InternalError
from app.utils.logger import logger

router = APIRouter(prefix="/api")


@router.options("/transcript", include_in_schema=False)
async def transcript_preflight():
    return Response(status_code=200)


@router.get("/transcript")
async def get_transcript(
    ticker: Optional[str] = None,
    year: Optional[str] = None,
    quarter: Optional[str] = None,
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Earnings-call transcript for ticker/year/quarter, relayed with a `fetchedAt` timestamp."""
    logger.info(f"📡 Received transcript request: ticker={ticker} year={year} quarter={quarter}")

    try:
        request = parse_transcript_request(ticker, year, quarter)
    except ApiError as e:
        logger.warning(f"⚠️ Rejected transcript request: {e.message}")
        raise

    try:
        return await fetch_transcript(client, request)
    except ApiError as e:
        logger.error(f"❌ Error fetching transcript for {request.label}: {e.message}")
        e.details = traceback.format_exc()
        raise
    except Exception as e:
        logger.error(f"❌ Error in transcript API: {e}", exc_info=True)
        raise InternalError(str(e) or type(e).__name__, details=traceback.format_exc())
