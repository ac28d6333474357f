import traceback

from fastapi import APIRouter, Depends, Response

from app.api.dependencies import get_upstream_client
from app.config import Settings, get_settings
from app.services.price_service import fetch_stock_results
from app.services.upstream_client import UpstreamClient
from app.utils.clock import utc_timestamp
from app.utils.errors import AllFetchesFailed, InternalError
from app.utils.logger import logger

router = APIRouter(prefix="/api")


@router.options("/stocks", include_in_schema=False)
async def stocks_preflight():
    return Response(status_code=200)


@router.get("/stocks")
async def get_stocks(
    client: UpstreamClient = Depends(get_upstream_client),
    settings: Settings = Depends(get_settings),
):
    """
    Latest prices for the tracked competitors.

    Per-ticker failures are reported inline (`success: false`); the request
    only fails (503) when no ticker could be fetched.
    """
    logger.info("📡 Fetching stock prices for competitors...")
    try:
        results = await fetch_stock_results(client, settings.companies)
    except Exception as e:
        logger.error(f"❌ Unexpected error in stocks API: {e}", exc_info=True)
        raise InternalError(
            "An unexpected error occurred while fetching stock data",
            details=traceback.format_exc(),
        )

    successful = sum(1 for result in results if result.success)
    stocks = [result.to_response() for result in results]

    if successful == 0:
        logger.error(f"❌ All {len(results)} stock price fetches failed")
        raise AllFetchesFailed(details=stocks)

    logger.info(f"✅ Successfully fetched {successful}/{len(results)} stock prices")
    return {
        "timestamp": utc_timestamp(),
        "dataPoints": len(results),
        "successfulFetches": successful,
        "stocks": stocks,
    }
