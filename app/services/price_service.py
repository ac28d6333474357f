import asyncio
from typing import Iterable, List

import httpx

from app.models.stock import Company, PriceFetched, PriceFetchFailed, PriceOutcome, StockResult
from app.services.upstream_client import UpstreamClient
from app.utils.errors import UpstreamFailure
from app.utils.logger import logger


async def fetch_price_outcome(client: UpstreamClient, ticker: str) -> PriceOutcome:
    """Fetch one ticker; every failure becomes a PriceFetchFailed value instead of an exception."""
    try:
        data = await client.get_stock_price(ticker)
        exchange = data.get("exchange")
        return PriceFetched(
            price=data["price"],
            exchange=exchange if isinstance(exchange, str) and exchange else None,
        )
    except UpstreamFailure as e:
        logger.error(f"❌ Failed to fetch {ticker}: {e.message}")
        return PriceFetchFailed(message=e.message)
    except httpx.HTTPError as e:
        message = f"Request to upstream failed for {ticker}: {e}"
        logger.error(f"❌ Failed to fetch {ticker}: {message}")
        return PriceFetchFailed(message=message)
    except Exception as e:
        message = f"Unexpected error fetching {ticker}: {str(e) or type(e).__name__}"
        logger.error(f"❌ Failed to fetch {ticker}: {message}", exc_info=True)
        return PriceFetchFailed(message=message)


async def fetch_stock_results(client: UpstreamClient, companies: Iterable[Company]) -> List[StockResult]:
    """
    Fetch all companies concurrently and wait for every request to settle.
    Results come back in the order of `companies`, whatever the completion order.
    """
    companies = list(companies)
    outcomes = await asyncio.gather(
        *(fetch_price_outcome(client, company.ticker) for company in companies)
    )
    return [StockResult.from_outcome(company, outcome) for company, outcome in zip(companies, outcomes)]
