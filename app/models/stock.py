import math
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class Company(BaseModel):
    """A tracked competitor; the configured list order is the display order."""
    model_config = ConfigDict(frozen=True)

    ticker: str  # Stock symbol (e.g., AAPL)
    name: str  # Display name (e.g., Apple Inc.)


class PriceFetched(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fetched"] = "fetched"
    price: float
    exchange: Optional[str] = None


class PriceFetchFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    message: str


PriceOutcome = Union[PriceFetched, PriceFetchFailed]


class StockResult(BaseModel):
    """
    One row of the price response.

    success=True  -> price is a finite number, no error
    success=False -> price is None, error is a non-empty message
    """
    model_config = ConfigDict(frozen=True)

    ticker: str
    company_name: str
    price: Optional[float]
    exchange: Optional[str] = None
    success: bool
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, company: Company, outcome: PriceOutcome) -> "StockResult":
        if isinstance(outcome, PriceFetched) and math.isfinite(outcome.price):
            return cls(
                ticker=company.ticker,
                company_name=company.name,
                price=outcome.price,
                exchange=outcome.exchange or None,
                success=True,
            )
        message = getattr(outcome, "message", None) or f"Invalid data received for {company.ticker}"
        return cls(
            ticker=company.ticker,
            company_name=company.name,
            price=None,
            success=False,
            error=message,
        )

    def to_response(self) -> Dict[str, Any]:
        """Wire shape: camelCase keys, `exchange` and `error` only when set."""
        body: Dict[str, Any] = {
            "ticker": self.ticker,
            "companyName": self.company_name,
            "price": self.price,
        }
        if self.exchange:
            body["exchange"] = self.exchange
        body["success"] = self.success
        if self.error is not None:
            body["error"] = self.error
        return body
