from pydantic import BaseModel, ConfigDict


class TranscriptRequest(BaseModel):
    """Validated transcript query: ticker is 1-5 uppercase letters, year 2000-2030, quarter 1-4."""
    model_config = ConfigDict(frozen=True)

    ticker: str
    year: int
    quarter: int

    @property
    def label(self) -> str:
        return f"{self.ticker} {self.year} Q{self.quarter}"
