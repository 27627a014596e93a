from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class MarketData(SQLModel, table=True):
    __tablename__ = "market_data"

    id: Optional[int] = Field(default=None, primary_key=True)
    asset_symbol: str = Field(max_length=20, unique=True)
    current_price: float
    price_change_24h: Optional[float] = None
    price_change_7d: Optional[float] = None
    volume_24h: Optional[float] = None
    market_cap: Optional[float] = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
