from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class PortfolioAsset(SQLModel, table=True):
    __tablename__ = "portfolio_assets"

    id: Optional[int] = Field(default=None, primary_key=True)
    fund_id: int = Field(foreign_key="funds.id", index=True)
    asset_symbol: str = Field(max_length=20)
    asset_name: str
    quantity: float
    current_price: float
    cost_basis: float
    current_value: float
    weight_percentage: float
    target_weight: Optional[float] = None
    unrealized_pnl: Optional[float] = None
    unrealized_pnl_percentage: Optional[float] = None
    price_change_24h: Optional[float] = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
