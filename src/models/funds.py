from datetime import date, datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Fund(SQLModel, table=True):
    __tablename__ = "funds"

    id: Optional[int] = Field(default=None, primary_key=True)
    fund_name: str
    total_aum: float
    total_shares_outstanding: float
    current_nav_per_share: float
    inception_date: date
    performance_mtd: Optional[float] = None
    performance_ytd: Optional[float] = None
    performance_inception: Optional[float] = None
    sharpe_ratio: Optional[float] = None
    max_drawdown: Optional[float] = None
    volatility: Optional[float] = None
    all_time_high_nav: Optional[float] = None
    all_time_low_nav: Optional[float] = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
