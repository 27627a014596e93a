from datetime import date as dt_date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Fund(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fund_name: str
    total_aum: float
    total_shares_outstanding: float
    current_nav_per_share: float
    inception_date: dt_date
    performance_mtd: Optional[float] = None
    performance_ytd: Optional[float] = None
    performance_inception: Optional[float] = None
    sharpe_ratio: Optional[float] = None
    max_drawdown: Optional[float] = None
    volatility: Optional[float] = None
    all_time_high_nav: Optional[float] = None
    all_time_low_nav: Optional[float] = None
    last_updated: Optional[datetime] = None


class FundPerformancePoint(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt_date
    nav_per_share: float
    total_aum: float
    daily_return: Optional[float] = None


class FundActivity(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fund_id: int
    activity_type: str
    description: str
    amount: Optional[float] = None
    asset_symbol: Optional[str] = None
    created_at: datetime
