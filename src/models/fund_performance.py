from datetime import date as dt_date
from typing import Optional

from sqlmodel import Field, SQLModel


class FundPerformance(SQLModel, table=True):
    __tablename__ = "fund_performance"

    id: Optional[int] = Field(default=None, primary_key=True)
    fund_id: int = Field(foreign_key="funds.id", index=True)
    date: dt_date = Field(index=True)
    nav_per_share: float
    total_aum: float
    daily_return: Optional[float] = None
