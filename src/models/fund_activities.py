from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class FundActivity(SQLModel, table=True):
    __tablename__ = "fund_activities"

    id: Optional[int] = Field(default=None, primary_key=True)
    fund_id: int = Field(foreign_key="funds.id", index=True)
    activity_type: str = Field(max_length=30)
    description: str
    amount: Optional[float] = None
    asset_symbol: Optional[str] = Field(default=None, max_length=20)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
