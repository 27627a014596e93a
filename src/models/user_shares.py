from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel


class UserShares(SQLModel, table=True):
    __tablename__ = "user_shares"

    id: Optional[int] = Field(default=None, primary_key=True)
    wallet_address: str = Field(max_length=42, index=True)
    fund_id: int = Field(foreign_key="funds.id", index=True)
    total_shares: float = 0
    cost_basis: float = 0
    initial_investment_date: Optional[date] = None
