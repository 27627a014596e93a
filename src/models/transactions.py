from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from core.constants import TransactionStatus


class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    wallet_address: str = Field(max_length=42, index=True)
    fund_id: int = Field(foreign_key="funds.id", index=True)
    transaction_type: str = Field(max_length=20)
    share_quantity: float
    share_price: float
    total_usd_value: float
    transaction_hash: Optional[str] = Field(default=None, max_length=66)
    status: str = Field(default=TransactionStatus.PENDING.value, max_length=20)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
    confirmed_at: Optional[datetime] = None
