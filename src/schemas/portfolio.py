from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserShares(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_address: str
    fund_id: int
    total_shares: float
    cost_basis: float
    initial_investment_date: Optional[date] = None


class PortfolioAsset(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fund_id: int
    asset_symbol: str
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
    last_updated: Optional[datetime] = None


class Transaction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_address: str
    fund_id: int
    transaction_type: str
    share_quantity: float
    share_price: float
    total_usd_value: float
    transaction_hash: Optional[str] = None
    status: str
    created_at: datetime
    confirmed_at: Optional[datetime] = None


class MarketData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_symbol: str
    current_price: float
    price_change_24h: Optional[float] = None
    price_change_7d: Optional[float] = None
    volume_24h: Optional[float] = None
    market_cap: Optional[float] = None
    last_updated: Optional[datetime] = None
