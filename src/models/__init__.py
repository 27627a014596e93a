from sqlmodel import SQLModel
from .user import User
from .funds import Fund
from .user_shares import UserShares
from .fund_performance import FundPerformance
from .portfolio_assets import PortfolioAsset
from .transactions import Transaction
from .fund_activities import FundActivity
from .market_data import MarketData
