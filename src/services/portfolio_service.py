from typing import List, Optional

from sqlmodel import Session, select

from core.exceptions import NotFoundError
from models import (
    Fund,
    FundActivity,
    FundPerformance,
    MarketData,
    PortfolioAsset,
    Transaction,
    UserShares,
)
from utils.validation import normalize_address


class PortfolioService:
    """Read-only queries backing the dashboard. Nothing here writes."""

    def __init__(self, session: Session, demo_fallback: bool = True):
        self.session = session
        self.demo_fallback = demo_fallback

    def get_fund(self, fund_id: int) -> Fund:
        fund = self.session.exec(select(Fund).where(Fund.id == fund_id)).first()
        if fund is None:
            raise NotFoundError("Fund not found")
        return fund

    def get_user_shares(self, wallet_address: str) -> UserShares:
        """
        Share holdings of a wallet.

        With ``demo_fallback`` on, a wallet without holdings is served the
        first row of the table so the dashboard always has figures to show.
        """
        user_shares = self.session.exec(
            select(UserShares).where(
                UserShares.wallet_address == normalize_address(wallet_address)
            )
        ).first()

        if user_shares is None and self.demo_fallback:
            user_shares = self.session.exec(
                select(UserShares).order_by(UserShares.id.asc()).limit(1)
            ).first()

        if user_shares is None:
            raise NotFoundError("No user shares data available")
        return user_shares

    def get_fund_performance(self, fund_id: int, days: int) -> List[FundPerformance]:
        # Latest `days` rows, returned oldest first for charting
        rows = self.session.exec(
            select(FundPerformance)
            .where(FundPerformance.fund_id == fund_id)
            .order_by(FundPerformance.date.desc())
            .limit(days)
        ).all()
        return list(reversed(rows))

    def get_portfolio_assets(self, fund_id: int) -> List[PortfolioAsset]:
        return self.session.exec(
            select(PortfolioAsset)
            .where(PortfolioAsset.fund_id == fund_id)
            .order_by(PortfolioAsset.weight_percentage.desc())
        ).all()

    def get_transactions(self, wallet_address: str, limit: int) -> List[Transaction]:
        transactions = self._transactions(normalize_address(wallet_address), limit)
        if not transactions and self.demo_fallback:
            transactions = self._transactions(None, limit)
        return transactions

    def _transactions(self, wallet_address: Optional[str], limit: int) -> List[Transaction]:
        statement = select(Transaction)
        if wallet_address is not None:
            statement = statement.where(Transaction.wallet_address == wallet_address)
        statement = statement.order_by(Transaction.created_at.desc()).limit(limit)
        return list(self.session.exec(statement).all())

    def get_fund_activities(self, fund_id: int, limit: int) -> List[FundActivity]:
        return self.session.exec(
            select(FundActivity)
            .where(FundActivity.fund_id == fund_id)
            .order_by(FundActivity.created_at.desc())
            .limit(limit)
        ).all()

    def get_market_data(self) -> List[MarketData]:
        return self.session.exec(
            select(MarketData).order_by(MarketData.asset_symbol)
        ).all()
