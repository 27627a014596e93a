import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from core import constants
from core.config import settings
from models import (
    Fund,
    FundActivity,
    FundPerformance,
    MarketData,
    PortfolioAsset,
    Transaction,
    UserShares,
)

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def build_engine(database_uri: str, **kwargs) -> Engine:
    if database_uri.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(database_uri, pool_pre_ping=True, **kwargs)


def get_engine() -> Engine:
    """Engine for this process, created on first use and then reused."""
    global _engine
    if _engine is None:
        _engine = build_engine(str(settings.SQLALCHEMY_DATABASE_URI))
        logger.info("Database engine created for %s", _engine.url.render_as_string())
    return _engine


def set_engine(engine: Optional[Engine]) -> None:
    global _engine
    _engine = engine


def create_tables(engine: Engine, drop: bool = False) -> None:
    if drop:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


# make sure all SQLModel models are imported (models) before initializing DB
# otherwise, SQLModel might fail to initialize relationships properly


def _table_is_empty(session: Session, model) -> bool:
    return session.exec(select(func.count()).select_from(model)).one() == 0


def seed_funds(session: Session):
    if _table_is_empty(session, Fund):
        session.add(
            Fund(
                id=constants.DEFAULT_FUND_ID,
                fund_name="A11 Digital Asset Fund",
                total_aum=12500000.00,
                total_shares_outstanding=100000.0,
                current_nav_per_share=125.0,
                inception_date=date(2023, 1, 15),
                performance_mtd=8.45,
                performance_ytd=34.67,
                performance_inception=125.00,
                sharpe_ratio=1.85,
                max_drawdown=-18.34,
                volatility=22.45,
                all_time_high_nav=145.5,
                all_time_low_nav=85.0,
            )
        )
    session.commit()


def seed_user_shares(session: Session):
    if _table_is_empty(session, UserShares):
        holdings = [
            UserShares(
                wallet_address="0x742d35cc6634c0532925a3b844bc454e4438f44e",
                fund_id=constants.DEFAULT_FUND_ID,
                total_shares=150.5,
                cost_basis=12500.00,
                initial_investment_date=date(2023, 3, 15),
            ),
            UserShares(
                wallet_address="0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
                fund_id=constants.DEFAULT_FUND_ID,
                total_shares=500.75,
                cost_basis=45000.00,
                initial_investment_date=date(2023, 2, 1),
            ),
            UserShares(
                wallet_address="0xdd870fa1b7c4700f2bd7f44238821c26f7392148",
                fund_id=constants.DEFAULT_FUND_ID,
                total_shares=75.25,
                cost_basis=8500.00,
                initial_investment_date=date(2023, 6, 10),
            ),
        ]
        session.add_all(holdings)
    session.commit()


DAILY_RETURNS = [
    0.016, -0.013, 0.008, 0.025, -0.019, 0.012, 0.017, -0.011, 0.024, -0.016,
    0.009, 0.014, -0.022, 0.011, 0.018, -0.014, 0.021, -0.009, 0.012, 0.015,
    -0.018, 0.008, 0.025, -0.012, 0.018, -0.015, 0.012, 0.022, -0.008, 0.015,
]


def seed_fund_performance(session: Session, end_date: date = date(2024, 12, 24)):
    if _table_is_empty(session, FundPerformance):
        nav = 110.21
        start_date = end_date - timedelta(days=len(DAILY_RETURNS) - 1)
        for offset, daily_return in enumerate(DAILY_RETURNS):
            if offset:
                nav = round(nav * (1 + daily_return), 2)
            session.add(
                FundPerformance(
                    fund_id=constants.DEFAULT_FUND_ID,
                    date=start_date + timedelta(days=offset),
                    nav_per_share=nav,
                    total_aum=round(nav * 100000, 2),
                    daily_return=daily_return,
                )
            )
    session.commit()


def seed_portfolio_assets(session: Session):
    if _table_is_empty(session, PortfolioAsset):
        assets = [
            PortfolioAsset(
                fund_id=constants.DEFAULT_FUND_ID,
                asset_symbol="BTC",
                asset_name="Bitcoin",
                quantity=148.5,
                current_price=42250.0,
                cost_basis=38500.0,
                current_value=6274125.00,
                weight_percentage=50.19,
                target_weight=50.00,
                unrealized_pnl=556725.00,
                unrealized_pnl_percentage=9.73,
                price_change_24h=1.85,
            ),
            PortfolioAsset(
                fund_id=constants.DEFAULT_FUND_ID,
                asset_symbol="ETH",
                asset_name="Ethereum",
                quantity=1650.25,
                current_price=2285.0,
                cost_basis=2100.0,
                current_value=3771821.25,
                weight_percentage=30.17,
                target_weight=30.00,
                unrealized_pnl=305296.25,
                unrealized_pnl_percentage=8.81,
                price_change_24h=-0.45,
            ),
            PortfolioAsset(
                fund_id=constants.DEFAULT_FUND_ID,
                asset_symbol="USD",
                asset_name="US Dollar",
                quantity=2454053.75,
                current_price=1.0,
                cost_basis=1.0,
                current_value=2454053.75,
                weight_percentage=19.63,
                target_weight=20.00,
                unrealized_pnl=0.0,
                unrealized_pnl_percentage=0.0,
                price_change_24h=0.0,
            ),
        ]
        session.add_all(assets)
    session.commit()


def seed_transactions(session: Session):
    if _table_is_empty(session, Transaction):
        rows = [
            (
                "0x742d35cc6634c0532925a3b844bc454e4438f44e",
                constants.TransactionType.MINT,
                150.5,
                100.0,
                15050.00,
                "0x8b7d4c7f2e1a3b5c8d9e6f4a2b1c3d5e7f8a9b0c1d2e3f4a5b6c7d8e9f0a1b2c",
                constants.TransactionStatus.CONFIRMED,
                datetime(2023, 3, 15, 10, 30, tzinfo=timezone.utc),
                datetime(2023, 3, 15, 10, 35, tzinfo=timezone.utc),
            ),
            (
                "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
                constants.TransactionType.MINT,
                500.75,
                90.0,
                45067.50,
                "0x1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d3e4f5a6b7c8d9e0f1a2b",
                constants.TransactionStatus.CONFIRMED,
                datetime(2023, 2, 1, 14, 22, tzinfo=timezone.utc),
                datetime(2023, 2, 1, 14, 28, tzinfo=timezone.utc),
            ),
            (
                "0x742d35cc6634c0532925a3b844bc454e4438f44e",
                constants.TransactionType.REDEEM,
                25.0,
                120.0,
                3000.00,
                "0x3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d",
                constants.TransactionStatus.CONFIRMED,
                datetime(2024, 11, 15, 9, 15, tzinfo=timezone.utc),
                datetime(2024, 11, 15, 9, 22, tzinfo=timezone.utc),
            ),
            (
                "0xdd870fa1b7c4700f2bd7f44238821c26f7392148",
                constants.TransactionType.MINT,
                75.25,
                113.0,
                8503.25,
                "0x5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5e6f",
                constants.TransactionStatus.CONFIRMED,
                datetime(2023, 6, 10, 16, 45, tzinfo=timezone.utc),
                datetime(2023, 6, 10, 16, 50, tzinfo=timezone.utc),
            ),
            (
                "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
                constants.TransactionType.MINT,
                100.0,
                118.0,
                11800.00,
                "0x7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5e6f7a8b",
                constants.TransactionStatus.PENDING,
                datetime(2024, 12, 24, 11, 30, tzinfo=timezone.utc),
                None,
            ),
        ]
        for (
            wallet,
            tx_type,
            quantity,
            price,
            usd_value,
            tx_hash,
            tx_status,
            created_at,
            confirmed_at,
        ) in rows:
            session.add(
                Transaction(
                    wallet_address=wallet,
                    fund_id=constants.DEFAULT_FUND_ID,
                    transaction_type=tx_type.value,
                    share_quantity=quantity,
                    share_price=price,
                    total_usd_value=usd_value,
                    transaction_hash=tx_hash,
                    status=tx_status.value,
                    created_at=created_at,
                    confirmed_at=confirmed_at,
                )
            )
    session.commit()


def seed_fund_activities(session: Session):
    if _table_is_empty(session, FundActivity):
        trade = constants.ActivityType.TRADE.value
        rebalance = constants.ActivityType.REBALANCE.value
        fee = constants.ActivityType.FEE_COLLECTION.value
        distribution = constants.ActivityType.DISTRIBUTION.value
        activities = [
            (trade, "Purchased 2.5 BTC at $42,150", 105375.00, "BTC", datetime(2024, 12, 23, 14, 30, tzinfo=timezone.utc)),
            (trade, "Sold 15 ETH at $2,280", 34200.00, "ETH", datetime(2024, 12, 22, 10, 15, tzinfo=timezone.utc)),
            (rebalance, "Quarterly rebalancing: Adjusted BTC allocation from 52% to 50%", None, None, datetime(2024, 12, 20, 9, 0, tzinfo=timezone.utc)),
            (fee, "Quarterly management fee collected (2% annual)", 62500.00, "USD", datetime(2024, 12, 15, tzinfo=timezone.utc)),
            (trade, "Purchased 8 ETH at $2,310", 18480.00, "ETH", datetime(2024, 12, 18, 15, 45, tzinfo=timezone.utc)),
            (distribution, "Q4 2024 distribution to shareholders", 125000.00, "USD", datetime(2024, 12, 10, tzinfo=timezone.utc)),
            (trade, "Sold 1.2 BTC at $41,800", 50160.00, "BTC", datetime(2024, 12, 8, 11, 20, tzinfo=timezone.utc)),
            (rebalance, "Monthly rebalancing: USD position increased to 20%", None, None, datetime(2024, 12, 1, 9, 0, tzinfo=timezone.utc)),
            (trade, "Purchased 10 ETH at $2,250", 22500.00, "ETH", datetime(2024, 11, 28, 13, 30, tzinfo=timezone.utc)),
            (fee, "Performance fee collected (20% of profits)", 45000.00, "USD", datetime(2024, 11, 15, tzinfo=timezone.utc)),
        ]
        for activity_type, description, amount, symbol, created_at in activities:
            session.add(
                FundActivity(
                    fund_id=constants.DEFAULT_FUND_ID,
                    activity_type=activity_type,
                    description=description,
                    amount=amount,
                    asset_symbol=symbol,
                    created_at=created_at,
                )
            )
    session.commit()


def seed_market_data(session: Session):
    if _table_is_empty(session, MarketData):
        session.add_all(
            [
                MarketData(
                    asset_symbol="BTC",
                    current_price=42250.0,
                    price_change_24h=1.85,
                    price_change_7d=5.23,
                    volume_24h=28500000000.00,
                    market_cap=826000000000.00,
                ),
                MarketData(
                    asset_symbol="ETH",
                    current_price=2285.0,
                    price_change_24h=-0.45,
                    price_change_7d=3.67,
                    volume_24h=15200000000.00,
                    market_cap=274000000000.00,
                ),
                MarketData(
                    asset_symbol="USD",
                    current_price=1.0,
                    price_change_24h=0.0,
                    price_change_7d=0.0,
                ),
            ]
        )
    session.commit()


def init_db(session: Session, seed: bool = True) -> None:
    create_tables(session.get_bind())
    if not seed:
        return

    seed_funds(session)
    seed_user_shares(session)
    seed_fund_performance(session)
    seed_portfolio_assets(session)
    seed_transactions(session)
    seed_fund_activities(session)
    seed_market_data(session)
    logger.info("Demo fund data seeded")
