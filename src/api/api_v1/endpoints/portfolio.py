from typing import List, Optional

from fastapi import APIRouter, Query

import schemas
from api.api_v1.deps import (
    PortfolioServiceDep,
    validate_positive_integer,
    validate_wallet_address,
)
from core import constants

router = APIRouter()


@router.get("/user-shares/{wallet_address}", response_model=schemas.UserShares)
def get_user_shares(portfolio_service: PortfolioServiceDep, wallet_address: str):
    wallet_address = validate_wallet_address(wallet_address)
    return portfolio_service.get_user_shares(wallet_address)


@router.get("/transactions/{wallet_address}", response_model=List[schemas.Transaction])
def get_transactions(
    portfolio_service: PortfolioServiceDep,
    wallet_address: str,
    limit: Optional[str] = Query(None),
):
    wallet_address = validate_wallet_address(wallet_address)
    limit = validate_positive_integer(
        limit,
        constants.MAX_QUERY_LIMIT,
        "limit",
        default=constants.DEFAULT_TRANSACTIONS_LIMIT,
    )
    return portfolio_service.get_transactions(wallet_address, limit)
