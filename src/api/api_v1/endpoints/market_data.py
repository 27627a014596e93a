from typing import List

from fastapi import APIRouter

import schemas
from api.api_v1.deps import PortfolioServiceDep

router = APIRouter()


@router.get("/market-data", response_model=List[schemas.MarketData])
def get_market_data(portfolio_service: PortfolioServiceDep):
    return portfolio_service.get_market_data()
