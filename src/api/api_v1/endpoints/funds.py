from typing import List, Optional

from fastapi import APIRouter, Query

import schemas
from api.api_v1.deps import PortfolioServiceDep, validate_positive_integer
from core import constants

router = APIRouter()


def _fund_id(fund_id: str) -> int:
    return validate_positive_integer(fund_id, constants.MAX_FUND_ID, "fund id")


@router.get("/fund/{fund_id}", response_model=schemas.Fund)
def get_fund(portfolio_service: PortfolioServiceDep, fund_id: str):
    return portfolio_service.get_fund(_fund_id(fund_id))


@router.get(
    "/fund-performance/{fund_id}", response_model=List[schemas.FundPerformancePoint]
)
def get_fund_performance(
    portfolio_service: PortfolioServiceDep,
    fund_id: str,
    days: Optional[str] = Query(None),
):
    fund_id = _fund_id(fund_id)
    days = validate_positive_integer(
        days,
        constants.MAX_PERFORMANCE_DAYS,
        "days",
        default=constants.DEFAULT_PERFORMANCE_DAYS,
    )
    return portfolio_service.get_fund_performance(fund_id, days)


@router.get("/portfolio-assets/{fund_id}", response_model=List[schemas.PortfolioAsset])
def get_portfolio_assets(portfolio_service: PortfolioServiceDep, fund_id: str):
    return portfolio_service.get_portfolio_assets(_fund_id(fund_id))


@router.get("/fund-activities/{fund_id}", response_model=List[schemas.FundActivity])
def get_fund_activities(
    portfolio_service: PortfolioServiceDep,
    fund_id: str,
    limit: Optional[str] = Query(None),
):
    fund_id = _fund_id(fund_id)
    limit = validate_positive_integer(
        limit,
        constants.MAX_QUERY_LIMIT,
        "limit",
        default=constants.DEFAULT_ACTIVITIES_LIMIT,
    )
    return portfolio_service.get_fund_activities(fund_id, limit)
