from fastapi import APIRouter

from api.api_v1.endpoints import funds, healthz, market_data, portfolio, users

api_router = APIRouter()

# Group routes by adding tags parameter
api_router.include_router(healthz.router, prefix="/health", tags=["Others"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(funds.router, tags=["Funds"])
api_router.include_router(portfolio.router, tags=["Portfolio"])
api_router.include_router(market_data.router, tags=["Market Data"])
api_router.redirect_slashes = False
