import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from core import constants
from core.exceptions import InternalError, RateLimitedError
from core.rate_limiter import RateLimitResult

logger = logging.getLogger(__name__)


def cors_headers(origin: Optional[str], allowed_origins: List[str]) -> Dict[str, str]:
    if origin and origin in allowed_origins:
        allow_origin = origin
    else:
        allow_origin = allowed_origins[0] if allowed_origins else "null"

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": constants.CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": constants.CORS_ALLOW_HEADERS,
        "Access-Control-Max-Age": constants.CORS_MAX_AGE,
        "Vary": "Origin",
    }


def get_client_identifier(request: Request) -> str:
    """
    Best-effort client IP used as the rate limit key.

    Proxy headers win over the socket peer; ``X-Forwarded-For`` may hold a
    chain, of which the first entry is the originating client.
    """
    for header in constants.CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if value:
            client_ip = value.split(",")[0].strip()
            if client_ip:
                return client_ip

    if request.client and request.client.host:
        return request.client.host
    return constants.UNKNOWN_CLIENT


def rate_limit_headers(result: RateLimitResult) -> Dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(int(result.reset_at)),
    }
    if result.retry_after is not None:
        headers["Retry-After"] = str(result.retry_after)
    return headers


def register_middleware(app: FastAPI, health_path: str, allowed_origins: List[str]):
    """Install the cross-cutting request handling on ``app``.

    Starlette runs the last registered middleware first, so the rate limiter
    is added before the outer layer that answers preflights and decorates
    every response.
    """

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        if request.url.path == health_path:
            return await call_next(request)

        rate_limiter = request.app.state.rate_limiter
        result = rate_limiter.check(get_client_identifier(request))
        if not result.allowed:
            logger.warning(
                "Rate limit exceeded for %s on %s %s",
                get_client_identifier(request),
                request.method,
                request.url.path,
            )
            error = RateLimitedError(
                message=f"Rate limit exceeded. Try again in {result.retry_after} seconds",
            )
            return JSONResponse(
                status_code=error.status_code,
                content=error.to_dict(),
                headers=rate_limit_headers(result),
            )

        response = await call_next(request)
        response.headers.update(rate_limit_headers(result))
        return response

    @app.middleware("http")
    async def security_middleware(request: Request, call_next):
        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
        else:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Unhandled error on %s %s: %s",
                    request.method,
                    request.url.path,
                    e,
                    exc_info=True,
                )
                error = InternalError()
                response = JSONResponse(
                    status_code=error.status_code, content=error.to_dict()
                )

        response.headers.update(cors_headers(origin, allowed_origins))
        response.headers.update(constants.SECURITY_HEADERS)
        return response
