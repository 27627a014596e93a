import json
from typing import Annotated, Any, Dict, Generator, Optional, Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from core.config import settings
from core.db import get_engine
from core.exceptions import BadRequestError
from services.portfolio_service import PortfolioService
from services.user_service import UserService
from utils.validation import (
    is_valid_ethereum_address,
    is_valid_positive_integer,
    normalize_address,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_db() -> Generator[Session, None, None]:
    with Session(get_engine()) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Read and decode a JSON object body.

    The size limit is checked against Content-Length, then against the bytes
    received while streaming, so a chunked upload is cut off as soon as it
    passes the limit and nothing is decoded.
    """
    content_length = request.headers.get("content-length")
    if content_length is not None:
        if not content_length.isdigit():
            raise BadRequestError("Invalid Content-Length header")
        if int(content_length) > settings.MAX_BODY_SIZE:
            raise BadRequestError("Request body too large")

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > settings.MAX_BODY_SIZE:
            raise BadRequestError("Request body too large")

    try:
        payload = json.loads(body) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequestError("Invalid JSON body")

    if not isinstance(payload, dict):
        raise BadRequestError("Invalid JSON body", "Expected a JSON object")
    return payload


JsonBody = Annotated[Dict[str, Any], Depends(read_json_body)]


def parse_payload(schema: Type[SchemaT], body: Dict[str, Any]) -> SchemaT:
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise BadRequestError("Invalid request body", f"Invalid fields: {fields}")


def validate_wallet_address(wallet_address: Optional[str]) -> str:
    if not is_valid_ethereum_address(wallet_address):
        raise BadRequestError("Invalid wallet address")
    return normalize_address(wallet_address)


def validate_positive_integer(
    value: Optional[str], max_value: int, name: str, default: Optional[int] = None
) -> int:
    if value is None and default is not None:
        return default
    if not is_valid_positive_integer(value, max_value):
        raise BadRequestError(
            f"Invalid {name}", f"{name} must be an integer between 1 and {max_value}"
        )
    return int(value)


def get_user_service(session: SessionDep) -> UserService:
    return UserService(session)


def get_portfolio_service(session: SessionDep) -> PortfolioService:
    return PortfolioService(session, demo_fallback=settings.DEMO_DATA_FALLBACK)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PortfolioServiceDep = Annotated[PortfolioService, Depends(get_portfolio_service)]
