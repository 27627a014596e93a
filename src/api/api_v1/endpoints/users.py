import logging
from typing import List, Optional

from fastapi import APIRouter, status

import schemas
from api.api_v1.deps import (
    JsonBody,
    UserServiceDep,
    parse_payload,
    validate_wallet_address,
)
from core import constants
from core.exceptions import BadRequestError, NotFoundError
from utils.validation import (
    is_valid_auth_method,
    is_valid_email,
    is_valid_phone_number,
    normalize_auth_method,
    sanitize_string,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _clean_auth_method(auth_method: Optional[str]) -> Optional[str]:
    auth_method = sanitize_string(auth_method, 50)
    if not auth_method:
        return None
    if not is_valid_auth_method(auth_method):
        raise BadRequestError("Invalid auth method")
    return normalize_auth_method(auth_method)


def _clean_email(email: Optional[str]) -> Optional[str]:
    email = sanitize_string(email, constants.MAX_EMAIL_LENGTH + 1)
    if not email:
        return None
    if not is_valid_email(email):
        raise BadRequestError("Invalid email")
    return email.lower()


def _clean_phone_number(phone_number: Optional[str]) -> Optional[str]:
    phone_number = sanitize_string(phone_number, 20)
    if not phone_number:
        return None
    if not is_valid_phone_number(phone_number):
        raise BadRequestError("Invalid phone number")
    return phone_number


def _clean_display_name(display_name: Optional[str]) -> Optional[str]:
    return sanitize_string(display_name, constants.MAX_DISPLAY_NAME_LENGTH) or None


def _clean_profile_image(profile_image: Optional[str]) -> Optional[str]:
    return sanitize_string(profile_image, constants.MAX_PROFILE_IMAGE_LENGTH) or None


@router.get("/users", response_model=List[schemas.UserSummary])
def list_users(user_service: UserServiceDep):
    return user_service.list_all()


@router.get("/user/check/email/{email}", response_model=schemas.EmailCheck)
def check_email(user_service: UserServiceDep, email: str):
    email = _clean_email(email)
    if email is None:
        raise BadRequestError("Invalid email")

    user = user_service.find_by_email(email)
    return schemas.EmailCheck(
        exists=user is not None,
        wallet_address=user.wallet_address if user else None,
    )


@router.post(
    "/user/signup",
    response_model=schemas.UserMessage,
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/signup",
    response_model=schemas.UserMessage,
    status_code=status.HTTP_201_CREATED,
)
def signup(user_service: UserServiceDep, body: JsonBody):
    payload = parse_payload(schemas.SignupRequest, body)
    if not payload.wallet_address or not payload.auth_method:
        raise BadRequestError("Wallet address and auth method are required")

    wallet_address = validate_wallet_address(payload.wallet_address)
    auth_method = _clean_auth_method(payload.auth_method)
    if auth_method is None:
        raise BadRequestError("Wallet address and auth method are required")

    logger.info("Signup attempt for %s via %s", wallet_address, auth_method)
    user = user_service.create(
        wallet_address,
        auth_method,
        email=_clean_email(payload.email),
        phone_number=_clean_phone_number(payload.phone_number),
        display_name=_clean_display_name(payload.display_name),
        profile_image=_clean_profile_image(payload.profile_image),
    )
    return schemas.UserMessage(
        message="User created successfully", user=schemas.User.model_validate(user)
    )


@router.post("/user", response_model=schemas.User)
def connect_user(user_service: UserServiceDep, body: JsonBody):
    payload = parse_payload(schemas.ConnectRequest, body)
    wallet_address = validate_wallet_address(payload.wallet_address)

    return user_service.find_or_create_on_connect(
        wallet_address,
        auth_method=_clean_auth_method(payload.auth_method),
        email=_clean_email(payload.email),
        display_name=_clean_display_name(payload.display_name),
        profile_image=_clean_profile_image(payload.profile_image),
    )


@router.post("/user/login", response_model=schemas.UserMessage)
def track_login(user_service: UserServiceDep, body: JsonBody):
    payload = parse_payload(schemas.LoginRequest, body)
    if not payload.wallet_address:
        raise BadRequestError("Wallet address is required")

    wallet_address = validate_wallet_address(payload.wallet_address)
    user = user_service.touch_login(
        wallet_address,
        auth_method=_clean_auth_method(payload.auth_method),
        email=_clean_email(payload.email),
        phone_number=_clean_phone_number(payload.phone_number),
        display_name=_clean_display_name(payload.display_name),
        profile_image=_clean_profile_image(payload.profile_image),
    )
    return schemas.UserMessage(
        message="Login tracked successfully", user=schemas.User.model_validate(user)
    )


@router.get("/user/{wallet_address}", response_model=schemas.User)
def get_user(user_service: UserServiceDep, wallet_address: str):
    wallet_address = validate_wallet_address(wallet_address)
    user = user_service.find_by_address(wallet_address)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.patch("/user/{wallet_address}/name", response_model=schemas.User)
def update_display_name(
    user_service: UserServiceDep, wallet_address: str, body: JsonBody
):
    wallet_address = validate_wallet_address(wallet_address)
    payload = parse_payload(schemas.UpdateNameRequest, body)
    display_name = _clean_display_name(payload.display_name)
    if not display_name:
        raise BadRequestError("Display name is required")

    return user_service.update_display_name(wallet_address, display_name)


@router.patch("/user/{wallet_address}/profile", response_model=schemas.User)
def update_profile(
    user_service: UserServiceDep, wallet_address: str, body: JsonBody
):
    wallet_address = validate_wallet_address(wallet_address)
    payload = parse_payload(schemas.UpdateProfileRequest, body)

    fields = {}
    if "email" in payload.model_fields_set:
        fields["email"] = _clean_email(payload.email)
    if "display_name" in payload.model_fields_set:
        fields["display_name"] = _clean_display_name(payload.display_name)
    if "profile_image" in payload.model_fields_set:
        fields["profile_image"] = _clean_profile_image(payload.profile_image)

    return user_service.update_profile(wallet_address, fields)


@router.delete("/user/{wallet_address}", response_model=schemas.UserMessage)
def delete_user(user_service: UserServiceDep, wallet_address: str):
    wallet_address = validate_wallet_address(wallet_address)
    user = user_service.delete(wallet_address)
    return schemas.UserMessage(
        message="User deleted successfully", user=schemas.User.model_validate(user)
    )
