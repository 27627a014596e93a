from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRequestBase(BaseModel):
    # Clients post camelCase keys (walletAddress); snake_case is accepted too
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class SignupRequest(UserRequestBase):
    wallet_address: Optional[str] = None
    auth_method: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None
    profile_image: Optional[str] = None


class ConnectRequest(UserRequestBase):
    wallet_address: Optional[str] = None
    auth_method: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    profile_image: Optional[str] = None


class LoginRequest(UserRequestBase):
    wallet_address: Optional[str] = None
    auth_method: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None
    profile_image: Optional[str] = None


class UpdateNameRequest(UserRequestBase):
    display_name: Optional[str] = None


class UpdateProfileRequest(UserRequestBase):
    email: Optional[str] = None
    display_name: Optional[str] = None
    profile_image: Optional[str] = None


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    wallet_address: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    display_name: Optional[str] = None
    auth_method: str
    profile_image: Optional[str] = None
    last_login_at: Optional[datetime] = None
    login_count: int
    created_at: datetime
    updated_at: datetime


class UserSummary(BaseModel):
    """Admin listing projection; contact details are left out."""

    model_config = ConfigDict(from_attributes=True)

    wallet_address: str
    display_name: Optional[str] = None
    auth_method: str
    last_login_at: Optional[datetime] = None
    login_count: int
    created_at: datetime


class UserMessage(BaseModel):
    message: str
    user: User


class EmailCheck(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exists: bool
    wallet_address: Optional[str] = None
