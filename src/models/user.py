from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from core.constants import DEFAULT_DISPLAY_NAME


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    wallet_address: str = Field(max_length=42, index=True, unique=True)
    email: Optional[str] = Field(default=None, max_length=255, index=True)
    phone_number: Optional[str] = Field(default=None, max_length=20, index=True)
    display_name: Optional[str] = Field(default=DEFAULT_DISPLAY_NAME, max_length=100)
    auth_method: str = Field(max_length=50, index=True)
    profile_image: Optional[str] = None
    last_login_at: Optional[datetime] = None
    login_count: int = Field(default=1)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
