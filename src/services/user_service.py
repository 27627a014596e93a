import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

import schemas
from core import constants
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from models.user import User, utc_now
from utils.validation import normalize_address

logger = logging.getLogger(__name__)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value if value else None


class UserUpdate:
    """
    Collects ``column = value`` assignments for a single UPDATE on ``users``.

    Only columns from a fixed set can be assigned and values are always bound
    as parameters, so request data never ends up in the SQL text.
    """

    COLUMNS = frozenset(
        {
            "email",
            "phone_number",
            "display_name",
            "auth_method",
            "profile_image",
            "last_login_at",
            "login_count",
            "updated_at",
        }
    )

    def __init__(self):
        self.values: Dict[str, Any] = {}

    def set(self, column: str, value: Any) -> "UserUpdate":
        if column not in self.COLUMNS:
            raise ValueError(f"Column {column} cannot be updated")
        self.values[column] = value
        return self

    def set_if_present(self, column: str, value: Optional[str]) -> "UserUpdate":
        if value:
            self.set(column, value)
        return self

    def __len__(self) -> int:
        return len(self.values)

    def statement(self, wallet_address: str):
        return (
            update(User)
            .where(User.wallet_address == wallet_address)
            .values(**self.values)
        )


class UserService:
    def __init__(self, session: Session):
        self.session = session

    def find_by_address(self, wallet_address: str) -> Optional[User]:
        statement = select(User).where(
            User.wallet_address == normalize_address(wallet_address)
        )
        return self.session.exec(statement).first()

    def find_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email.lower())
        return self.session.exec(statement).first()

    def create(
        self,
        wallet_address: str,
        auth_method: str,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        display_name: Optional[str] = None,
        profile_image: Optional[str] = None,
    ) -> User:
        """
        Insert a new user with ``login_count=1``.

        The existence check only produces a friendlier error. Two concurrent
        signups can both pass it, in which case the unique index on
        ``wallet_address`` rejects the second insert and it is reported as a
        conflict as well.
        """
        wallet_address = normalize_address(wallet_address)
        existing_user = self.find_by_address(wallet_address)
        if existing_user:
            raise self._user_exists(existing_user)

        now = utc_now()
        user = User(
            wallet_address=wallet_address,
            email=email.lower() if email else None,
            phone_number=_blank_to_none(phone_number),
            display_name=display_name or constants.DEFAULT_DISPLAY_NAME,
            auth_method=auth_method,
            profile_image=_blank_to_none(profile_image),
            last_login_at=now,
            login_count=1,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Concurrent signup lost the insert race for %s", wallet_address)
            raise self._user_exists(self.find_by_address(wallet_address))

        self.session.refresh(user)
        logger.info("User created: %s (%s)", wallet_address, auth_method)
        return user

    def find_or_create_on_connect(
        self,
        wallet_address: str,
        auth_method: Optional[str] = None,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
        profile_image: Optional[str] = None,
    ) -> User:
        """Return the stored user, creating it on first connection.

        Fires on every page load while a wallet is connected, so an existing
        row is returned as is and its login count is left alone.
        """
        existing_user = self.find_by_address(wallet_address)
        if existing_user:
            return existing_user

        try:
            return self.create(
                wallet_address,
                auth_method or constants.DEFAULT_AUTH_METHOD,
                email=email,
                display_name=display_name,
                profile_image=profile_image,
            )
        except ConflictError:
            return self.find_by_address(wallet_address)

    def touch_login(
        self,
        wallet_address: str,
        auth_method: Optional[str] = None,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        display_name: Optional[str] = None,
        profile_image: Optional[str] = None,
    ) -> User:
        now = utc_now()
        user_update = (
            UserUpdate()
            .set("last_login_at", now)
            .set("login_count", User.login_count + 1)
            .set("updated_at", now)
            .set_if_present("auth_method", auth_method)
            .set_if_present("email", email.lower() if email else None)
            .set_if_present("phone_number", phone_number)
            .set_if_present("profile_image", profile_image)
        )
        # The default name is what clients send before the user picked one
        if display_name != constants.DEFAULT_DISPLAY_NAME:
            user_update.set_if_present("display_name", display_name)

        return self._apply(wallet_address, user_update)

    def update_display_name(self, wallet_address: str, display_name: str) -> User:
        if not display_name:
            raise BadRequestError("Display name is required")

        user_update = (
            UserUpdate().set("display_name", display_name).set("updated_at", utc_now())
        )
        return self._apply(wallet_address, user_update)

    def update_profile(self, wallet_address: str, fields: Dict[str, Optional[str]]) -> User:
        """
        Partial profile update.

        ``fields`` holds only the keys the client sent. A key sent as null or
        empty string clears the column; keys not sent are left untouched.
        """
        user_update = UserUpdate()
        if "email" in fields:
            email = fields["email"]
            user_update.set("email", email.lower() if email else None)
        if "display_name" in fields:
            user_update.set("display_name", _blank_to_none(fields["display_name"]))
        if "profile_image" in fields:
            user_update.set("profile_image", _blank_to_none(fields["profile_image"]))

        if not len(user_update):
            raise BadRequestError("No fields to update")

        user_update.set("updated_at", utc_now())
        return self._apply(wallet_address, user_update)

    def list_all(self) -> List[User]:
        return self.session.exec(select(User).order_by(User.created_at.desc())).all()

    def delete(self, wallet_address: str) -> schemas.User:
        user = self.find_by_address(wallet_address)
        if user is None:
            raise NotFoundError("User not found")

        deleted_user = schemas.User.model_validate(user)
        self.session.delete(user)
        self.session.commit()
        logger.info("User deleted: %s", deleted_user.wallet_address)
        return deleted_user

    def _apply(self, wallet_address: str, user_update: UserUpdate) -> User:
        wallet_address = normalize_address(wallet_address)
        result = self.session.exec(user_update.statement(wallet_address))
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFoundError("User not found")

        self.session.commit()
        return self.find_by_address(wallet_address)

    @staticmethod
    def _user_exists(user: Optional[User]) -> ConflictError:
        payload = {}
        if user is not None:
            payload["user"] = schemas.User.model_validate(user).model_dump(mode="json")
        return ConflictError("User already exists", payload=payload)
