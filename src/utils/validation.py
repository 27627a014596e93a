import re
from typing import Any, Optional

from eth_utils import is_hex_address

from core.constants import MAX_EMAIL_LENGTH, AuthMethod

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\+?[1-9][0-9]{1,14}")
POSITIVE_INTEGER_PATTERN = re.compile(r"[1-9][0-9]*")

_AUTH_METHODS = {method.value.lower(): method.value for method in AuthMethod}


def is_valid_ethereum_address(value: Any) -> bool:
    """``0x`` followed by exactly 40 hex digits, any letter casing."""
    if not isinstance(value, str) or not value.startswith("0x"):
        return False
    return is_hex_address(value)


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str) or len(value) > MAX_EMAIL_LENGTH:
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_phone_number(value: Any) -> bool:
    # E.164
    if not isinstance(value, str):
        return False
    return PHONE_PATTERN.fullmatch(value) is not None


def is_valid_auth_method(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return value.lower() in _AUTH_METHODS


def normalize_auth_method(value: str) -> Optional[str]:
    """Canonical spelling of an auth method (``INAPP`` -> ``inApp``)."""
    if not isinstance(value, str):
        return None
    return _AUTH_METHODS.get(value.lower())


def is_valid_positive_integer(value: Any, max_value: int) -> bool:
    """
    Check that ``value`` is a canonical decimal integer in ``(0, max_value]``.

    Strings with residual characters ("12abc"), signs, leading zeros,
    decimals or surrounding whitespace are rejected.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 < value <= max_value
    if not isinstance(value, str) or POSITIVE_INTEGER_PATTERN.fullmatch(value) is None:
        return False
    return int(value) <= max_value


def sanitize_string(value: Any, max_length: int) -> str:
    """Trim surrounding whitespace and truncate to ``max_length`` characters.

    Never raises; non-string input sanitizes to an empty string. Applying it
    twice gives the same result as applying it once.
    """
    if not isinstance(value, str) or max_length <= 0:
        return ""
    return value.strip()[:max_length].rstrip()


def normalize_address(address: str) -> str:
    return address.lower()
