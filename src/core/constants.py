from enum import Enum

DEFAULT_DISPLAY_NAME = "Web3 User"
DEFAULT_AUTH_METHOD = "wallet"
DEFAULT_FUND_ID = 1


class AuthMethod(str, Enum):
    METAMASK = "metamask"
    COINBASE_WALLET = "coinbase-wallet"
    WALLETCONNECT = "walletconnect"
    IN_APP = "inApp"
    EMAIL = "email"
    PHONE = "phone"
    GOOGLE = "google"
    GITHUB = "github"
    MICROSOFT = "microsoft"
    DISCORD = "discord"
    X = "x"
    PASSKEY = "passkey"
    GUEST = "guest"
    WALLET = "wallet"


class TransactionType(str, Enum):
    MINT = "MINT"
    REDEEM = "REDEEM"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"


class ActivityType(str, Enum):
    TRADE = "TRADE"
    REBALANCE = "REBALANCE"
    FEE_COLLECTION = "FEE_COLLECTION"
    DISTRIBUTION = "DISTRIBUTION"


# Input limits
MAX_EMAIL_LENGTH = 254
MAX_DISPLAY_NAME_LENGTH = 100
MAX_PROFILE_IMAGE_LENGTH = 2048
MAX_PERFORMANCE_DAYS = 3650
MAX_QUERY_LIMIT = 1000
MAX_FUND_ID = 2**31 - 1

DEFAULT_PERFORMANCE_DAYS = 30
DEFAULT_TRANSACTIONS_LIMIT = 50
DEFAULT_ACTIVITIES_LIMIT = 20

UNKNOWN_CLIENT = "unknown"
CLIENT_IP_HEADERS = ("cf-connecting-ip", "x-forwarded-for", "x-real-ip")

CORS_ALLOW_METHODS = "GET, POST, PATCH, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"
CORS_MAX_AGE = "86400"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}
