import json
from typing import Any, List, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True, env_file="../.env", extra="allow"
    )

    ENVIRONMENT_NAME: str = "Development"

    @property
    def is_production(self):
        return self.ENVIRONMENT_NAME == "Production"

    PROJECT_NAME: str = "A11 Fund API"
    API_PREFIX: str = "/api"

    # ALLOWED_ORIGINS is a comma separated or JSON-formatted list of origins,
    # e.g: 'https://a11.fund,http://localhost:5173'. The first entry is echoed
    # back when the request origin is not in the list.
    ALLOWED_ORIGINS: str = (
        "https://a11.fund,https://api.a11.fund,http://localhost:5173,http://localhost:3000"
    )

    @property
    def cors_origins(self) -> List[str]:
        v = self.ALLOWED_ORIGINS.strip()
        if v.startswith("["):
            return [str(i).strip() for i in json.loads(v)]
        return [i.strip() for i in v.split(",") if i.strip()]

    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_CLEANUP_PROBABILITY: float = 0.01

    # 1 MiB
    MAX_BODY_SIZE: int = 1024 * 1024

    # Serve the first stored holder's shares/transactions when a wallet has none
    DEMO_DATA_FALLBACK: bool = True

    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: str | None, info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v
        if not info.data.get("POSTGRES_SERVER"):
            return "sqlite:///./a11_fund.db"
        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=info.data.get("POSTGRES_USER"),
                password=info.data.get("POSTGRES_PASSWORD"),
                host=info.data.get("POSTGRES_SERVER"),
                path=f"{info.data.get('POSTGRES_DB') or ''}",
            )
        )


settings = Settings()
