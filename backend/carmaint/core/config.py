"""
Application settings.

Values come from environment variables (case-insensitive) or a local
``.env`` file and are validated once at import time; an invalid value
stops the process before it serves anything.
"""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


MIN_SECRET_KEY_LENGTH = 32

PLACEHOLDER_SECRETS = frozenset([
    "generate-with-openssl-rand-hex-32",
    "CHANGE_ME_32_CHARS_MIN",
    "your-secret-key-here",
])

# Accepted URL schemes mapped to the async driver actually used
SUPPORTED_DATABASE_SCHEMES = {
    "sqlite": "sqlite+aiosqlite",
    "sqlite+aiosqlite": "sqlite+aiosqlite",
    "postgresql": "postgresql+asyncpg",
    "postgresql+asyncpg": "postgresql+asyncpg",
}


class Settings(BaseSettings):
    """
    Runtime configuration for the car maintenance service.

    SECRET_KEY has no default; keep it in the environment or an
    untracked .env file.
    """

    project_name: str = Field(
        default="Car Maintenance API",
        description="Title shown in the OpenAPI docs"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./carmaint.db",
        description="Database connection URL (SQLite by default, PostgreSQL-ready format)"
    )
    create_schema: bool = Field(
        default=True,
        description="Create missing tables at startup"
    )

    # Security Configuration
    secret_key: str = Field(
        ...,
        description="Secret key for session token signing (generate with: openssl rand -hex 32)"
    )
    session_cookie_name: str = Field(
        default="SESSION",
        description="Name of the cookie set by form login"
    )
    session_expire_minutes: int = Field(
        default=30,
        gt=0,
        description="Form login session lifetime in minutes"
    )
    session_cookie_secure: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS"
    )
    admin_username: str = Field(
        default="user",
        min_length=1,
        description="Username of the account provisioned at startup"
    )
    admin_password: Optional[str] = Field(
        default=None,
        description="Password of the provisioned account (generated and logged when unset)"
    )
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor for new password hashes"
    )

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=["http://localhost:8080"],
        description="Origins allowed to call the API from a browser"
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Let cross-origin browsers send the session cookie"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Root logger level"
    )
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines (plain text when false)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """Accept a JSON list or a comma-separated string."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Reject empty, placeholder and short signing keys."""
        hint = "Generate one with: openssl rand -hex 32"
        if not v.strip():
            raise ValueError(f"SECRET_KEY is required and cannot be empty. {hint}")
        if v in PLACEHOLDER_SECRETS:
            raise ValueError(
                f"SECRET_KEY must be set to a secure random value (not placeholder). {hint}"
            )
        if len(v) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"SECRET_KEY must be at least {MIN_SECRET_KEY_LENGTH} characters long "
                f"(got {len(v)}). {hint}"
            )
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """
        Check the URL scheme and switch plain drivers to their async ones.

        ``sqlite://`` becomes ``sqlite+aiosqlite://`` and ``postgresql://``
        becomes ``postgresql+asyncpg://``; async URLs pass through.
        """
        scheme, separator, rest = v.partition("://")
        if not separator or scheme not in SUPPORTED_DATABASE_SCHEMES:
            raise ValueError(
                "DATABASE_URL must start with one of: "
                f"{', '.join(s + '://' for s in SUPPORTED_DATABASE_SCHEMES)}. Got: {v[:20]}..."
            )
        return f"{SUPPORTED_DATABASE_SCHEMES[scheme]}://{rest}"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got: {v}")
        return level


settings = Settings()
