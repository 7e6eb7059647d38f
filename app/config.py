"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


import os

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_prefix="",
    )

    app_env: str = Field(
        default="development",
        alias="APP_ENV",
        description="Deployment environment; 'production' enables Secure cookies",
    )

    # ===== Database Configuration =====
    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description="SQLAlchemy URL of the content database (postgresql or sqlite+aiosqlite)",
    )

    # ===== Authentication Configuration =====
    jwt_secret: str | None = Field(
        default=None,
        alias="JWT_SECRET",
        description="Secret used to sign admin session tokens",
    )

    jwt_algorithm: str = Field(
        default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm"
    )

    auth_token_ttl_days: int = Field(
        default=7,
        alias="AUTH_TOKEN_TTL_DAYS",
        description="Lifetime of a session token and of the auth cookie, in days",
    )

    auth_cookie_name: str = Field(
        default="auth-token",
        alias="AUTH_COOKIE_NAME",
        description="Name of the HTTP-only session cookie",
    )

    bcrypt_rounds: int = Field(
        default=12,
        alias="BCRYPT_ROUNDS",
        description="bcrypt cost factor used when hashing new passwords",
    )

    # ===== Admin Area =====
    admin_path_prefix: str = Field(
        default="/admin",
        alias="ADMIN_PATH_PREFIX",
        description="Path prefix guarded by the session gate",
    )

    admin_login_path: str = Field(
        default="/admin/login",
        alias="ADMIN_LOGIN_PATH",
        description="Login page inside the admin area",
    )

    # ===== Cloudinary Configuration =====
    cloudinary_cloud_name: str | None = Field(
        default=None, alias="CLOUDINARY_CLOUD_NAME", description="Cloudinary cloud name"
    )

    cloudinary_api_key: str | None = Field(
        default=None, alias="CLOUDINARY_API_KEY", description="Cloudinary API key"
    )

    cloudinary_api_secret: str | None = Field(
        default=None, alias="CLOUDINARY_API_SECRET", description="Cloudinary API secret"
    )

    cloudinary_folder: str = Field(
        default="portfolio",
        alias="CLOUDINARY_FOLDER",
        description="Folder that uploaded images are stored under",
    )

    trusted_image_hosts: list[str] = Field(
        default_factory=lambda: [
            "res.cloudinary.com",
            "via.placeholder.com",
            "images.unsplash.com",
        ],
        alias="TRUSTED_IMAGE_HOSTS",
        description="Image hosts accepted without a warning",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=8000, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    # User-facing hint for database connection errors
    db_unavailable_hint: str = os.getenv(
        "DB_UNAVAILABLE_HINT",
        "Database connection failed. The server may be offline or network connectivity is down.",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        if not self.database_url:
            logger.warning("DATABASE_URL environment variable not set.")

        if not self.jwt_secret:
            logger.warning(
                "JWT_SECRET environment variable not set. Admin login is unavailable."
            )

        if not self.cloudinary_configured:
            logger.warning(
                "Cloudinary credentials not set. Image uploads will fail."
            )

        logger.debug(f"Running in '{self.app_env}' environment")

        return self

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @property
    def auth_token_max_age(self) -> int:
        """Cookie max-age in seconds, matching the token lifetime."""
        return self.auth_token_ttl_days * 24 * 60 * 60


# Global settings instance
settings = Settings()
