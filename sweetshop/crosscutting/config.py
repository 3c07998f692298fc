"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults suitable for local development and tests

Collaborators:
  - api/main.py: reads settings for CORS, prefix and startup validation
  - container.py: picks the storage backend (memory vs postgres)
  - identity/auth_users.py: JWT secret and TTL

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_BACKENDS = {"memory", "postgres"}
TEST_ENVS = {"test", "testing", "ci"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/local/test/production)
        api_prefix: Prefix for auth and catalog routes (default: /api)
        storage_backend: memory | postgres (test envs always use memory)
        database_url: PostgreSQL connection string (required for postgres)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes (default: 24h)
        log_level: Root log level for the service logger
        log_json: Emit JSON logs (default: True)
        dev_seed_admin: Create an admin account on startup (local/test only)
    """

    # Environment
    app_env: str = "development"
    api_prefix: str = "/api"

    # Storage
    storage_backend: str = "memory"
    database_url: str = ""

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # CORS configuration
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 24 * 60

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Dev Tools
    dev_seed_admin: bool = False
    dev_seed_admin_username: str = "admin"
    dev_seed_admin_email: str = "admin@sweetshop.local"
    dev_seed_admin_password: str = "admin123"

    @field_validator("storage_backend")
    @classmethod
    def storage_backend_valid(cls, v: str) -> str:
        backend = (v or "memory").strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError("storage_backend must be memory or postgres")
        return backend

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        prefix = (v or "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        return prefix

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_storage_requirements(self):
        if self.uses_postgres() and not self.database_url.strip():
            raise ValueError("DATABASE_URL is required when STORAGE_BACKEND=postgres")
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in TEST_ENVS

    def uses_postgres(self) -> bool:
        """Test envs always run on the in-memory stores."""
        return self.storage_backend == "postgres" and not self.is_test()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are missing or invalid
    """
    return Settings()
