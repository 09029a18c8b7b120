"""Application settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through environment variables or a .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Debugging Configuration
    debug: bool = False
    environment: str = "development"  # development, production
    log_level: str = "INFO"

    # Application Configuration
    app_name: str = "Restaurant Order System"
    app_version: str = "1.0.0"
    app_host: str = "127.0.0.1"
    app_port: int = 5000
    api_prefix: str = "/api"

    # CORS Configuration
    cors_origins: list[str] = ["*"]

    # Persistence Configuration
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "restaurant-order-system"
    seed_database: bool = False

    # Token Configuration
    jwt_secret_key: str = "change-me-in-production-with-a-long-random-value"  # pragma: allowlist secret
    jwt_algorithm: str = "HS256"
    jwt_expiration_days: int = 7

    # Credentials
    bcrypt_rounds: int = 10
    # Roles a user may pick for themselves at registration
    registration_roles: list[str] = ["customer", "staff", "admin", "company"]


app_settings = Settings()
