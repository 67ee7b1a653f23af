import os
from pathlib import Path

from pydantic_settings import BaseSettings


class BaseAppSettings(BaseSettings):
    """Base application settings configuration.

    This class contains the core configuration settings for the Stripe payment
    service, including JWT tokens, Stripe credentials and the shop template
    version. It inherits from Pydantic's BaseSettings for automatic
    environment variable loading and validation.
    """
    BASE_DIR: Path = Path(__file__).parent.parent
    PATH_TO_DB: str = str(BASE_DIR / "database" / "source" / "stripe_payment.db")
    TEMPLATES_DIR: str = str(BASE_DIR / "templates")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    SECRET_KEY_ACCESS: str = os.getenv(
        "SECRET_KEY_ACCESS",
        str(os.urandom(32))
    )
    JWT_SIGNING_ALGORITHM: str = os.getenv("JWT_SIGNING_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30)
    )

    STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY") or ""
    # Pinned so the plugin does not depend on the version selected in the
    # Stripe dashboard.
    STRIPE_API_VERSION: str = os.getenv("STRIPE_API_VERSION", "2015-10-01")

    SHOP_TEMPLATE_VERSION: int = int(os.getenv("SHOP_TEMPLATE_VERSION", 3))
    CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "€")


class Settings(BaseAppSettings):
    """Production settings configuration.

    Adds the PostgreSQL connection parameters used outside of tests.
    """
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "test_user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "test_password")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "test_host")
    POSTGRES_DB_PORT: int = int(os.getenv("POSTGRES_DB_PORT", 5432))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "test_db")


class TestingSettings(BaseAppSettings):
    """Settings used by the test suite (SQLite database)."""
    PATH_TO_DB: str = str(
        Path(__file__).parent.parent / "database" / "source" / "test_stripe_payment.db"
    )
    STRIPE_SECRET_KEY: str = "sk_test_123"


def get_settings() -> BaseAppSettings:
    """Return the settings instance based on the ENVIRONMENT variable.

    If the ENVIRONMENT environment variable is set to 'testing', this function returns
    an instance of TestingSettings. For any other value (including when unset), it returns
    an instance of Settings.

    Returns:
        BaseAppSettings: The settings instance appropriate for the current environment.
    """
    environment = os.getenv("ENVIRONMENT", "developing")
    if environment == "testing":
        return TestingSettings()
    return Settings()
