import argparse
from typing import Literal, Optional, Sequence

from dotenv import load_dotenv
from pydantic import ConfigDict, ValidationError, field_validator
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class ConfigError(Exception):
    """Raised when the startup configuration is incomplete."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Stripe credentials (required)
    STRIPE_SECRET_KEY: str
    STRIPE_PUBLISHABLE_KEY: str
    STRIPE_CONNECTED_ACCOUNT_ID: str

    # App settings
    APP_NAME: str = "Stripe Connect Demo"
    ENVIRONMENT: Literal["development", "test", "production"] = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "localhost"
    PORT: int = 4242
    BASE_URL: str = "http://localhost:4242"

    # File inputs
    VIEWS_DIR: str = "views"
    STATIC_DIR: str = "dist"

    # Observability (Optional)
    METRICS_ENABLED: bool = True
    TRACING_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "stripe-connect-demo"

    model_config = ConfigDict(
        env_file=".env", case_sensitive=True, frozen=True, extra="ignore"
    )

    @field_validator(
        "STRIPE_SECRET_KEY", "STRIPE_PUBLISHABLE_KEY", "STRIPE_CONNECTED_ACCOUNT_ID"
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("BASE_URL")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# Command-line flag -> settings field
FLAG_FIELDS = {
    "secret_key": "STRIPE_SECRET_KEY",
    "publishable_key": "STRIPE_PUBLISHABLE_KEY",
    "connected_account_id": "STRIPE_CONNECTED_ACCOUNT_ID",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Stripe Connect demo server (platform + connected account)."
    )
    parser.add_argument(
        "--secret-key", help="Your Stripe secret API key (env: STRIPE_SECRET_KEY)"
    )
    parser.add_argument(
        "--publishable-key",
        help="Your Stripe publishable API key (env: STRIPE_PUBLISHABLE_KEY)",
    )
    parser.add_argument(
        "--connected-account-id",
        help="Your Stripe connected account ID (env: STRIPE_CONNECTED_ACCOUNT_ID)",
    )
    return parser


def load_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """
    Build settings from command-line flags and the environment.

    Flags take precedence over environment variables. Raises ConfigError
    naming every missing or empty credential.
    """
    args = build_parser().parse_args(argv)
    overrides = {
        field: getattr(args, flag)
        for flag, field in FLAG_FIELDS.items()
        if getattr(args, flag) is not None
    }
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise ConfigError(
            "Please provide --secret-key, --publishable-key, and "
            f"--connected-account-id flags (invalid: {', '.join(missing)})"
        ) from e
