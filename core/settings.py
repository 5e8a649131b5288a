import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Credentials
    STRIPE_API_KEY: str

    # Transport
    STRIPE_API_BASE: str = "https://api.stripe.com"
    STRIPE_API_VERSION: Optional[str] = None
    STRIPE_ACCOUNT: Optional[str] = None  # Stripe Connect account header
    STRIPE_TIMEOUT: float = 80.0

    # Logging
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)

    def __init__(self, **kwargs):
        # Check for STRIPE_API_KEY before calling parent constructor
        if not kwargs.get("STRIPE_API_KEY") and not os.getenv("STRIPE_API_KEY"):
            raise RuntimeError(
                "STRIPE_API_KEY not set; create .env or export the variable"
            )
        super().__init__(**kwargs)
