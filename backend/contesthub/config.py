from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "contesthub-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "ContestHub")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "5000"))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/contesthub_dev")

    # Tokens
    access_token_secret: str = os.getenv("ACCESS_TOKEN_SECRET", "dev-secret-change-me")
    access_token_ttl_days: int = int(os.getenv("ACCESS_TOKEN_TTL_DAYS", "7"))

    # Stripe configuration
    stripe_secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
    payment_currency: str = os.getenv("PAYMENT_CURRENCY", "usd")

    # Listing defaults
    contests_page_size: int = int(os.getenv("CONTESTS_PAGE_SIZE", "9"))
    admin_contests_page_size: int = int(os.getenv("ADMIN_CONTESTS_PAGE_SIZE", "10"))

settings = Settings()
