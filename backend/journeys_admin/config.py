"""
Journeys Admin Backend — Central Configuration

All environment variables and model settings live here.
Import `settings`, `LLM_CONFIG`, `log`, and `generate_error_code` from this module.
Do not read `os.environ` anywhere else.
"""

import uuid
from datetime import datetime, timezone

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All environment variables. Loaded from .env or the host environment."""

    # GraphQL backend
    graphql_endpoint: str = "https://cute-minnow-12.hasura.app/v1/graphql"
    graphql_admin_secret: str

    # AI providers
    anthropic_api_key: str
    openai_api_key: str

    # Stock photos
    pixabay_api_key: str
    pixabay_api_url: str = "https://pixabay.com/api/"

    # Local output
    stamps_dir: str = "generated_stamps"
    images_dir: str = "location_images"

    # Where the mobile app's published assets live (hero images, stamps)
    asset_base_url: str = "https://questica.s3.us-east-1.amazonaws.com"

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # App
    environment: str = "development"  # "development" | "production"
    cors_origins: str = "http://localhost:3000"  # Comma-separated for multiple origins

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Loaded once at import; handlers receive clients built from it.
settings = Settings()


# ──────────────────────────────────────────────────────
# Logging Utilities
# ──────────────────────────────────────────────────────

def generate_error_code() -> str:
    """Generate a short error reference code.

    Format: 'SJ-' followed by 6 uppercase hex characters.
    Example: 'SJ-3F8A2C'

    The same code is logged on the backend AND returned in the error body,
    so an operator can quote it and the logs can be grepped for it.
    """
    return f"SJ-{uuid.uuid4().hex[:6].upper()}"


def log(level: str, message: str, **context) -> None:
    """Structured print-based logger.

    Every log line follows the format:
        [ISO_TIMESTAMP] [LEVEL] message | key1=value1 key2=value2

    Args:
        level: One of "INFO", "WARN", "ERROR".
        message: Human-readable description of what happened.
        **context: Arbitrary key-value pairs. Include request_id when available.

    Usage:
        log("INFO", "stamp generated", location="Griffith Observatory")
        log("ERROR", "llm call failed", model="anthropic/claude-sonnet-4-5-20250929",
            error_code="SJ-3F8A2C", error=str(e))
    """
    ts = datetime.now(timezone.utc).isoformat()
    ctx = " ".join(f"{k}={v}" for k, v in context.items())
    print(f"[{ts}] [{level}] {message} | {ctx}", flush=True)


# ──────────────────────────────────────────────────────
# Model Configuration
# ──────────────────────────────────────────────────────

LLM_CONFIG = {
    # SQL bootstrap for new location rows
    "location_data_model": "anthropic/claude-sonnet-4-20250514",
    # Writes the prompt handed to the image model
    "stamp_prompt_model": "anthropic/claude-sonnet-4-5-20250929",
    "max_tokens": 2048,
    "timeout": 90,
    "image": {
        "model": "gpt-image-1",
        "size": "1024x1024",
        "background": "transparent",
        "quality": "high",
        "timeout": 180,
    },
}
