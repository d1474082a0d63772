"""
Configuration for the Open5e client.

Values come from the environment (optionally seeded from a `.env` file):

    OPEN5E_API_URL   Base URL of the API (default: https://api.open5e.com)
    OPEN5E_TIMEOUT   Transport timeout in seconds (default: 30)
"""

import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("open5e-client")

DEFAULT_OPEN5E_API_URL = "https://api.open5e.com"
DEFAULT_TIMEOUT = 30.0


class Open5eSettings(BaseModel):
    """Settings shared by every endpoint of a client."""

    api_url: str = Field(
        default=DEFAULT_OPEN5E_API_URL,
        description="Base URL of the Open5e API, without a trailing slash"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0.0,
        description="Seconds before the HTTP transport gives up on a request"
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("api_url must not be empty")
        return v


def load_settings() -> Open5eSettings:
    """Build settings from the environment, reading the nearest `.env` above the working directory."""
    if load_dotenv(find_dotenv(usecwd=True)):
        logger.debug("Loaded environment from .env")

    values: dict[str, str] = {}
    api_url = os.getenv("OPEN5E_API_URL")
    if api_url:
        values["api_url"] = api_url
    timeout = os.getenv("OPEN5E_TIMEOUT")
    if timeout:
        values["timeout"] = timeout

    return Open5eSettings(**values)
