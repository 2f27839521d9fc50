"""Shared configuration for the MCP server."""
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

DEFAULT_BASE_URL = "https://api.productive.io/api/v2/"


class Settings(BaseModel):
    """Process-wide, read-only configuration."""

    model_config = ConfigDict(frozen=True)

    api_token: str | None = None
    org_id: str | None = None
    # person id that "me" resolves to
    user_id: str | None = None
    base_url: str = DEFAULT_BASE_URL

    @property
    def headers(self) -> dict:
        return {
            "X-Auth-Token": self.api_token or "",
            "X-Organization-Id": self.org_id or "",
            "Content-Type": "application/vnd.api+json",
        }


def load_settings() -> Settings:
    return Settings(
        api_token=os.getenv("PRODUCTIVE_API_TOKEN") or None,
        org_id=os.getenv("PRODUCTIVE_ORG_ID") or None,
        user_id=os.getenv("PRODUCTIVE_USER_ID") or None,
        base_url=os.getenv("PRODUCTIVE_API_BASE_URL") or DEFAULT_BASE_URL,
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
