"""Client configuration: endpoint, credential, deadline and retry policy."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from nylasclient.exceptions import MissingCredentialError

DEFAULT_TIMEOUT = 90.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_WAIT = 0.5


class Region(str, Enum):
    """Well-known API regions."""

    US = "us"
    EU = "eu"


REGION_BASE_URLS: dict[Region, str] = {
    Region.US: "https://api.us.nylas.com",
    Region.EU: "https://api.eu.nylas.com",
}

DEFAULT_BASE_URL = REGION_BASE_URLS[Region.US]


class ClientConfig(BaseModel):
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    region: Region = Region.US
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    max_retries: int = Field(DEFAULT_MAX_RETRIES, ge=0)
    retry_wait: float = Field(DEFAULT_RETRY_WAIT, gt=0)

    model_config = {"frozen": True}

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="before")
    @classmethod
    def _region_base_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("base_url"):
            region = Region(data.get("region") or Region.US)
            data = {**data, "base_url": REGION_BASE_URLS[region]}
        return data

    @model_validator(mode="after")
    def _require_api_key(self) -> ClientConfig:
        if not self.api_key:
            raise MissingCredentialError()
        return self
