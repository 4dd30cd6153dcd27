from __future__ import annotations

from typing import Annotated
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_START_URL = "https://www.producthunt.com/"


def _normalize_start_urls(values: list[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()

    for item in values:
        url = (item or "").strip()
        if not url:
            continue
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"not an absolute http(s) URL: {url!r}")
        if url in seen:
            continue
        seen.add(url)
        out.append(url)

    if not out:
        raise ValueError("must contain at least one URL")
    return out


PositiveInt = Annotated[int, Field(ge=1)]
NonNegativeInt = Annotated[int, Field(ge=0)]


class ScraperInput(BaseModel):
    """
    The single input object of a scraper run.

    Field names follow the Actor input schema (camelCase); snake_case names are
    accepted too so YAML configs can use either.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    start_urls: list[str] = Field(
        default_factory=lambda: [DEFAULT_START_URL], alias="startUrls"
    )
    max_requests_per_crawl: PositiveInt = Field(200, alias="maxRequestsPerCrawl")
    use_browser: bool = Field(False, alias="useBrowser")
    # Reserved for an API-based path; the crawler never reads it.
    product_hunt_api_token: str = Field("", alias="productHuntApiToken")

    max_concurrency: PositiveInt = Field(10, alias="maxConcurrency")
    max_request_retries: NonNegativeInt = Field(3, alias="maxRequestRetries")
    headless: bool = True
    lookup_timeout_ms: PositiveInt = Field(2000, alias="lookupTimeoutMs")
    network_idle_timeout_ms: PositiveInt = Field(5000, alias="networkIdleTimeoutMs")
    settle_ms: NonNegativeInt = Field(800, alias="settleMs")

    @field_validator("start_urls", mode="before")
    @classmethod
    def _coerce_request_objects(cls, v: object) -> object:
        # Actor input editors produce [{"url": "..."}] for request lists.
        if isinstance(v, str):
            return [v]
        if isinstance(v, list):
            return [
                item.get("url", "") if isinstance(item, dict) else item for item in v
            ]
        return v

    @field_validator("start_urls")
    @classmethod
    def _validate_start_urls(cls, v: list[str]) -> list[str]:
        return _normalize_start_urls(v)

    @field_validator("product_hunt_api_token")
    @classmethod
    def _strip_token(cls, v: str) -> str:
        return (v or "").strip()

    @property
    def backend(self) -> str:
        return "browser" if self.use_browser else "static"
