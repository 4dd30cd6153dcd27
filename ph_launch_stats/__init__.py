from __future__ import annotations

from .config import config_sha256, input_from_mapping, load_config
from .config_schema import ScraperInput
from .errors import ConfigError, PageAccessError, SinkError
from .extract import extract_post
from .record import PostRecord
from .urls import classify_url, extract_slug, normalize_post_url

__all__ = [
    "ConfigError",
    "PageAccessError",
    "PostRecord",
    "ScraperInput",
    "SinkError",
    "classify_url",
    "config_sha256",
    "extract_post",
    "extract_slug",
    "input_from_mapping",
    "load_config",
    "normalize_post_url",
]
