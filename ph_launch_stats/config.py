from __future__ import annotations

import hashlib
import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .config_schema import ScraperInput
from .errors import ConfigError

API_TOKEN_ENV = "PRODUCTHUNT_API_TOKEN"


def load_config(path: str | Path) -> ScraperInput:
    """
    Load a YAML input file and validate it into a typed ScraperInput.

    Raises ConfigError with a readable validation message on failure.
    """
    p = Path(path)

    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")

    try:
        raw_text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {p}") from e

    try:
        data = yaml.safe_load(raw_text)
    except Exception as e:  # PyYAML can raise multiple exception types
        raise ConfigError(f"Failed to parse YAML in {p}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML in {p} must be a mapping/object")

    return input_from_mapping(data, source=str(p))


def input_from_mapping(
    data: Mapping[str, Any] | None, *, source: str = "Actor input"
) -> ScraperInput:
    """Validate an already-parsed input object (e.g. the Actor input record)."""
    try:
        return ScraperInput.model_validate(dict(data or {}))
    except ValidationError as e:
        raise ConfigError(_format_pydantic_errors(e, source)) from e


def resolve_api_token(
    config: ScraperInput, *, environ: Mapping[str, str] | None = None
) -> str:
    """
    Return the Product Hunt API token from the input or the environment.

    The token is optional; an empty string means none was provided.
    """
    if config.product_hunt_api_token:
        return config.product_hunt_api_token
    env = os.environ if environ is None else environ
    return (env.get(API_TOKEN_ENV) or "").strip()


def config_sha256(config: ScraperInput) -> str:
    """
    Compute a stable SHA-256 hash of the input values, excluding the API token.
    """
    payload = json.dumps(
        config.model_dump(mode="json", exclude={"product_hunt_api_token"}),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def _format_pydantic_errors(err: ValidationError, source: str) -> str:
    lines: list[str] = [f"Invalid configuration in {source}:"]
    for item in err.errors():
        loc = ".".join(str(part) for part in item.get("loc", [])) or "<root>"
        msg = item.get("msg", "invalid value")
        lines.append(f"- {loc}: {msg}")
    return "\n".join(lines)
