"""
Watch configuration - Loads and validates settings from the environment.

Required:
    TARGET_ENDPOINT      URL to fetch
    TELEGRAM_BOT_TOKEN   Telegram bot token
    TELEGRAM_CHAT_ID     Telegram destination chat
    TRACK_PATH           GJSON path (JSON) or CSS selector[@attr] (HTML)

Optional:
    REQUEST_HEADERS      JSON object of extra request headers
    STATE_FILE           Baseline location (default: last_response.json)
    FETCH_TIMEOUT        Fetch timeout in seconds (default: 10)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from endpoint_watcher.adapters.fetchers.requests_fetcher import DEFAULT_TIMEOUT
from endpoint_watcher.adapters.stores.json_file import DEFAULT_STATE_FILE
from endpoint_watcher.core.errors import ConfigError

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = (
    "TARGET_ENDPOINT",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
    "TRACK_PATH",
)


@dataclass(frozen=True)
class WatchConfig:
    """Validated settings for one watch run."""

    endpoint: str
    telegram_token: str
    telegram_chat_id: str
    track_path: str
    headers: Dict[str, str] = field(default_factory=dict)
    state_file: str = DEFAULT_STATE_FILE
    fetch_timeout: float = DEFAULT_TIMEOUT


def load_config(environ: Optional[Mapping[str, str]] = None) -> WatchConfig:
    """
    Load watch configuration from environment variables.

    Args:
        environ: Mapping to read from. If None, uses os.environ

    Returns:
        WatchConfig with all settings resolved

    Raises:
        ConfigError: If a required variable is missing or a value is invalid
    """
    if environ is None:
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if missing:
        raise ConfigError(
            "required environment variable(s) not set: " + ", ".join(missing)
        )

    config = WatchConfig(
        endpoint=environ["TARGET_ENDPOINT"],
        telegram_token=environ["TELEGRAM_BOT_TOKEN"],
        telegram_chat_id=environ["TELEGRAM_CHAT_ID"],
        track_path=environ["TRACK_PATH"],
        headers=parse_headers(environ.get("REQUEST_HEADERS", "")),
        state_file=environ.get("STATE_FILE") or DEFAULT_STATE_FILE,
        fetch_timeout=_parse_timeout(environ.get("FETCH_TIMEOUT", "")),
    )

    logger.debug(
        "Loaded config: endpoint=%s, track_path=%r, %d extra headers, state=%s",
        config.endpoint,
        config.track_path,
        len(config.headers),
        config.state_file,
    )
    return config


def parse_headers(raw: str) -> Dict[str, str]:
    """
    Parse the REQUEST_HEADERS JSON object.

    Args:
        raw: JSON text, e.g. '{"Authorization": "Bearer x"}'. Empty means none

    Returns:
        Dict of header name -> value

    Raises:
        ConfigError: If raw is not a JSON object of string values
    """
    if not raw or not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid REQUEST_HEADERS JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("REQUEST_HEADERS must be a JSON object")

    for name, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(f"REQUEST_HEADERS value for {name!r} must be a string")

    return data


def _parse_timeout(raw: str) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"FETCH_TIMEOUT must be a number, got {raw!r}") from e
    if timeout <= 0:
        raise ConfigError(f"FETCH_TIMEOUT must be positive, got {raw!r}")
    return timeout
