"""Configuration loading from the platform config directory."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from stack_browser.models import (
    CONFIG_APP_NAME,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SITE,
    FIRST_PAGE,
    MAX_PAGE_SIZE,
    MAX_REQUEST_TIMEOUT,
    STACK_API_BASE_URL,
    UserConfig,
)
from stack_browser.themes import DEFAULT_THEME_NAME, THEME_NAMES

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Loading
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input.
#
#   Field             Rule                          Handler
#   ────────────────  ────────────────────────────  ──────────────────
#   page_size         1 ≤ x ≤ MAX_PAGE_SIZE         _coerce_bounded_int
#   request_timeout   1 ≤ x ≤ MAX_REQUEST_TIMEOUT   _coerce_bounded_int
#   start_page        x ≥ 1                         _coerce_bounded_int
#   theme_name        in THEME_NAMES                _dict_to_config
#   site, api_base    non-empty str via _safe_get   _non_empty_str
#
# The config is never written back; a corrupt file is moved aside to
# config.json.corrupt so the user can inspect it.
#
CONFIG_FILENAME = "config.json"
CORRUPT_SUFFIX = ".corrupt"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/stack-browser/config.json
    - macOS: ~/Library/Application Support/stack-browser/config.json
    - Windows: %APPDATA%/stack-browser/config.json
    """
    return Path(user_config_dir(CONFIG_APP_NAME)) / CONFIG_FILENAME


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and expected_type is not bool:
        return default
    if not isinstance(value, expected_type):
        return default
    return value


def _coerce_bounded_int(value: Any, default: int, minimum: int, maximum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if maximum is not None:
        value = min(value, maximum)
    return max(minimum, value)


def _non_empty_str(data: dict[str, Any], key: str, default: str) -> str:
    value = _safe_get(data, key, default, str).strip()
    return value or default


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    theme_name = _safe_get(data, "theme_name", DEFAULT_THEME_NAME, str)
    if theme_name not in THEME_NAMES:
        logger.warning("Unknown theme %r in config, using %s", theme_name, DEFAULT_THEME_NAME)
        theme_name = DEFAULT_THEME_NAME

    return UserConfig(
        site=_non_empty_str(data, "site", DEFAULT_SITE),
        api_base_url=_non_empty_str(data, "api_base_url", STACK_API_BASE_URL),
        page_size=_coerce_bounded_int(
            data.get("page_size"), DEFAULT_PAGE_SIZE, 1, MAX_PAGE_SIZE
        ),
        request_timeout=_coerce_bounded_int(
            data.get("request_timeout"), DEFAULT_REQUEST_TIMEOUT, 1, MAX_REQUEST_TIMEOUT
        ),
        start_page=_coerce_bounded_int(data.get("start_page"), FIRST_PAGE, FIRST_PAGE),
        theme_name=theme_name,
    )


def _backup_corrupt_config(config_path: Path) -> None:
    backup_path = config_path.with_name(config_path.name + CORRUPT_SUFFIX)
    try:
        config_path.replace(backup_path)
    except OSError as e:
        logger.warning("Could not back up corrupt config file: %s", e)
    else:
        logger.warning("Corrupt config file moved to %s", backup_path)


def load_config(config_path: Path | None = None) -> UserConfig:
    """Load configuration from disk.

    Returns default config if the file doesn't exist. A file that is not
    valid JSON, or whose root is not an object, is backed up and replaced by
    defaults with ``config_defaulted`` set so the app can warn the user.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        _backup_corrupt_config(config_path)
        return UserConfig(config_defaulted=True)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()

    if not isinstance(data, dict):
        logger.warning("Config file root is %s, not an object; using defaults", type(data).__name__)
        _backup_corrupt_config(config_path)
        return UserConfig(config_defaulted=True)

    return _dict_to_config(data)


__all__ = [
    "CONFIG_FILENAME",
    "CORRUPT_SUFFIX",
    "get_config_path",
    "load_config",
]
