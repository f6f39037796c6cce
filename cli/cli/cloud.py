"""Stored API credentials.

Keeps the API key and account id in ``~/.checkplane/config.toml`` so the
CLI can reach the monitoring API without environment variables.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tomllib
from pathlib import Path
from typing import Any, cast

from construct_engine.config import DEFAULT_API_URL

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".checkplane"
_CONFIG_FILE = _CONFIG_DIR / "config.toml"


def load_cloud_config() -> dict[str, Any]:
    """Load stored configuration from ``~/.checkplane/config.toml``.

    Returns an empty dict if the file does not exist or cannot be parsed.
    """
    if not _CONFIG_FILE.exists():
        return {}
    try:
        with open(_CONFIG_FILE, "rb") as fh:
            return tomllib.load(fh)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable credentials file %s: %s", _CONFIG_FILE, exc)
        return {}


def load_stored_api_key() -> str | None:
    """Return the stored API key, or ``None`` if not logged in."""
    config = load_cloud_config()
    return cast("str | None", config.get("cloud", {}).get("api_key"))


def load_stored_account_id() -> str | None:
    """Return the stored account id, or ``None`` if not logged in."""
    config = load_cloud_config()
    return cast("str | None", config.get("cloud", {}).get("account_id"))


def load_api_url() -> str:
    """Return the configured API URL, defaulting to production."""
    config = load_cloud_config()
    return cast(str, config.get("cloud", {}).get("api_url", DEFAULT_API_URL))


def _toml_string(value: str) -> str:
    """Quote *value* as a TOML basic string.

    JSON string escapes (``\\"``, ``\\\\``, ``\\n``, ``\\uXXXX``...) are a
    subset of the TOML basic-string escapes.
    """
    return json.dumps(value, ensure_ascii=False)


def save_cloud_config(api_url: str, api_key: str, account_id: str) -> None:
    """Save credentials to ``~/.checkplane/config.toml`` with ``0o600`` permissions."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    content = (
        "[cloud]\n"
        f"api_url = {_toml_string(api_url)}\n"
        f"api_key = {_toml_string(api_key)}\n"
        f"account_id = {_toml_string(account_id)}\n"
    )
    _CONFIG_FILE.write_text(content, encoding="utf-8")

    # Owner read/write only.
    os.chmod(_CONFIG_FILE, stat.S_IRUSR | stat.S_IWUSR)


def clear_cloud_config() -> None:
    """Remove stored credentials."""
    if _CONFIG_FILE.exists():
        _CONFIG_FILE.unlink()
