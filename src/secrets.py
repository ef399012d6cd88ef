"""Utilities for loading local (gitignored) settings and search store credentials."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SECRETS_FILENAME = "local_secrets.json"


def _default_secrets_path() -> Path:
    root = Path(__file__).resolve().parents[1]
    return root / DEFAULT_SECRETS_FILENAME


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load optional defaults from a JSON file; return {} when unavailable."""

    candidate = path or os.getenv("LOCAL_SECRETS_FILE") or _default_secrets_path()
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_auth_file(path: str | Path) -> Dict[str, str]:
    """Read a JSON credentials file.

    Returns ``{"api_key": ...}`` or ``{"username": ..., "password": ...}``.
    Unlike :func:`load_local_secrets` an unreadable file raises ``OSError``
    and unusable content raises ``ValueError``.
    """

    auth_path = Path(path).expanduser()
    with auth_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)

    if not isinstance(data, dict):
        raise ValueError(f"Auth file {auth_path} must contain a JSON object")

    if data.get("api_key"):
        return {"api_key": str(data["api_key"])}

    username = data.get("username") or data.get("user")
    password = data.get("password")
    if username and password is not None:
        return {"username": str(username), "password": str(password)}

    raise ValueError(f"Auth file {auth_path} has neither 'api_key' nor 'username'/'password'")


__all__ = ["load_local_secrets", "load_auth_file", "DEFAULT_SECRETS_FILENAME"]
