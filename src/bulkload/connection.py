"""HTTP connection factory for the search store `_bulk` endpoint."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlparse

import requests

from src.secrets import load_auth_file

from .config import BULK_API, REQUEST_TIMEOUT
from .errors import AuthConfigError


class HttpConnectionFactory:
    """Builds one configured :class:`requests.Session` per bulk exchange.

    Authentication is set up once through :meth:`init_auth`; every session
    handed out afterwards carries the same credentials.
    """

    def __init__(
        self,
        base_url: str,
        index: str,
        api: str = BULK_API,
        timeout: float = REQUEST_TIMEOUT,
        verify_tls: bool = True,
    ) -> None:
        if not index:
            raise ValueError("Index name is required")
        self.base_url = base_url.rstrip("/")
        self.index = index.strip("/")
        self.api = api.lstrip("/")
        self.timeout = timeout
        self.verify = bool(verify_tls)
        self._auth: Optional[tuple[str, str]] = None
        self._headers: Dict[str, str] = {}

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.index}/{self.api}"

    def init_auth(self, auth_file: Optional[str | Path]) -> None:
        """Load credentials from ``auth_file``; no file means anonymous access."""
        self._auth = None
        self._headers.pop("Authorization", None)
        if not auth_file:
            return

        try:
            creds = load_auth_file(auth_file)
        except (OSError, ValueError) as exc:
            raise AuthConfigError(f"Invalid auth file {auth_file}: {exc}") from exc
        if "api_key" in creds:
            self._headers["Authorization"] = f"ApiKey {creds['api_key']}"
        else:
            self._auth = (creds["username"], creds["password"])

    def create_connection(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(self._headers)
        session.verify = self.verify
        if self._auth:
            session.auth = self._auth
        return session

    def get_host_name(self) -> Optional[str]:
        return urlparse(self.base_url).hostname


__all__ = ["HttpConnectionFactory"]
