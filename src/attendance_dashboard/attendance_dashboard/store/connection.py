from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Optional

import requests

from ..core.constants import DEFAULT_STORE_TIMEOUT

_session_token: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("store_session_token", default=None)


def bind_session_token(token: Optional[str]) -> contextvars.Token:
    """Make ``token`` the bearer token of Record Store calls in the current context."""
    return _session_token.set(token)


def reset_session_token(handle: contextvars.Token) -> None:
    _session_token.reset(handle)


@dataclass
class StoreConfig:
    base_url: str
    timeout: float = DEFAULT_STORE_TIMEOUT


class StoreConnection:
    """HTTP session factory for the Record Store.

    Note: one ``requests.Session`` is shared (connection pooling); the bearer token is
    read per call from the current context so each request carries its caller's token.
    """

    def __init__(self, config: StoreConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @property
    def timeout(self) -> float:
        return float(self._config.timeout)

    @property
    def session(self) -> requests.Session:
        return self._session

    def url(self, endpoint: str) -> str:
        return self._config.base_url.rstrip("/") + "/" + endpoint.lstrip("/")

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Cache-Control": "no-cache"}
        token = _session_token.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
