from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import urlencode

import requests

from ..common.datetime_utils import now_local
from ..core.exceptions import AuthenticationError
from .model import AuthConfig, SessionToken

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: log in through the hosted login page (OAuth 2 authorization-code flow)."""

    def __init__(self, config: AuthConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    def login_url(self, state: str) -> str:
        query = urlencode(
            {
                "client_id": self._config.client_id,
                "response_type": "code",
                "scope": self._config.scope,
                "redirect_uri": self._config.redirect_uri,
                "state": state,
            }
        )
        return f"{self._config.authorize_url}?{query}"

    def exchange_code(self, code: str, *, now: Optional[datetime] = None) -> SessionToken:
        if not code or not code.strip():
            raise AuthenticationError("Missing authorization code")

        auth = (self._config.client_id, self._config.client_secret) if self._config.client_secret else None
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self._config.redirect_uri,
            "client_id": self._config.client_id,
        }
        try:
            response = self._session.post(self._config.token_url, data=data, auth=auth, timeout=self._config.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Token exchange failed: %s", e)
            raise AuthenticationError("Login failed, please try again") from e

        access_token = payload.get("access_token")
        if not access_token:
            raise AuthenticationError("Login failed, please try again")

        now = now or now_local()
        expires_in = int(payload.get("expires_in") or 3600)
        return SessionToken(
            access_token=access_token,
            id_token=payload.get("id_token"),
            expires_at=now + timedelta(seconds=expires_in),
        )
