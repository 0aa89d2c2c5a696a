from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AuthConfig:
    authorize_url: str
    token_url: str
    client_id: str
    redirect_uri: str
    client_secret: Optional[str] = None
    scope: str = "email openid phone"
    timeout: float = 15


@dataclass(frozen=True)
class SessionToken:
    """What we store into Flask session after login."""

    access_token: str
    expires_at: datetime
    id_token: Optional[str] = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_session(self) -> dict:
        return {
            "access_token": self.access_token,
            "id_token": self.id_token,
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_session(cls, data: Optional[dict]) -> Optional["SessionToken"]:
        if not data or not data.get("access_token") or not data.get("expires_at"):
            return None
        try:
            expires_at = datetime.fromisoformat(data["expires_at"])
        except (TypeError, ValueError):
            return None
        return cls(access_token=data["access_token"], id_token=data.get("id_token"), expires_at=expires_at)
