"""
Zoho OAuth2 access token provider.

Exchanges the long-lived refresh token for a short-lived access token and
caches it for the lifetime of the process. The cache is dropped on restart;
the refresh token is cheap to exchange again.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from agrinova_contact.contact.models import AccessToken
from agrinova_contact.error_handler import AuthError
from agrinova_contact.utils.config_loader import ContactSettings, ZohoClientConfig

logger = logging.getLogger(__name__)

_SECRET_KEYS = {"access_token", "refresh_token", "client_secret", "id_token"}


def redact(data: Any) -> Any:
    """Strip credential values from a provider payload before it is logged."""
    if isinstance(data, dict):
        return {k: ("***" if k in _SECRET_KEYS else redact(v)) for k, v in data.items()}
    if isinstance(data, list):
        return [redact(v) for v in data]
    return data


class ZohoTokenProvider:
    def __init__(
        self,
        settings: ContactSettings,
        config: Optional[ZohoClientConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.config = config or ZohoClientConfig()
        self.clock = clock or time.time
        self.transport = transport
        self._cached: Optional[AccessToken] = None

    @property
    def cached_token(self) -> Optional[AccessToken]:
        return self._cached

    def prime(self, value: str, expires_at: float) -> None:
        self._cached = AccessToken(value=value, expires_at=expires_at)

    def invalidate(self) -> None:
        self._cached = None

    def _is_fresh(self, now: float) -> bool:
        return self._cached is not None and now < self._cached.expires_at - self.config.expiry_margin_seconds

    async def get_access_token(self) -> str:
        now = self.clock()
        if self._is_fresh(now):
            return self._cached.value

        form = {
            "grant_type": "refresh_token",
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret.get_secret_value(),
            "refresh_token": self.settings.refresh_token.get_secret_value(),
        }
        url = self.settings.token_endpoint

        try:
            async with httpx.AsyncClient(timeout=self.config.token_timeout_seconds, transport=self.transport) as client:
                response = await client.post(url, data=form)
        except httpx.HTTPError as e:
            logger.error("Zoho token refresh request failed: %s", e)
            raise AuthError("Could not obtain Zoho access token: token endpoint unreachable.") from e

        data = self._json_or_text(response)
        token = data.get("access_token") if isinstance(data, dict) else None

        if response.status_code >= 400 or not token:
            logger.error(
                "Zoho token refresh error: status=%s body=%s",
                response.status_code,
                redact(data),
            )
            raise AuthError(
                "Could not obtain Zoho access token. "
                "Check ZOHO_CLIENT_ID, ZOHO_CLIENT_SECRET and ZOHO_REFRESH_TOKEN."
            )

        expires_in = data.get("expires_in") or self.config.default_expires_in
        self._cached = AccessToken(value=token, expires_at=now + float(expires_in))
        logger.info("Obtained Zoho access token (expires in %ss)", expires_in)
        return token

    @staticmethod
    def _json_or_text(response: httpx.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text[:500]}
