"""
Zoho Mail REST client.

Sends one message per call through
POST {mail_api_url}/api/accounts/{account_id}/messages
and maps Zoho error codes onto the relay's error taxonomy. No retries.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from agrinova_contact.contact.models import EmailMessage, SendResult
from agrinova_contact.error_handler import (
    AuthError,
    ConfigError,
    MailProviderError,
    QuotaError,
    TransportError,
)
from agrinova_contact.integrations.zoho.auth import ZohoTokenProvider, redact
from agrinova_contact.utils.config_loader import ContactSettings, ZohoClientConfig

logger = logging.getLogger(__name__)


class ZohoMailSender:
    def __init__(
        self,
        settings: ContactSettings,
        token_provider: ZohoTokenProvider,
        config: Optional[ZohoClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.token_provider = token_provider
        self.config = config or ZohoClientConfig()
        self.transport = transport

    def _headers(self, access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Zoho-oauthtoken {access_token}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def build_payload(message: EmailMessage) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "fromAddress": f"{message.from_name} <{message.from_address}>",
            "toAddress": message.to_address,
            "subject": message.subject,
            "content": message.html_body,
            "mailFormat": "html",
        }
        if message.text_body:
            payload["altText"] = message.text_body
        return payload

    async def send(self, message: EmailMessage) -> SendResult:
        if not self.settings.account_id:
            raise ConfigError("ZOHO_ACCOUNT_ID is not set.")

        access_token = await self.token_provider.get_access_token()
        url = self.settings.send_endpoint()

        try:
            async with httpx.AsyncClient(timeout=self.config.send_timeout_seconds, transport=self.transport) as client:
                response = await client.post(url, json=self.build_payload(message), headers=self._headers(access_token))
        except httpx.HTTPError as e:
            logger.error("Network error sending email to %s: %s", message.to_address, e)
            raise TransportError(f"Network error sending email: {e}") from e

        data = self._parse_body(response)

        if response.status_code >= 400:
            self._raise_for_provider_error(response.status_code, data)

        message_id = self._message_id(data)
        if response.status_code == 200 and message_id:
            logger.info(f"Email sent to {message.to_address} (id: {message_id})")
            return SendResult(message_id=str(message_id))

        logger.error("Unexpected Zoho response: status=%s body=%s", response.status_code, redact(data))
        raise MailProviderError(
            f"Unexpected Zoho response (status {response.status_code})",
            payload=data if isinstance(data, dict) else {"raw": data},
        )

    def _raise_for_provider_error(self, status_code: int, data: Any) -> None:
        code = self._error_code(data)

        if code == "INVALID_OAUTHTOKEN":
            self.token_provider.invalidate()
            raise AuthError("Zoho rejected the access token. Check ZOHO_REFRESH_TOKEN.")
        if code == "INVALID_ACCOUNT":
            raise ConfigError("ZOHO_ACCOUNT_ID is wrong. Re-check it in Zoho Mail API settings.")
        if code == "QUOTA_EXCEEDED":
            raise QuotaError("Zoho Mail daily sending quota exceeded.")

        logger.error("Zoho API error: status=%s body=%s", status_code, json.dumps(redact(data), default=str))
        raise MailProviderError(
            f"Zoho Mail API error (status {status_code}, code {code})",
            payload=data if isinstance(data, dict) else {"raw": data},
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text[:500]}

    @staticmethod
    def _error_code(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        inner = data.get("data")
        if isinstance(inner, dict) and inner.get("errorCode"):
            return str(inner["errorCode"])
        status = data.get("status")
        if isinstance(status, dict) and status.get("code") is not None:
            return str(status["code"])
        return None

    @staticmethod
    def _message_id(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        inner = data.get("data")
        if isinstance(inner, dict):
            return inner.get("messageId") or None
        return None
