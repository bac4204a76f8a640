"""
Process-wide state for the contact relay, bundled so it can be injected.

The API builds one context per process on first use. Tests build their own
with a fake clock and a mocked HTTP transport.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from agrinova_contact.integrations.zoho.auth import ZohoTokenProvider
from agrinova_contact.integrations.zoho.mailer import ZohoMailSender
from agrinova_contact.utils.config_loader import (
    ContactConfig,
    ContactSettings,
    load_contact_config,
    load_settings,
)
from agrinova_contact.utils.rate_limiter import IPRateLimiter

logger = logging.getLogger(__name__)


@dataclass
class ContactContext:
    settings: ContactSettings
    config: ContactConfig
    clock: Callable[[], float]
    rate_limiter: IPRateLimiter
    token_provider: ZohoTokenProvider
    mail_sender: ZohoMailSender


def build_context(
    settings: Optional[ContactSettings] = None,
    config: Optional[ContactConfig] = None,
    clock: Optional[Callable[[], float]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ContactContext:
    settings = settings or load_settings()
    config = config or load_contact_config()
    clock = clock or time.time

    rate_limiter = IPRateLimiter(
        max_requests=config.rate_limit.max_requests,
        window_seconds=config.rate_limit.window_seconds,
        max_entries=config.rate_limit.max_entries,
        clock=clock,
    )
    token_provider = ZohoTokenProvider(settings, config.zoho, clock=clock, transport=transport)
    mail_sender = ZohoMailSender(settings, token_provider, config.zoho, transport=transport)

    if not settings.from_email:
        logger.warning("ZOHO_FROM_EMAIL is not set; Zoho will reject outgoing mail.")

    return ContactContext(
        settings=settings,
        config=config,
        clock=clock,
        rate_limiter=rate_limiter,
        token_provider=token_provider,
        mail_sender=mail_sender,
    )


_context: Optional[ContactContext] = None


def get_context() -> ContactContext:
    global _context
    if _context is None:
        _context = build_context()
    return _context


def set_context(context: Optional[ContactContext]) -> None:
    global _context
    _context = context
