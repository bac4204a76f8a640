"""
Contact form request pipeline.

method/CORS -> rate limit -> parse -> validate -> compose -> send notification
-> send auto-reply -> respond. Each stage short-circuits with its own response.
The handler knows nothing about the web framework; api/main.py adapts it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from agrinova_contact.api.dependencies import ContactContext
from agrinova_contact.contact import templates
from agrinova_contact.contact.models import EmailMessage, SubmissionPayload
from agrinova_contact.contact.validation import ensure_valid
from agrinova_contact.error_handler import ErrorHandler, ParseError, RateLimitError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "POST, OPTIONS"
INVALID_JSON = "Invalid JSON body."


@dataclass
class ContactResponse:
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def render_body(self) -> str:
        return "" if self.body is None else json.dumps(self.body)


def cors_headers(origin: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": "Content-Type",
    }


def client_ip(headers: Mapping[str, str]) -> str:
    forwarded = ""
    for key, value in headers.items():
        if key.lower() == "x-forwarded-for":
            forwarded = value or ""
            break
    first = forwarded.split(",")[0].strip()
    return first or "unknown"


def parse_submission(body: Union[str, bytes, None]) -> SubmissionPayload:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(body or "{}")
    except ValueError as e:
        raise ParseError(INVALID_JSON) from e
    if not isinstance(data, dict):
        raise ParseError(INVALID_JSON)
    return SubmissionPayload.model_validate(data)


def build_subject(interest: str, full_name: str) -> str:
    interest = interest.strip()
    topic = f": {interest}" if interest else ""
    return f"AgriNova Inquiry{topic} — from {full_name}"


class ContactHandler:
    def __init__(self, context: ContactContext) -> None:
        self.context = context
        self.errors = ErrorHandler(context.config.mail.notification_address)

    @property
    def origin(self) -> str:
        return self.context.settings.allowed_origin or "*"

    def _respond(self, status_code: int, body: Dict[str, Any]) -> ContactResponse:
        headers = {**cors_headers(self.origin), "Content-Type": "application/json"}
        return ContactResponse(status_code=status_code, headers=headers, body=body)

    async def handle(self, method: str, headers: Mapping[str, str], body: Union[str, bytes, None]) -> ContactResponse:
        method = (method or "").upper()
        if method == "OPTIONS":
            return ContactResponse(status_code=204, headers=cors_headers(self.origin))
        if method != "POST":
            return self._respond(405, {"success": False, "error": "Method Not Allowed"})

        ip = client_ip(headers)
        try:
            self._check_rate_limit(ip)
            payload = parse_submission(body)
            ensure_valid(payload)
        except RateLimitError as e:
            return self._respond(429, {"success": False, "error": str(e)})
        except ParseError as e:
            return self._respond(400, {"success": False, "error": str(e)})
        except ValidationError as e:
            return self._respond(400, {"success": False, "errors": e.errors})

        first_name = payload.first_name.strip()
        try:
            notification, auto_reply = self.compose(payload)
            await self.context.mail_sender.send(notification)
            await self.context.mail_sender.send(auto_reply)
        except Exception as e:
            return self._respond(500, self.errors.handle_exception(e, context={"ip": ip}))

        return self._respond(200, {
            "success": True,
            "message": f"Thank you, {first_name}! Your message has been sent. We'll be in touch within 24 hours.",
        })

    def _check_rate_limit(self, ip: str) -> None:
        if self.context.rate_limiter.is_rate_limited(ip):
            minutes = int(self.context.config.rate_limit.window_seconds // 60)
            raise RateLimitError(f"Too many submissions. Please wait {minutes} minutes and try again.")

    def compose(self, payload: SubmissionPayload) -> Tuple[EmailMessage, EmailMessage]:
        mail_cfg = self.context.config.mail
        brand = self.context.config.brand
        from_address = self.context.settings.from_email
        first_name = payload.first_name.strip()
        full_name = payload.full_name
        fields = dict(
            full_name=full_name,
            email=payload.email,
            phone=payload.phone,
            interest=payload.interest,
            message=payload.message,
        )

        notification = EmailMessage(
            from_name=mail_cfg.notification_sender_name,
            from_address=from_address,
            to_address=mail_cfg.notification_address,
            subject=build_subject(payload.interest, full_name),
            html_body=templates.team_email_html(brand, **fields),
            text_body=templates.team_email_text(brand, **fields),
        )
        auto_reply = EmailMessage(
            from_name=mail_cfg.auto_reply_sender_name,
            from_address=from_address,
            to_address=payload.email.strip(),
            subject=f"We received your message, {first_name}! — {brand.name}",
            html_body=templates.auto_reply_html(brand, first_name, mail_cfg.notification_address),
            text_body=templates.auto_reply_text(brand, first_name, mail_cfg.notification_address),
        )
        return notification, auto_reply
