"""Server-side validation for contact form fields.

`validate` returns every applicable error message in a fixed order; an empty
list means the submission is valid.
"""

from __future__ import annotations

import re
from typing import Any, List

from agrinova_contact.contact.models import SubmissionPayload
from agrinova_contact.error_handler import ValidationError

MIN_FIRST_NAME = 2
MIN_MESSAGE = 10
MAX_MESSAGE = 5000

FIRST_NAME_ERROR = "First name must be at least 2 characters."
EMAIL_ERROR = "A valid email address is required."
MESSAGE_TOO_SHORT_ERROR = "Message must be at least 10 characters."
MESSAGE_TOO_LONG_ERROR = "Message must not exceed 5,000 characters."

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def is_valid_email(value: Any) -> bool:
    return bool(_EMAIL_RE.match(_strip(value)))


def validate(first_name: Any, email: Any, message: Any) -> List[str]:
    errors: List[str] = []

    if len(_strip(first_name)) < MIN_FIRST_NAME:
        errors.append(FIRST_NAME_ERROR)
    if not is_valid_email(email):
        errors.append(EMAIL_ERROR)

    body = _strip(message)
    if len(body) < MIN_MESSAGE:
        errors.append(MESSAGE_TOO_SHORT_ERROR)
    if len(body) > MAX_MESSAGE:
        errors.append(MESSAGE_TOO_LONG_ERROR)

    return errors


def ensure_valid(payload: SubmissionPayload) -> None:
    errors = validate(payload.first_name, payload.email, payload.message)
    if errors:
        raise ValidationError(errors)
