from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubmissionPayload(BaseModel):
    """Contact form body. Every field is optional here; validation decides what is required."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    interest: str = ""
    message: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()


@dataclass
class EmailMessage:
    from_name: str
    from_address: str
    to_address: str
    subject: str
    html_body: str
    text_body: Optional[str] = None


@dataclass
class SendResult:
    message_id: str


@dataclass
class AccessToken:
    value: str
    expires_at: float                    # epoch seconds
