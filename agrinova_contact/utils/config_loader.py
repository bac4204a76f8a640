"""
Configuration loader for the contact relay.

Tunables live in config/contact_config.yml; secrets and deployment settings
come from the environment (a local .env file is honoured).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS_URL = "https://accounts.zoho.com"
DEFAULT_MAIL_API_URL = "https://mail.zoho.com"


class RateLimitConfig(BaseModel):
    """Per-IP fixed window limits"""

    window_seconds: int = Field(default=900, ge=1)
    max_requests: int = Field(default=10, ge=1)
    max_entries: int = Field(default=10000, ge=1)


class ZohoClientConfig(BaseModel):
    token_timeout_seconds: float = Field(default=10.0, gt=0)
    send_timeout_seconds: float = Field(default=10.0, gt=0)
    expiry_margin_seconds: int = Field(default=60, ge=0)
    default_expires_in: int = Field(default=3600, ge=1)


class MailConfig(BaseModel):
    notification_address: str = "oselu@agrinovalabs.site"
    notification_sender_name: str = "AgriNova Labs Website"
    auto_reply_sender_name: str = "AgriNova Labs"


class BrandConfig(BaseModel):
    name: str = "AgriNova Labs"
    website_url: str = "https://agrinovaai.com"
    support_phone: str = "+234 706 234 5678"
    office_hours: str = "Monday - Friday, 8:00 AM - 6:00 PM WAT"
    location: str = "Awoyaya, Lagos State, Nigeria"


class ContactConfig(BaseModel):
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    zoho: ZohoClientConfig = Field(default_factory=ZohoClientConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    brand: BrandConfig = Field(default_factory=BrandConfig)


class ContactSettings(BaseModel):
    """Deployment settings and Zoho credentials read from the environment."""

    allowed_origin: str = "*"
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    refresh_token: SecretStr = SecretStr("")
    accounts_url: str = DEFAULT_ACCOUNTS_URL
    token_url: Optional[str] = None
    mail_api_url: str = DEFAULT_MAIL_API_URL
    account_id: str = ""
    from_email: str = ""

    @property
    def token_endpoint(self) -> str:
        if self.token_url:
            return self.token_url
        return f"{self.accounts_url.rstrip('/')}/oauth/v2/token"

    def send_endpoint(self) -> str:
        return f"{self.mail_api_url.rstrip('/')}/api/accounts/{self.account_id}/messages"


def load_contact_config(config_path: Optional[Path] = None) -> ContactConfig:
    """
    Load and validate the contact relay configuration from YAML

    Args:
        config_path: Path to config file. Defaults to config/contact_config.yml

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "contact_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Contact config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = ContactConfig(**data)
        logger.info("Successfully loaded contact config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Contact config validation failed: %s", e)
        raise


def load_settings() -> ContactSettings:
    load_dotenv()
    return ContactSettings(
        allowed_origin=os.getenv("ALLOWED_ORIGIN") or "*",
        client_id=os.getenv("ZOHO_CLIENT_ID", ""),
        client_secret=os.getenv("ZOHO_CLIENT_SECRET", ""),
        refresh_token=os.getenv("ZOHO_REFRESH_TOKEN", ""),
        accounts_url=os.getenv("ZOHO_ACCOUNTS_URL") or DEFAULT_ACCOUNTS_URL,
        token_url=os.getenv("ZOHO_TOKEN_URL") or None,
        mail_api_url=os.getenv("ZOHO_MAIL_API_URL") or DEFAULT_MAIL_API_URL,
        account_id=os.getenv("ZOHO_ACCOUNT_ID", ""),
        from_email=os.getenv("ZOHO_FROM_EMAIL", ""),
    )
