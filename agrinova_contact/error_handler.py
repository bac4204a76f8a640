"""Error taxonomy and boundary error handling for the contact relay."""
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class ContactError(Exception):
    """Base class for every failure raised by the contact relay."""


class ValidationError(ContactError):
    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors) or "Validation failed")
        self.errors = list(errors)


class ParseError(ContactError):
    pass


class RateLimitError(ContactError):
    pass


class MailError(ContactError):
    """Any failure while obtaining a token or sending a message."""


class ConfigError(MailError):
    pass


class AuthError(MailError):
    pass


class QuotaError(MailError):
    pass


class MailProviderError(MailError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class TransportError(MailError):
    pass


class ErrorHandler:
    def __init__(self, fallback_address: str) -> None:
        self.fallback_address = fallback_address

    def fallback_message(self) -> str:
        return f"Failed to send your message. Please email us directly at {self.fallback_address}"

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error(
            "Contact submission failed (%s): %s context=%s",
            type(exc).__name__,
            exc,
            context or {},
            exc_info=True,
        )
        return {"success": False, "error": self.fallback_message()}
