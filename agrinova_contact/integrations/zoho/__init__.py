from .auth import ZohoTokenProvider
from .mailer import ZohoMailSender

__all__ = [
    'ZohoTokenProvider',
    'ZohoMailSender',
]
