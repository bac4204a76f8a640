"""
Utility modules for the contact relay
"""
from .config_loader import load_contact_config, load_settings, ContactConfig, ContactSettings
from .rate_limiter import IPRateLimiter

__all__ = [
    'load_contact_config',
    'load_settings',
    'ContactConfig',
    'ContactSettings',
    'IPRateLimiter',
]
