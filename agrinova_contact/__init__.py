"""
AgriNova contact form relay.

Validates website contact submissions and sends a team notification plus an
auto-reply through the Zoho Mail REST API.
"""

__version__ = "1.0.0"
