"""
Integrations layer.
This package contains all code used to communicate with external systems:
- Zoho Accounts (OAuth2 refresh-token exchange)
- Zoho Mail (send-message REST endpoint)

Key rule:
- The request handler MUST NOT call Zoho directly; it goes through the mail sender.
"""
