"""
Access to the hosted backend (table REST interface and email/password auth)
through the supabase async client.
"""

from commanders_vault.hosted.auth import AuthClient
from commanders_vault.hosted.client import connect, error_message

__all__ = [
    "AuthClient",
    "connect",
    "error_message",
]
