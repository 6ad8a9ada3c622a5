"""
Async supabase client construction.

A client is created per store or per auth call and never shared between
identities: the table interface applies row-level policies based on the
bearer token the client carries.
"""

import logging

from supabase import AsyncClient, AsyncClientOptions, PostgrestAPIError, acreate_client

logger = logging.getLogger(__name__)


async def connect(
    url: str,
    api_key: str,
    access_token: str | None = None,
    timeout: float = 30.0,
) -> AsyncClient:
    """
    Create a client for the hosted backend.

    Args:
        url: Project URL of the hosted backend
        api_key: Public (anon) API key
        access_token: Signed-in user's JWT. Table requests fall back to the
            anon key without one.
        timeout: Table request timeout in seconds
    """
    options = AsyncClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=timeout,
    )
    client = await acreate_client(url.rstrip("/"), api_key, options=options)
    if access_token:
        client.postgrest.auth(access_token)
    return client


def error_message(error: PostgrestAPIError) -> str:
    """Human-readable message of a rejected table request."""
    return error.message or error.details or str(error)
