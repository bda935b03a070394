"""Lazily created Supabase client shared by the task and user stores"""
import logging
from typing import Optional

from supabase import Client, create_client  # type: ignore

from app import config

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Return the shared client, connecting on first use.

    Credentials are only required here, so the app and its tests can be
    imported without a configured Supabase project.
    """
    global _client

    if _client is None:
        if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        logger.info(f"Connecting to Supabase at {config.SUPABASE_URL}")
        _client = create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY)

    return _client


def use_supabase_client(client: Client) -> None:
    """Install an already built client (in-memory fakes, scripts)"""
    global _client
    _client = client


def reset_supabase_client() -> None:
    global _client
    _client = None
