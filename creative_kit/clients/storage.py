"""Supabase client for cache storage."""

from supabase import Client, create_client

from .. import config
from ..errors import ConfigurationError

_client = None


def get_supabase_client() -> Client:
    """
    Create (once) and return the service-role Supabase client.

    Raises:
        ConfigurationError: If SUPABASE_URL or the service role key is not set
    """
    global _client

    if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_ROLE_KEY:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

    if _client is None:
        _client = create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY)

    return _client
