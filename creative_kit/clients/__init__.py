"""API clients for external services."""

from .local import LocalSearchClient
from .searchad import SearchAdClient
from .storage import get_supabase_client

__all__ = ["LocalSearchClient", "SearchAdClient", "get_supabase_client"]
