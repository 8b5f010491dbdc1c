from supabase import create_client, Client
from app.config import settings
from typing import Any, Callable, Dict, List, Optional


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_user_client(cls, access_token: str) -> Client:
        """Client that sends the caller's JWT to PostgREST, so every query runs under their RLS policies.

        A fresh client per request: setting the token mutates the client's headers.
        """
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.postgrest.auth(access_token)
        return client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Use in maintenance scripts only."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def fetch_all_rows(build_query: Callable[[], Any], page_size: Optional[int] = None) -> List[Dict[str, Any]]:
    """Read every row of an ordered query, one .range() page at a time.

    PostgREST truncates a response at its max-rows setting, so a single
    execute() can silently miss rows. build_query must return a fresh builder
    each call.
    """
    page_size = page_size or settings.postgrest_max_rows
    rows = []
    start = 0
    while True:
        page = build_query().range(start, start + page_size - 1).execute().data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        start += page_size
