"""
Process-wide Supabase clients.

The anon client serves every table, storage and sign-in call. The service-role
client exists only when SUPABASE_SERVICE_ROLE_KEY is set; it is used for the
auth admin API (revoking sessions, removing half-registered identities).
"""
from supabase import create_client, Client
from studyhub.config import settings
from typing import Optional


class SupabaseClient:
    _anon: Optional[Client] = None
    _admin: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._anon is None:
            cls._anon = create_client(settings.supabase_url, settings.supabase_key)
        return cls._anon

    @classmethod
    def get_service_client(cls) -> Optional[Client]:
        if not settings.supabase_service_role_key:
            return None
        if cls._admin is None:
            cls._admin = create_client(settings.supabase_url, settings.supabase_service_role_key)
        return cls._admin

    @classmethod
    def reset_client(cls):
        cls._anon = None
        cls._admin = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Optional[Client]:
    return SupabaseClient.get_service_client()
