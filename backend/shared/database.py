"""
Supabase client for the account and note repositories.

One service-role client is shared by the process. Row ownership is
enforced in the repositories (every note query filters on user_id),
not by Supabase row level security.
"""

import logging
from typing import Optional

from supabase import create_client, Client

from .config import Settings, get_settings
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_service_client: Optional[Client] = None


def is_database_configured(settings: Settings) -> bool:
    return bool(settings.supabase_url and settings.supabase_service_role_key)


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Get the shared service-role client, creating it on first use.

    Args:
        settings: Settings to read credentials from; defaults to get_settings()

    Raises:
        ConfigurationError: If the Supabase URL or service role key is unset
    """
    global _service_client

    if _service_client is None:
        settings = settings or get_settings()
        if not is_database_configured(settings):
            raise ConfigurationError(
                "Database is not configured",
                code="DATABASE_NOT_CONFIGURED",
                details={"required": ["SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"]},
            )
        logger.info(f"Connecting to Supabase at {settings.supabase_url}")
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """Drop the cached client so the next call reconnects."""
    global _service_client
    _service_client = None
