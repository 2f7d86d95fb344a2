"""
Supabase client configuration for the identity provider.
Handles lazy async client creation with configuration checks and error handling.
"""

from typing import Optional

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from plantgenius.shared.core.exceptions import ConfigurationError, ExternalServiceError
from plantgenius.shared.utils.logging import get_logger

from .settings import Settings, get_settings

logger = get_logger(__name__)


class SupabaseManager:
    """
    Supabase client manager.
    Creates the async client on first use and reuses it afterwards.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._client: Optional[AsyncClient] = None
        self.settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.SUPABASE_URL and self.settings.SUPABASE_ANON_KEY)

    async def get_client(self) -> AsyncClient:
        """Get or create the Supabase client with lazy initialization."""
        if self._client is None:
            self._client = await self._create_client()
        return self._client

    async def _create_client(self) -> AsyncClient:
        if not self.settings.SUPABASE_URL:
            raise ConfigurationError("Supabase URL is not configured", setting="SUPABASE_URL")
        if not self.settings.SUPABASE_ANON_KEY:
            raise ConfigurationError("Supabase anon key is not configured", setting="SUPABASE_ANON_KEY")

        try:
            # Session persistence is handled by AuthService's local storage
            client_options = AsyncClientOptions(
                headers={
                    "User-Agent": f"{self.settings.APP_NAME}/{self.settings.APP_VERSION}",
                },
                auto_refresh_token=True,
                persist_session=False,
            )

            client = await acreate_client(
                self.settings.SUPABASE_URL,
                self.settings.SUPABASE_ANON_KEY,
                options=client_options,
            )

            logger.info("Supabase client initialized successfully")
            return client

        except Exception as e:
            logger.error("Failed to initialize Supabase client", error=str(e))
            raise ExternalServiceError(
                f"Supabase initialization failed: {e}",
                service="supabase",
            ) from e

    async def get_auth_client(self):
        """Get Supabase auth client for authentication operations."""
        client = await self.get_client()
        return client.auth


_supabase_manager: Optional[SupabaseManager] = None


def get_supabase_manager() -> SupabaseManager:
    """Process-wide SupabaseManager."""
    global _supabase_manager
    if _supabase_manager is None:
        _supabase_manager = SupabaseManager()
    return _supabase_manager
