"""Factory function for creating configured OAuth service."""
import logging

import httpx

from openauth.core.config import BaseAppSettings, get_settings

from .providers import PROVIDER_CLASSES, OAuthProviderName
from .service import OAuthService

logger = logging.getLogger(__name__)


def create_oauth_service(
    settings: BaseAppSettings | None = None,
    http_client: httpx.Client | None = None,
) -> OAuthService:
    """
    Factory function to create configured OAuth service.

    Registers every provider whose client ID and secret are both set.

    Args:
        settings: Settings to read credentials from (defaults to the app settings)
        http_client: Optional client shared by all providers

    Returns:
        Configured OAuthService instance
    """
    settings = settings or get_settings()
    service = OAuthService()

    for name, (client_id, client_secret, options) in _provider_settings(settings).items():
        if not (client_id and client_secret):
            logger.warning(f"{name.value} OAuth not configured (missing client ID/secret)")
            continue
        provider_class = PROVIDER_CLASSES[name]
        service.register_provider(
            name,
            provider_class(
                client_id,
                client_secret,
                **options,
                http_client=http_client,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            ),
        )

    return service


def _provider_settings(settings: BaseAppSettings) -> dict[OAuthProviderName, tuple[str | None, str | None, dict]]:
    return {
        OAuthProviderName.FACEBOOK: (
            settings.FACEBOOK_APP_ID,
            settings.FACEBOOK_APP_SECRET,
            {"scope": settings.FACEBOOK_SCOPE},
        ),
        OAuthProviderName.GITHUB: (settings.GITHUB_CLIENT_ID, settings.GITHUB_CLIENT_SECRET, {}),
        OAuthProviderName.GOOGLE: (
            settings.GOOGLE_CLIENT_ID,
            settings.GOOGLE_CLIENT_SECRET,
            {"scopes": settings.GOOGLE_SCOPES},
        ),
    }
