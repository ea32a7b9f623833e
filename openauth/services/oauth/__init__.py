"""OAuth 2.0 "login with X" clients.

Providers:
- Facebook (Graph API)
- GitHub
- Google (OAuth 2.0, return URL query packed into ``state``)
"""
from .exceptions import (
    OAuthCallbackError,
    OAuthProviderError,
    OAuthProviderNotFoundError,
    OAuthTokenError,
    OAuthUserInfoError,
)
from .factory import create_oauth_service
from .providers import (
    PROVIDER_CLASSES,
    FacebookClient,
    GitHubClient,
    GoogleClient,
    OAuth2Client,
    OAuthProviderName,
    ProviderConfig,
)
from .results import AuthenticationResult
from .service import OAuthService

__all__ = [
    # Exceptions
    "OAuthProviderError",
    "OAuthCallbackError",
    "OAuthTokenError",
    "OAuthUserInfoError",
    "OAuthProviderNotFoundError",
    # Providers
    "OAuth2Client",
    "ProviderConfig",
    "OAuthProviderName",
    "PROVIDER_CLASSES",
    "FacebookClient",
    "GitHubClient",
    "GoogleClient",
    # Results
    "AuthenticationResult",
    # Service
    "OAuthService",
    # Factory
    "create_oauth_service",
]
