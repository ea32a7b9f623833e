"""OAuth service exceptions.

These never escape ``OAuth2Client.verify_authentication``; they are attached
to failed results so the cause can be logged.
"""


class OAuthProviderError(Exception):
    """Raised when OAuth provider communication fails."""


class OAuthCallbackError(OAuthProviderError):
    """Raised when the provider callback carries no authorization code."""


class OAuthTokenError(OAuthProviderError):
    """Raised when token exchange fails."""


class OAuthUserInfoError(OAuthProviderError):
    """Raised when fetching user info fails."""


class OAuthProviderNotFoundError(OAuthProviderError, ValueError):
    """Raised when a provider name is unknown or not registered."""
