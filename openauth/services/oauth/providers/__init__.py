"""OAuth providers module."""
from enum import Enum

from .base import OAuth2Client, ProviderConfig
from .facebook import FacebookClient
from .github import GitHubClient
from .google import GoogleClient


class OAuthProviderName(str, Enum):
    FACEBOOK = "facebook"
    GITHUB = "github"
    GOOGLE = "google"


PROVIDER_CLASSES: dict[OAuthProviderName, type[OAuth2Client]] = {
    OAuthProviderName.FACEBOOK: FacebookClient,
    OAuthProviderName.GITHUB: GitHubClient,
    OAuthProviderName.GOOGLE: GoogleClient,
}

__all__ = [
    "OAuth2Client",
    "ProviderConfig",
    "OAuthProviderName",
    "PROVIDER_CLASSES",
    "FacebookClient",
    "GitHubClient",
    "GoogleClient",
]
