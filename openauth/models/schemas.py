"""OAuth API schemas."""
from __future__ import annotations

from pydantic import BaseModel, Field


class OAuthProviderInfo(BaseModel):
    """Information about an OAuth provider."""
    name: str
    display_name: str
    login_url: str


class OAuthProvidersOut(BaseModel):
    """List of configured OAuth providers."""
    providers: list[OAuthProviderInfo]


class AuthenticatedUserOut(BaseModel):
    """Identity returned after a successful OAuth callback."""
    provider: str
    provider_user_id: str
    user_name: str
    profile: dict[str, str] = Field(default_factory=dict, description="Provider profile without the access token")
