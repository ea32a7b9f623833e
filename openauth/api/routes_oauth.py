"""
OAuth 2.0 login routes.

Endpoints:
- GET  /auth/oauth/providers - List configured providers
- GET  /auth/oauth/{provider}/login - Redirect to the provider
- GET  /auth/oauth/callback - Complete the login

HTTP layer only; the flow itself lives in OAuthService.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from openauth.core.config import get_settings
from openauth.models import schemas
from openauth.services.oauth import OAuthService, create_oauth_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth/oauth", tags=["oauth"])

_DISPLAY_NAMES = {"facebook": "Facebook", "github": "GitHub", "google": "Google"}


def get_oauth_service() -> OAuthService:
    return create_oauth_service()


def _callback_url() -> str:
    return f"{get_settings().BACKEND_URL.rstrip('/')}{router.prefix}/callback"


@router.get("/providers", response_model=schemas.OAuthProvidersOut)
def list_oauth_providers(
    oauth_service: Annotated[OAuthService, Depends(get_oauth_service)],
) -> dict:
    """List the providers that have credentials configured."""
    return {
        "providers": [
            {
                "name": name,
                "display_name": _DISPLAY_NAMES.get(name, name.title()),
                "login_url": f"{router.prefix}/{name}/login",
            }
            for name in oauth_service.providers
        ]
    }


@router.get("/{provider}/login")
def oauth_login(
    provider: str,
    oauth_service: Annotated[OAuthService, Depends(get_oauth_service)],
) -> RedirectResponse:
    """
    Initiate OAuth login flow.

    Unknown providers are answered with 404 by the registered error handler.

    Example:
        GET /auth/oauth/github/login
    """
    login_url = oauth_service.request_authentication(provider, _callback_url())
    return RedirectResponse(url=login_url)


@router.get("/callback", response_model=schemas.AuthenticatedUserOut)
def oauth_callback(
    request: Request,
    oauth_service: Annotated[OAuthService, Depends(get_oauth_service)],
) -> dict:
    """
    Handle the provider redirect.

    The provider is read from the ``__provider__`` argument (or, for Google,
    from inside ``state``).
    """
    result = oauth_service.verify_authentication(dict(request.query_params), _callback_url())
    if not result.is_successful:
        raise HTTPException(status_code=401, detail="OAuth authentication failed")

    logger.info(f"OAuth authentication successful for {result.provider}")
    return {
        "provider": result.provider,
        "provider_user_id": result.provider_user_id,
        "user_name": result.user_name,
        "profile": {k: v for k, v in result.extra_data.items() if k != "accesstoken"},
    }
