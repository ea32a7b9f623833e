"""Abstract base class for OAuth 2.0 login clients.

Implements the shared authorization code flow:
redirect -> callback -> token exchange -> user info.
Subclasses supply the provider-specific URLs and response parsing.
"""
import hashlib
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from openauth.utils.uri import parse_query_string

from ..exceptions import (
    OAuthCallbackError,
    OAuthProviderError,
    OAuthTokenError,
    OAuthUserInfoError,
)
from ..results import AuthenticationResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class ProviderConfig:
    """Immutable settings for a single provider client."""

    client_id: str
    client_secret: str
    scopes: tuple[str, ...]
    authorization_endpoint: str
    token_endpoint: str
    user_endpoint: str

    def __post_init__(self) -> None:
        for name in ("client_id", "client_secret"):
            value = getattr(self, name)
            if value is None or not str(value).strip():
                raise ValueError(f"{name} must not be blank")


def code_fingerprint(code: str) -> str:
    """Short, non-reversible tag for an authorization code, safe to log."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()[:12]


class OAuth2Client(ABC):
    """
    Abstract base class for OAuth 2.0 login clients.

    Implements the OAuth 2.0 authorization code flow.
    Subclasses must implement provider-specific details.
    """

    provider_name: str = ""

    def __init__(
        self,
        config: ProviderConfig,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize OAuth client.

        Args:
            config: Credentials, scopes and endpoints for the provider
            http_client: Optional shared client; a short-lived one is opened per request otherwise
            timeout: Per-request timeout in seconds when no client is supplied
        """
        if not self.provider_name:
            raise ValueError("provider_name must be set on the client class")
        self.config = config
        self.timeout = timeout
        self._http_client = http_client

    @abstractmethod
    def get_service_login_url(self, return_url: str) -> str:
        """Provider login URL that sends the user back to ``return_url``."""

    @abstractmethod
    def query_access_token(self, return_url: str, authorization_code: str) -> str | None:
        """
        Exchange an authorization code for an access token.

        Returns:
            The access token, or None if the provider did not issue one

        Raises:
            OAuthTokenError: If the exchange request fails
        """

    @abstractmethod
    def get_user_data(self, access_token: str) -> dict[str, str]:
        """
        Fetch the logged-in user's profile.

        The returned mapping should contain ``id`` and, where available,
        ``username`` and/or ``name``.

        Raises:
            OAuthUserInfoError: If the profile request fails
        """

    def request_authentication(self, return_url: str) -> str:
        """Return the URL the user agent must be redirected to."""
        if return_url is None:
            raise ValueError("return_url must not be None")
        login_url = self.get_service_login_url(return_url)
        logger.info(f"Initiating OAuth login | provider={self.provider_name}")
        return login_url

    def verify_authentication(
        self, query_params: Mapping[str, str], return_url: str
    ) -> AuthenticationResult:
        """
        Complete the login after the provider redirects back.

        Args:
            query_params: Query parameters of the callback request
            return_url: The same return URL given to request_authentication

        Returns:
            Successful result with the user's profile, or a failed result
        """
        if query_params is None:
            raise ValueError("query_params must not be None")
        if return_url is None:
            raise ValueError("return_url must not be None")

        try:
            return self._complete_login(query_params, return_url)
        except OAuthProviderError as e:
            logger.warning(
                f"OAuth verification failed | provider={self.provider_name} "
                f"cause={type(e).__name__} reason={e}"
            )
            return AuthenticationResult.failed(e)

    def _complete_login(
        self, query_params: Mapping[str, str], return_url: str
    ) -> AuthenticationResult:
        code = query_params.get("code")
        if not code:
            raise OAuthCallbackError("No authorization code in callback")

        logger.info(
            f"Token exchange attempt | provider={self.provider_name} "
            f"code_hash={code_fingerprint(code)} client_id={self.config.client_id}"
        )
        access_token = self.query_access_token(return_url, code)
        if not access_token:
            raise OAuthTokenError("No access token in response")

        user_data = self.get_user_data(access_token)
        user_id = user_data.get("id") if user_data else None
        if not user_id:
            raise OAuthUserInfoError("User id not provided by OAuth provider")

        # Not every provider returns a username
        user_name = user_data.get("username") or user_data.get("name") or user_id

        profile = dict(user_data)
        profile["accesstoken"] = access_token

        logger.info(f"User authenticated via {self.provider_name}: id={user_id}")
        return AuthenticationResult.success(
            provider=self.provider_name,
            provider_user_id=user_id,
            user_name=user_name,
            extra_data=profile,
        )

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            response = self._http_client.request(method, url, timeout=self.timeout, **kwargs)
        else:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    def _token_request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._send(method, url, **kwargs)
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Token exchange failed | provider={self.provider_name} "
                f"status={e.response.status_code} response={e.response.text}"
            )
            raise OAuthTokenError(f"Token exchange failed: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Token exchange request failed: {str(e)}")
            raise OAuthTokenError("Failed to connect to OAuth provider") from e

    def _user_info_request(self, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._send("GET", url, **kwargs)
        except httpx.HTTPStatusError as e:
            logger.error(f"User info fetch failed: {e.response.text}")
            raise OAuthUserInfoError(f"User info fetch failed: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"User info request failed: {str(e)}")
            raise OAuthUserInfoError("Failed to connect to OAuth provider") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise OAuthUserInfoError("User info response is not valid JSON") from e
        if not isinstance(payload, dict):
            raise OAuthUserInfoError("User info response is not a JSON object")
        return payload

    @staticmethod
    def _token_from_form(response: httpx.Response) -> str | None:
        """Read ``access_token`` from a form-urlencoded token response."""
        body = response.text
        if not body:
            return None
        return dict(parse_query_string(body)).get("access_token")

    @staticmethod
    def _token_from_json(response: httpx.Response) -> str | None:
        """Read ``access_token`` from a JSON token response."""
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as e:
            raise OAuthTokenError("Token response is not valid JSON") from e
        if not isinstance(payload, dict):
            raise OAuthTokenError("Token response is not a JSON object")
        token = payload.get("access_token")
        if token is not None and not isinstance(token, str):
            raise OAuthTokenError("Token response access_token is not a string")
        return token
