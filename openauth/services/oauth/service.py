"""OAuth service: a registry of login clients keyed by provider name.

Responsibilities:
- Route login requests and callbacks to the right provider client
- Tag return URLs with the provider so callbacks can be routed back
"""
import logging
from collections.abc import Mapping
from enum import Enum

from openauth.utils.uri import (
    append_query_args,
    parse_query_string,
    strip_query_args_with_prefix,
)

from .exceptions import OAuthProviderNotFoundError
from .providers import OAuth2Client
from .results import AuthenticationResult

logger = logging.getLogger(__name__)

PROVIDER_QUERY_ARG = "__provider__"


def _provider_key(name: str | Enum) -> str:
    return name.value if isinstance(name, Enum) else name


class OAuthService:
    """
    Registry of OAuth login clients.

    Return URLs handed to providers carry a ``__provider__`` argument so the
    callback can be matched to the client that started the login.
    """

    def __init__(self):
        self._providers: dict[str, OAuth2Client] = {}

    def register_provider(self, name: str | Enum, client: OAuth2Client) -> None:
        """
        Register an OAuth client.

        Args:
            name: Provider identifier (e.g., "google")
            client: OAuth2Client instance
        """
        key = _provider_key(name)
        self._providers[key] = client
        logger.info(f"Registered OAuth provider: {key}")

    def get_provider(self, name: str | Enum) -> OAuth2Client:
        """
        Get registered OAuth client.

        Raises:
            OAuthProviderNotFoundError: If provider not registered
        """
        key = _provider_key(name)
        if key not in self._providers:
            raise OAuthProviderNotFoundError(f"OAuth provider '{key}' not registered")
        return self._providers[key]

    @property
    def providers(self) -> list[str]:
        return list(self._providers)

    def request_authentication(self, provider_name: str | Enum, return_url: str) -> str:
        """Login URL for ``provider_name`` that comes back to ``return_url``."""
        client = self.get_provider(provider_name)
        return client.request_authentication(
            qualify_return_url(_provider_key(provider_name), return_url)
        )

    @staticmethod
    def get_provider_name(query_params: Mapping[str, str]) -> str | None:
        """Provider named in a callback, looking inside Google's ``state`` too."""
        name = query_params.get(PROVIDER_QUERY_ARG)
        if name:
            return name
        state = query_params.get("state")
        if state:
            return dict(parse_query_string(state)).get(PROVIDER_QUERY_ARG) or None
        return None

    def verify_authentication(
        self,
        query_params: Mapping[str, str],
        return_url: str,
        provider_name: str | Enum | None = None,
    ) -> AuthenticationResult:
        """
        Complete a login for the provider named in the callback.

        Args:
            query_params: Callback query parameters
            return_url: Return URL given to request_authentication, with or
                without the ``__provider__`` argument
            provider_name: Overrides the provider read from the callback

        Returns:
            AuthenticationResult; unknown providers give a failed result
        """
        if query_params is None:
            raise ValueError("query_params must not be None")
        if return_url is None:
            raise ValueError("return_url must not be None")

        name = _provider_key(provider_name) if provider_name else self.get_provider_name(query_params)
        try:
            if not name:
                raise OAuthProviderNotFoundError("Callback does not name an OAuth provider")
            client = self.get_provider(name)
        except OAuthProviderNotFoundError as e:
            logger.warning(f"OAuth callback rejected: {e}")
            return AuthenticationResult.failed(e)

        return client.verify_authentication(query_params, qualify_return_url(name, return_url))


def qualify_return_url(provider_name: str, return_url: str) -> str:
    """Replace any ``__provider__`` argument on ``return_url`` with ``provider_name``."""
    url = strip_query_args_with_prefix(return_url, PROVIDER_QUERY_ARG)
    return append_query_args(url, [(PROVIDER_QUERY_ARG, provider_name)])
