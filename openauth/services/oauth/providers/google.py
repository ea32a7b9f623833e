"""Google OAuth 2.0 implementation.

Google only guarantees to return ``code`` and ``state`` to the redirect URI,
so the return URL's own query is packed into ``state`` at login and merged
back into the callback parameters before verification.
"""
from collections.abc import Iterable, Mapping

import httpx

from openauth.utils.uri import (
    append_query_args,
    get_left_part_path,
    get_query,
    parse_query_string,
)

from ..results import AuthenticationResult, add_item_if_not_empty
from .base import DEFAULT_TIMEOUT_SECONDS, OAuth2Client, ProviderConfig

STATE_PROVIDER_MARKER = "__provider__=google"


class GoogleClient(OAuth2Client):
    """Google OAuth 2.0 login."""

    provider_name = "google"

    AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_ENDPOINT = "https://accounts.google.com/o/oauth2/token"
    USER_ENDPOINT = "https://www.googleapis.com/oauth2/v1/userinfo"
    SCOPE_BASE_URL = "https://www.googleapis.com/auth/"
    DEFAULT_SCOPES = ("userinfo.profile", "userinfo.email")

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        scopes: Iterable[str] = DEFAULT_SCOPES,
        *,
        authorization_endpoint: str = AUTHORIZATION_ENDPOINT,
        token_endpoint: str = TOKEN_ENDPOINT,
        user_endpoint: str = USER_ENDPOINT,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        scopes = tuple(scopes)
        if not scopes or any(not scope for scope in scopes):
            raise ValueError("scopes must be a non-empty sequence of non-empty strings")
        config = ProviderConfig(
            client_id=client_id,
            client_secret=client_secret,
            scopes=scopes,
            authorization_endpoint=authorization_endpoint,
            token_endpoint=token_endpoint,
            user_endpoint=user_endpoint,
        )
        super().__init__(config, http_client=http_client, timeout=timeout)

    @property
    def scope(self) -> str:
        """Requested scopes as absolute URLs, space separated."""
        return " ".join(
            scope if scope.lower().startswith("http") else self.SCOPE_BASE_URL + scope
            for scope in self.config.scopes
        )

    def get_service_login_url(self, return_url: str) -> str:
        return append_query_args(
            self.config.authorization_endpoint,
            [
                ("response_type", "code"),
                ("client_id", self.config.client_id),
                ("scope", self.scope),
                ("redirect_uri", get_left_part_path(return_url)),
                ("state", get_query(return_url)),
            ],
        )

    def query_access_token(self, return_url: str, authorization_code: str) -> str | None:
        response = self._token_request(
            "POST",
            self.config.token_endpoint,
            data={
                "grant_type": "authorization_code",
                "code": authorization_code,
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "redirect_uri": get_left_part_path(return_url),
            },
        )
        return self._token_from_json(response)

    def get_user_data(self, access_token: str) -> dict[str, str]:
        payload = self._user_info_request(
            append_query_args(self.config.user_endpoint, [("access_token", access_token)])
        )
        user_data: dict[str, str] = {}
        for key, value in payload.items():
            add_item_if_not_empty(user_data, key, value)
        return user_data

    def verify_authentication(
        self, query_params: Mapping[str, str], return_url: str
    ) -> AuthenticationResult:
        if query_params is None:
            raise ValueError("query_params must not be None")
        state = query_params.get("state")
        if state and STATE_PROVIDER_MARKER in state:
            query_params = unpack_state(query_params)
        return super().verify_authentication(query_params, return_url)


def unpack_state(query_params: Mapping[str, str]) -> dict[str, str]:
    """Merge the arguments packed in ``state`` back into the callback arguments.

    Callback arguments win over packed ones; ``state`` itself is dropped.
    """
    merged = dict(parse_query_string(query_params.get("state")))
    for key, value in query_params.items():
        merged[key] = value
    merged.pop("state", None)
    return merged
