"""GitHub OAuth 2.0 implementation."""
import httpx

from openauth.utils.uri import append_query_args

from ..results import add_item_if_not_empty
from .base import DEFAULT_TIMEOUT_SECONDS, OAuth2Client, ProviderConfig


class GitHubClient(OAuth2Client):
    """GitHub OAuth app login."""

    provider_name = "github"

    AUTHORIZATION_ENDPOINT = "https://github.com/login/oauth/authorize"
    TOKEN_ENDPOINT = "https://github.com/login/oauth/access_token"
    USER_ENDPOINT = "https://api.github.com/user"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        authorization_endpoint: str = AUTHORIZATION_ENDPOINT,
        token_endpoint: str = TOKEN_ENDPOINT,
        user_endpoint: str = USER_ENDPOINT,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        config = ProviderConfig(
            client_id=client_id,
            client_secret=client_secret,
            scopes=(),
            authorization_endpoint=authorization_endpoint,
            token_endpoint=token_endpoint,
            user_endpoint=user_endpoint,
        )
        super().__init__(config, http_client=http_client, timeout=timeout)

    def get_service_login_url(self, return_url: str) -> str:
        return append_query_args(
            self.config.authorization_endpoint,
            [
                ("client_id", self.config.client_id),
                ("redirect_uri", return_url),
            ],
        )

    def build_token_url(self, return_url: str, authorization_code: str) -> str:
        return append_query_args(
            self.config.token_endpoint,
            [
                ("client_id", self.config.client_id),
                ("redirect_uri", return_url),
                ("client_secret", self.config.client_secret),
                ("code", authorization_code),
            ],
        )

    def query_access_token(self, return_url: str, authorization_code: str) -> str | None:
        response = self._token_request("GET", self.build_token_url(return_url, authorization_code))
        return self._token_from_form(response)

    def get_user_data(self, access_token: str) -> dict[str, str]:
        # api.github.com no longer honours the query parameter alone
        payload = self._user_info_request(
            append_query_args(self.config.user_endpoint, [("access_token", access_token)]),
            headers={"Authorization": f"Bearer {access_token}"},
        )
        user_data: dict[str, str] = {}
        for key, value in payload.items():
            add_item_if_not_empty(user_data, key, value)
        return user_data
