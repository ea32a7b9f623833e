"""Facebook OAuth 2.0 implementation."""
from urllib.parse import quote

import httpx

from openauth.utils.uri import (
    append_query_args,
    build_query_string,
    escape_rfc3986,
    normalize_hex_encoding,
)

from ..results import add_item_if_not_empty
from .base import DEFAULT_TIMEOUT_SECONDS, OAuth2Client, ProviderConfig

# Left unescaped in the token request redirect_uri; & # + and spaces are not
REDIRECT_URI_SAFE = ":/?=%@!$'()*,;"

# Graph fields copied as-is; "email" is mapped to "username" separately
FACEBOOK_PROFILE_FIELDS = ("name", "link", "gender", "birthday")


class FacebookClient(OAuth2Client):
    """Facebook login via the Graph API."""

    provider_name = "facebook"

    AUTHORIZATION_ENDPOINT = "https://www.facebook.com/dialog/oauth"
    TOKEN_ENDPOINT = "https://graph.facebook.com/oauth/access_token"
    GRAPH_ENDPOINT = "https://graph.facebook.com"
    DEFAULT_SCOPE = "email"

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        scope: str = DEFAULT_SCOPE,
        *,
        authorization_endpoint: str = AUTHORIZATION_ENDPOINT,
        token_endpoint: str = TOKEN_ENDPOINT,
        graph_endpoint: str = GRAPH_ENDPOINT,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not scope or not scope.strip():
            raise ValueError("scope must not be blank")
        config = ProviderConfig(
            client_id=app_id,
            client_secret=app_secret,
            scopes=(scope,),
            authorization_endpoint=authorization_endpoint,
            token_endpoint=token_endpoint,
            user_endpoint=f"{graph_endpoint.rstrip('/')}/me",
        )
        super().__init__(config, http_client=http_client, timeout=timeout)

    @property
    def scope(self) -> str:
        return self.config.scopes[0]

    def get_service_login_url(self, return_url: str) -> str:
        return append_query_args(
            self.config.authorization_endpoint,
            [
                ("client_id", self.config.client_id),
                ("redirect_uri", return_url),
                ("scope", self.scope),
            ],
        )

    def build_token_url(self, return_url: str, authorization_code: str) -> str:
        """Token endpoint URL for ``authorization_code``.

        Facebook compares ``redirect_uri`` against the login request as sent,
        so its existing escapes go out as given with their hex uppercased.
        Only characters that would split the token query are escaped.
        """
        query = "&".join(
            [
                build_query_string([("client_id", self.config.client_id)]),
                "redirect_uri=" + quote(normalize_hex_encoding(return_url), safe=REDIRECT_URI_SAFE),
                build_query_string(
                    [
                        ("client_secret", self.config.client_secret),
                        ("code", authorization_code),
                        ("scope", self.scope),
                    ]
                ),
            ]
        )
        return f"{self.config.token_endpoint}?{query}"

    def query_access_token(self, return_url: str, authorization_code: str) -> str | None:
        response = self._token_request("GET", self.build_token_url(return_url, authorization_code))
        return self._token_from_form(response)

    def get_user_data(self, access_token: str) -> dict[str, str]:
        url = f"{self.config.user_endpoint}?access_token={escape_rfc3986(access_token)}"
        graph_data = self._user_info_request(url)

        # Facebook has no username, the email stands in for it
        user_data: dict[str, str] = {}
        add_item_if_not_empty(user_data, "id", graph_data.get("id"))
        add_item_if_not_empty(user_data, "username", graph_data.get("email"))
        for field in FACEBOOK_PROFILE_FIELDS:
            add_item_if_not_empty(user_data, field, graph_data.get(field))
        return user_data
