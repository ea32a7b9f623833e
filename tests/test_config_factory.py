"""Tests for settings validation and the settings-driven OAuth factory."""
import pytest

from openauth.core.config import BaseAppSettings, ProdSettings, get_settings
from openauth.services.oauth import (
    FacebookClient,
    GitHubClient,
    GoogleClient,
    create_oauth_service,
)
from openauth.services.oauth.providers import PROVIDER_CLASSES, OAuthProviderName


def _settings(cls=BaseAppSettings, **overrides):
    return cls(_env_file=None, **overrides)


class TestSettings:
    def test_test_profile_selected(self):
        assert get_settings().ENV == "test"

    def test_defaults(self):
        s = _settings()
        assert s.FACEBOOK_SCOPE == "email"
        assert s.GOOGLE_SCOPES == ["userinfo.profile", "userinfo.email"]
        assert s.HTTP_TIMEOUT_SECONDS == 10.0

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="HTTP_TIMEOUT_SECONDS"):
            _settings(HTTP_TIMEOUT_SECONDS=0)

    def test_prod_rejects_half_configured_provider(self):
        with pytest.raises(ValueError, match="GITHUB_CLIENT_ID/GITHUB_CLIENT_SECRET"):
            _settings(ProdSettings, ENV="prod", GITHUB_CLIENT_ID="gh-id")

    def test_prod_uses_json_logs(self):
        assert _settings(ProdSettings, ENV="prod").LOG_FORMAT == "json"

    def test_dev_tolerates_half_configured_provider(self):
        assert _settings(GITHUB_CLIENT_ID="gh-id").GITHUB_CLIENT_SECRET is None


class TestCreateOAuthService:
    def test_nothing_configured(self):
        assert create_oauth_service(_settings()).providers == []

    def test_registers_configured_providers(self):
        service = create_oauth_service(
            _settings(
                FACEBOOK_APP_ID="fb-id",
                FACEBOOK_APP_SECRET="fb-secret",
                GITHUB_CLIENT_ID="gh-id",
                GITHUB_CLIENT_SECRET="gh-secret",
                GOOGLE_CLIENT_ID="g-id",
                GOOGLE_CLIENT_SECRET="g-secret",
            )
        )
        assert service.providers == ["facebook", "github", "google"]
        assert isinstance(service.get_provider("facebook"), FacebookClient)
        assert isinstance(service.get_provider("github"), GitHubClient)
        assert isinstance(service.get_provider("google"), GoogleClient)

    def test_skips_provider_without_secret(self):
        service = create_oauth_service(_settings(GITHUB_CLIENT_ID="gh-id"))
        assert "github" not in service.providers

    def test_settings_flow_into_clients(self):
        service = create_oauth_service(
            _settings(
                FACEBOOK_APP_ID="fb-id",
                FACEBOOK_APP_SECRET="fb-secret",
                FACEBOOK_SCOPE="public_profile",
                GOOGLE_CLIENT_ID="g-id",
                GOOGLE_CLIENT_SECRET="g-secret",
                GOOGLE_SCOPES=["openid"],
                HTTP_TIMEOUT_SECONDS=3.5,
            )
        )
        facebook = service.get_provider("facebook")
        google = service.get_provider("google")
        assert facebook.scope == "public_profile"
        assert facebook.timeout == 3.5
        assert google.config.scopes == ("openid",)

    def test_shared_http_client(self, mock_http, no_network):
        http, _ = mock_http(no_network)
        service = create_oauth_service(
            _settings(GITHUB_CLIENT_ID="gh-id", GITHUB_CLIENT_SECRET="gh-secret"),
            http_client=http,
        )
        assert service.get_provider("github")._http_client is http

    def test_provider_classes_drive_construction(self, monkeypatch):
        class EnterpriseGitHubClient(GitHubClient):
            pass

        monkeypatch.setitem(PROVIDER_CLASSES, OAuthProviderName.GITHUB, EnterpriseGitHubClient)
        service = create_oauth_service(_settings(GITHUB_CLIENT_ID="gh-id", GITHUB_CLIENT_SECRET="gh-secret"))
        assert type(service.get_provider("github")) is EnterpriseGitHubClient
