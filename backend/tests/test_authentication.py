"""Bearer token authentication tests."""
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from core.clients.supabase_client import SupabaseUser, get_user_from_token
from settings import settings


class TestGetUserFromToken:
    """get_user_from_token tests."""

    def test_not_configured(self):
        with patch.object(settings, "supabase_url", None):
            assert get_user_from_token("tok") is None

    @patch("core.clients.supabase_client.get_supabase_client")
    def test_valid_token(self, mock_client):
        mock_client.return_value.auth.get_user.return_value = SimpleNamespace(
            user=SimpleNamespace(id="abc", email="ana@example.ro")
        )

        with patch.object(settings, "supabase_url", "https://x.supabase.co"), \
                patch.object(settings, "supabase_key", "key"):
            user = get_user_from_token("tok")

        assert user == SupabaseUser(id="abc", email="ana@example.ro")
        assert user.is_authenticated is True

    @patch("core.clients.supabase_client.get_supabase_client")
    def test_invalid_token(self, mock_client):
        mock_client.return_value.auth.get_user.side_effect = Exception("invalid JWT")

        with patch.object(settings, "supabase_url", "https://x.supabase.co"), \
                patch.object(settings, "supabase_key", "key"):
            assert get_user_from_token("tok") is None


class TestSupabaseTokenAuthentication:
    """SupabaseTokenAuthentication through the API."""

    @pytest.mark.django_db
    @patch("core.authentication.get_user_from_token")
    @patch("apps.accounts.entitlements.is_user_subscribed", return_value=True)
    def test_bearer_token_authenticates(self, mock_subscribed, mock_resolve, api_client):
        mock_resolve.return_value = SupabaseUser(id="abc", email="ana@example.ro")

        response = api_client.get("/api/account/usage/", HTTP_AUTHORIZATION="Bearer tok")

        assert response.status_code == 200
        mock_resolve.assert_called_once_with("tok")

    @patch("core.authentication.get_user_from_token", return_value=None)
    def test_bad_token_is_anonymous(self, mock_resolve, api_client):
        response = api_client.get("/api/account/usage/", HTTP_AUTHORIZATION="Bearer bad")

        assert response.status_code == 401
        assert response["WWW-Authenticate"] == "Bearer"

    @patch("core.authentication.get_user_from_token")
    def test_other_schemes_ignored(self, mock_resolve, api_client):
        api_client.get("/api/account/usage/", HTTP_AUTHORIZATION="Basic dXNlcjpwYXNz")
        mock_resolve.assert_not_called()
