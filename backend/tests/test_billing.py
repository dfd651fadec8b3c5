"""Stripe subscription lookup tests."""
from unittest.mock import MagicMock, patch

import requests

from core.clients.billing_client import is_user_subscribed
from settings import settings


def _json(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


class TestIsUserSubscribed:
    """is_user_subscribed tests."""

    def test_missing_key_or_email(self):
        with patch.object(settings, "stripe_secret_key", None):
            assert is_user_subscribed("ana@example.ro") is False
        with patch.object(settings, "stripe_secret_key", "sk_test"):
            assert is_user_subscribed(None) is False

    @patch("core.clients.billing_client.requests.get")
    def test_active_subscription(self, mock_get):
        mock_get.side_effect = [
            _json({"data": [{"id": "cus_1"}]}),
            _json({"data": [{"id": "sub_1", "status": "active"}]}),
        ]

        with patch.object(settings, "stripe_secret_key", "sk_test"):
            assert is_user_subscribed("ana@example.ro") is True

        assert mock_get.call_args_list[0].kwargs["params"]["email"] == "ana@example.ro"
        assert mock_get.call_args_list[1].kwargs["params"] == {"customer": "cus_1", "status": "active", "limit": 1}

    @patch("core.clients.billing_client.requests.get")
    def test_no_customer(self, mock_get):
        mock_get.return_value = _json({"data": []})

        with patch.object(settings, "stripe_secret_key", "sk_test"):
            assert is_user_subscribed("ana@example.ro") is False
        assert mock_get.call_count == 1

    @patch("core.clients.billing_client.requests.get")
    def test_no_active_subscription(self, mock_get):
        mock_get.side_effect = [_json({"data": [{"id": "cus_1"}]}), _json({"data": []})]

        with patch.object(settings, "stripe_secret_key", "sk_test"):
            assert is_user_subscribed("ana@example.ro") is False

    @patch("core.clients.billing_client.requests.get")
    def test_transport_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")

        with patch.object(settings, "stripe_secret_key", "sk_test"):
            assert is_user_subscribed("ana@example.ro") is False

    @patch("core.clients.billing_client.requests.get")
    def test_unexpected_payload_shape(self, mock_get):
        mock_get.return_value = _json(["not", "an", "object"])

        with patch.object(settings, "stripe_secret_key", "sk_test"):
            assert is_user_subscribed("ana@example.ro") is False
