"""Streaming completion client tests."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from core.clients.completion_client import CompletionError, open_completion_stream, relay_stream
from settings import settings

MESSAGES = [{"role": "user", "content": "Salut"}]


def _upstream(status_code=200, chunks=(), text=""):
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.text = text
    response.iter_content.return_value = iter(chunks)
    return response


class TestOpenCompletionStream:
    """open_completion_stream tests."""

    def test_not_configured(self):
        with patch.object(settings, "google_api_key", None):
            with pytest.raises(CompletionError) as exc:
                open_completion_stream(MESSAGES)
        assert exc.value.kind == CompletionError.NOT_CONFIGURED

    @pytest.mark.parametrize("status_code,kind", [
        (429, CompletionError.RATE_LIMITED),
        (402, CompletionError.QUOTA_EXCEEDED),
        (503, CompletionError.FAILED),
    ])
    @patch("core.clients.completion_client.requests.post")
    def test_error_status_is_classified(self, mock_post, status_code, kind):
        upstream = _upstream(status_code, text="nope")
        mock_post.return_value = upstream

        with patch.object(settings, "google_api_key", "key"):
            with pytest.raises(CompletionError) as exc:
                open_completion_stream(MESSAGES)

        assert exc.value.kind == kind
        assert exc.value.status_code == status_code
        upstream.close.assert_called_once()

    @patch("core.clients.completion_client.requests.post")
    def test_transport_failure(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")

        with patch.object(settings, "google_api_key", "key"):
            with pytest.raises(CompletionError) as exc:
                open_completion_stream(MESSAGES)
        assert exc.value.kind == CompletionError.FAILED

    @patch("core.clients.completion_client.requests.post")
    def test_streaming_request(self, mock_post):
        mock_post.return_value = _upstream()

        with patch.object(settings, "google_api_key", "key"):
            open_completion_stream(MESSAGES)

        kwargs = mock_post.call_args.kwargs
        assert kwargs["stream"] is True
        assert kwargs["json"]["stream"] is True
        assert kwargs["json"]["messages"] == MESSAGES
        assert kwargs["headers"]["Authorization"] == "Bearer key"


class TestRelayStream:
    """relay_stream tests."""

    def test_bytes_pass_through_unchanged(self):
        chunks = [b'data: {"choices":[{"delta":{"content":"Hi"}}]}\n', b"", b"data: [DONE]\n\n"]
        upstream = _upstream(chunks=chunks)

        assert list(relay_stream(upstream)) == [chunks[0], chunks[2]]
        upstream.close.assert_called_once()

    def test_consumer_stopping_closes_upstream(self):
        upstream = _upstream(chunks=[b"a", b"b", b"c"])

        stream = relay_stream(upstream)
        assert next(stream) == b"a"
        stream.close()

        upstream.close.assert_called_once()

    def test_interrupted_upstream_is_closed(self):
        upstream = _upstream()
        upstream.iter_content.side_effect = requests.ConnectionError("reset")

        assert list(relay_stream(upstream)) == []
        upstream.close.assert_called_once()
