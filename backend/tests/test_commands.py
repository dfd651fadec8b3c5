"""Operational management command tests."""
import io
from unittest.mock import MagicMock, patch

from django.core.management import call_command

from core.clients.completion_client import CompletionError


class TestCheckCommands:
    """check_settings / check_completion / check_supabase tests."""

    def test_check_settings_hides_secrets(self):
        out = io.StringIO()

        with patch("core.management.commands.check_settings.settings") as mock_settings:
            mock_settings.serp_api_key = "secret-value"
            mock_settings.large_retailer_domains = ["emag.ro"]
            mock_settings.media_site_patterns = []
            call_command("check_settings", stdout=out)

        assert "SERP_API_KEY: configured" in out.getvalue()
        assert "secret-value" not in out.getvalue()

    @patch("core.management.commands.check_completion.open_completion_stream")
    def test_check_completion_reassembles_stream(self, mock_open):
        upstream = MagicMock()
        upstream.iter_content.return_value = iter([
            b'data: {"choices":[{"delta":{"content":"Salut"}}]}\n',
            b"data: [DONE]\n",
        ])
        mock_open.return_value = upstream
        out = io.StringIO()

        call_command("check_completion", stdout=out)

        assert "Response: Salut" in out.getvalue()
        assert "Stream terminated: True" in out.getvalue()
        upstream.close.assert_called_once()

    @patch("core.management.commands.check_completion.open_completion_stream")
    def test_check_completion_reports_failure(self, mock_open):
        mock_open.side_effect = CompletionError(CompletionError.NOT_CONFIGURED, 500, "no key")
        out = io.StringIO()

        call_command("check_completion", stdout=out)

        assert "not_configured" in out.getvalue()

    @patch("core.management.commands.check_supabase.health_check", return_value=False)
    def test_check_supabase_failure(self, mock_health):
        out = io.StringIO()

        call_command("check_supabase", stdout=out)

        assert "Supabase connection failed!" in out.getvalue()


class TestChatCommand:
    """Terminal chat command tests."""

    @patch("apps.chatbot.management.commands.chat.input", create=True)
    @patch("apps.chatbot.management.commands.chat.LocalAgentClient")
    def test_prints_reply_while_streaming(self, mock_client_cls, mock_input):
        out = io.StringIO()
        seen_before_last_update = []

        def updates(history):
            yield "Salut!\n"
            yield "Salut!\nIată ce am găsit:\n"
            seen_before_last_update.append(out.getvalue())
            yield (
                "Salut!\nIată ce am găsit:\n\n"
                "1. **Miere de salcâm**\n"
                "   🖼️ Imagine: https://stupina.ro/miere.jpg\n"
                "   🔗 Link: https://stupina.ro/miere\n"
                "   💰 Preț: 45 RON"
            )

        mock_client_cls.return_value.stream_chat.side_effect = updates
        mock_input.side_effect = ["miere", EOFError()]

        call_command("chat", stdout=out)

        # The first line was printed before the stream ended
        assert "Salut!" in seen_before_last_update[0]
        output = out.getvalue()
        assert output.count("Salut!") == 1
        assert "Iată ce am găsit:" in output
        assert "https://stupina.ro/miere" in output
        assert "45 RON" in output
        assert "Imagine:" not in output

    @patch("apps.chatbot.management.commands.chat.input", create=True)
    @patch("apps.chatbot.management.commands.chat.LocalAgentClient")
    def test_rate_limit_drops_the_turn(self, mock_client_cls, mock_input):
        from chat_client.api_client import RateLimitError

        out = io.StringIO()
        mock_client_cls.return_value.stream_chat.side_effect = RateLimitError("Limită atinsă", messages_used=3)
        mock_input.side_effect = ["miere", EOFError()]

        call_command("chat", stdout=out)

        assert "3 mesaje folosite azi" in out.getvalue()
