"""Interactive terminal chat against a running backend."""
from django.core.management.base import BaseCommand

from chat_client.api_client import APIError, LocalAgentClient, RateLimitError
from chat_client.markers import parse_message_content

GREETING = (
    "Bună! Sunt agentul tău de comerț local. 🛒 Spune-mi ce cauți și îți voi găsi "
    "cele mai bune opțiuni de la afaceri mici și locale din România."
)

MAX_CARDS = 3


class Command(BaseCommand):
    help = "Chat with the product discovery assistant from the terminal"

    def add_arguments(self, parser):
        parser.add_argument('--url', default='http://localhost:8000', help='Backend base URL')
        parser.add_argument('--token', default=None, help='Supabase access token')

    def handle(self, *args, **options):
        client = LocalAgentClient(options['url'], access_token=options['token'])
        history = [{"role": "assistant", "content": GREETING}]
        self.stdout.write(GREETING + "\n")

        while True:
            try:
                text = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                self.stdout.write("")
                return

            if not text:
                continue
            if text in ('exit', 'quit'):
                return

            history.append({"role": "user", "content": text})
            try:
                # Only user/assistant turns are sent; the greeting is local
                reply = self._stream(client.stream_chat(history[1:]))
            except RateLimitError as e:
                self.stdout.write(self.style.WARNING(f"{e} ({e.messages_used} mesaje folosite azi)"))
                history.pop()
                continue
            except APIError as e:
                self.stdout.write(self.style.ERROR(str(e)))
                history.pop()
                continue

            history.append({"role": "assistant", "content": reply})

    def _stream(self, updates) -> str:
        """
        Print the cleaned reply while it arrives, then the product cards.

        Only complete lines are printed during the stream, since a marker
        line is recognised and stripped once it has ended.
        """
        reply = ""
        printed = ""
        for reply in updates:
            clean = parse_message_content(reply).clean_content
            settled = clean[:clean.rfind("\n") + 1]
            if len(settled) > len(printed) and settled.startswith(printed):
                self.stdout.write(settled[len(printed):], ending="")
                self.stdout.flush()
                printed = settled

        parsed = parse_message_content(reply)
        if parsed.clean_content.startswith(printed):
            self.stdout.write(parsed.clean_content[len(printed):] + "\n")
        else:
            # Earlier lines were rewritten, show the final text whole
            self.stdout.write("\n" + parsed.clean_content + "\n")
        self._render_products(parsed.products)
        return reply

    def _render_products(self, products):
        for product in products[:MAX_CARDS]:
            title = (product.title or 'Produs')[:50]
            self.stdout.write(self.style.SUCCESS(f"  🛍️ {title}"))
            if product.price:
                self.stdout.write(f"     {product.price}")
            self.stdout.write(f"     {product.url}")
            if product.image:
                self.stdout.write(f"     🖼️ {product.image}")
        self.stdout.write("")
