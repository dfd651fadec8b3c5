"""Management command to verify the completion endpoint streams."""
from django.core.management.base import BaseCommand

from chat_client.stream import StreamReassembler
from core.clients.completion_client import CompletionError, open_completion_stream, relay_stream


class Command(BaseCommand):
    help = "Verify the streaming completion endpoint"

    def handle(self, *args, **options):
        self.stdout.write("Checking completion endpoint...\n")

        try:
            response = open_completion_stream([{"role": "user", "content": "Spune 'Salut' într-un cuvânt."}])
        except CompletionError as e:
            self.stdout.write(self.style.ERROR(f"  Completion failed ({e.kind}, {e.status_code}): {e.detail[:200]}"))
            return

        reassembler = StreamReassembler()
        deltas = 0
        for chunk in relay_stream(response):
            deltas += len(reassembler.feed(chunk))

        self.stdout.write(f"  Deltas received: {deltas}")
        self.stdout.write(f"  Stream terminated: {reassembler.done}")
        self.stdout.write(f"  Response: {reassembler.content[:100]}")
        self.stdout.write(self.style.SUCCESS("\nCompletion endpoint works!"))
