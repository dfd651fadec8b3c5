"""Management command to verify Supabase connection."""
from django.core.management.base import BaseCommand

from core.clients.supabase_client import health_check


class Command(BaseCommand):
    help = "Verify Supabase connection is working"

    def handle(self, *args, **options):
        self.stdout.write("Checking Supabase connection...\n")

        if health_check():
            self.stdout.write(self.style.SUCCESS("Supabase connection successful!"))
        else:
            self.stdout.write(self.style.ERROR("Supabase connection failed!"))
            self.stdout.write("\nMake sure you have:")
            self.stdout.write("  1. SUPABASE_URL set in .env")
            self.stdout.write("  2. SUPABASE_KEY set in .env (service role key)")
            self.stdout.write("  3. A `profiles` table with user_id and email columns")
