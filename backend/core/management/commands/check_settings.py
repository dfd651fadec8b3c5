"""Management command to verify Pydantic settings are working."""
from django.core.management.base import BaseCommand

from settings import settings


class Command(BaseCommand):
    help = "Verify Pydantic settings are loaded correctly"

    def handle(self, *args, **options):
        self.stdout.write("Checking Pydantic settings...\n")

        self.stdout.write(f"  DJANGO_DEBUG: {settings.django_debug}")
        self.stdout.write(f"  ALLOWED_HOSTS: {settings.allowed_hosts_list}")

        # Show whether keys are configured, never their values
        keys = {
            "SUPABASE_URL": settings.supabase_url,
            "SUPABASE_KEY": settings.supabase_key,
            "SERP_API_KEY": settings.serp_api_key,
            "TAVILY_API_KEY": settings.tavily_api_key,
            "GOOGLE_PLACES_API_KEY": settings.google_places_api_key,
            "GOOGLE_API_KEY": settings.google_api_key,
            "STRIPE_SECRET_KEY": settings.stripe_secret_key,
        }
        for name, value in keys.items():
            self.stdout.write(f"  {name}: {'configured' if value else 'NOT SET'}")

        self.stdout.write(f"  DB_ENGINE: {settings.db_engine}")
        self.stdout.write(f"  DB_NAME: {settings.db_name}")
        self.stdout.write(f"  FREE_MESSAGES_PER_DAY: {settings.free_messages_per_day}")
        self.stdout.write(f"  MIN_RATING_THRESHOLD: {settings.min_rating_threshold}")
        self.stdout.write(f"  Blocked retailers: {len(settings.large_retailer_domains)}, "
                          f"media patterns: {len(settings.media_site_patterns)}")

        self.stdout.write(self.style.SUCCESS("\nSettings loaded successfully!"))
