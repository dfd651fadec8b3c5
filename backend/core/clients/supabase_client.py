import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from supabase import create_client, Client

from settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SupabaseUser:
    """Authenticated principal resolved from a Supabase access token."""

    id: str
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def __str__(self):
        return self.email or self.id


def is_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client instance."""
    return create_client(settings.supabase_url, settings.supabase_key)


def health_check() -> bool:
    """Verify Supabase connection is working."""
    if not is_configured():
        logger.warning("Supabase health check skipped: credentials not configured")
        return False
    try:
        client = get_supabase_client()
        client.table('profiles').select('user_id').limit(1).execute()
        logger.info("Supabase health check passed")
        return True
    except Exception as e:
        logger.error(f"Supabase health check failed: {str(e)}")
        return False


def get_profile_email(user_id: str) -> Optional[str]:
    """Look up the email stored on the user's profile row."""
    try:
        client = get_supabase_client()
        result = (
            client.table('profiles')
            .select('email')
            .eq('user_id', user_id)
            .maybe_single()
            .execute()
        )
        if result and result.data:
            return result.data.get('email')
        return None
    except Exception as e:
        logger.error(f"Error fetching profile for {user_id}: {str(e)}")
        return None


def get_user_from_token(token: str) -> Optional[SupabaseUser]:
    """
    Resolve a bearer access token into a user.

    Returns None when the token is invalid or Supabase is unavailable;
    callers treat that as an anonymous request.
    """
    if not token or not is_configured():
        return None

    try:
        client = get_supabase_client()
        response = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token verification failed: {str(e)}")
        return None

    user = getattr(response, 'user', None)
    if user is None:
        return None

    email = getattr(user, 'email', None) or get_profile_email(user.id)
    return SupabaseUser(id=str(user.id), email=email)
