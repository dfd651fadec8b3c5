"""DRF authentication backed by Supabase access tokens."""
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.permissions import BasePermission

from core.clients.supabase_client import get_user_from_token
from settings import settings


class SupabaseTokenAuthentication(BaseAuthentication):
    """
    Resolve `Authorization: Bearer <token>` into a SupabaseUser.

    Unknown or invalid tokens leave the request anonymous instead of
    failing it, so the chat endpoint keeps working for visitors.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        header = get_authorization_header(request).decode('utf-8', errors='ignore')
        if not header.startswith(f'{self.keyword} '):
            return None

        token = header[len(self.keyword) + 1:].strip()
        user = get_user_from_token(token)
        if user is None:
            return None
        return (user, token)

    def authenticate_header(self, request):
        return self.keyword


class IsImportAdmin(BasePermission):
    """Allow only authenticated users listed in IMPORT_ADMIN_EMAILS."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not getattr(user, 'is_authenticated', False):
            return False
        email = (getattr(user, 'email', None) or '').lower()
        return bool(email) and email in settings.import_admin_list
