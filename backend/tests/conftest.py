import pytest
from rest_framework.test import APIClient

from apps.chatbot.tools.candidates import Candidate
from core.clients.supabase_client import SupabaseUser


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user():
    return SupabaseUser(id="user-1", email="ana@example.ro")


@pytest.fixture
def auth_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


def make_candidate(url, rating=None, small=False, **kwargs):
    return Candidate(
        title=kwargs.pop("title", url),
        url=url,
        rating=rating,
        is_known_small_seller=small,
        **kwargs
    )
