"""Wishlist service and endpoint tests."""
import pytest

from apps.wishlist.models import WishlistItem
from apps.wishlist.services import add_to_wishlist, title_from_url

URL = "/api/wishlist/"


class TestTitleFromUrl:
    """title_from_url tests."""

    def test_last_meaningful_segment(self):
        assert title_from_url("https://stupina.ro/produs/miere-de-salcam-500g.html") == "Miere de salcam 500g"

    def test_trailing_digits_stripped(self):
        assert title_from_url("https://shop.ro/p/cana_ceramica_123") == "Cana ceramica"

    def test_falls_back_to_domain(self):
        assert title_from_url("https://www.olarie.ro/") == "Olarie"
        assert title_from_url("https://www.olarie.ro/p/12") == "Olarie"

    def test_not_a_url(self):
        assert title_from_url("miere") == "Produs"


@pytest.mark.django_db
class TestAddToWishlist:
    """add_to_wishlist tests."""

    def test_duplicate_add_is_reported(self):
        first = add_to_wishlist("u1", "https://stupina.ro/miere", title="Miere")
        second = add_to_wishlist("u1", "https://stupina.ro/miere", title="Altceva")

        assert first.created is True
        assert second.created is False
        assert WishlistItem.objects.filter(user_id="u1").count() == 1
        assert second.item.product_title == "Miere"

    def test_placeholder_title_replaced(self):
        result = add_to_wishlist("u1", "https://stupina.ro/miere-poliflora", title="Vezi produs")
        assert result.item.product_title == "Miere poliflora"

    def test_same_url_for_different_users(self):
        add_to_wishlist("u1", "https://stupina.ro/miere")
        add_to_wishlist("u2", "https://stupina.ro/miere")
        assert WishlistItem.objects.count() == 2


@pytest.mark.django_db
class TestWishlistEndpoint:
    """/api/wishlist/ tests."""

    def test_requires_auth(self, api_client):
        assert api_client.get(URL).status_code == 401

    def test_add_list_remove(self, auth_client):
        created = auth_client.post(URL, {
            "url": "https://stupina.ro/miere",
            "title": "Miere de salcâm",
            "price": "45 RON",
            "image": "https://stupina.ro/miere.jpg",
        }, format="json")
        assert created.status_code == 201
        assert created.json()["item"]["product_price"] == "45 RON"

        duplicate = auth_client.post(URL, {"url": "https://stupina.ro/miere"}, format="json")
        assert duplicate.status_code == 200
        assert duplicate.json()["success"] is False
        assert duplicate.json()["alreadyPresent"] is True

        items = auth_client.get(URL).json()["items"]
        assert [i["product_url"] for i in items] == ["https://stupina.ro/miere"]

        removed = auth_client.delete(f"{URL}?url=https://stupina.ro/miere")
        assert removed.json() == {"success": True, "deleted": 1}
        assert auth_client.get(URL).json()["items"] == []

    def test_invalid_url(self, auth_client):
        response = auth_client.post(URL, {"url": "nu-e-url"}, format="json")
        assert response.status_code == 400

    def test_delete_without_url(self, auth_client):
        assert auth_client.delete(URL).status_code == 400
