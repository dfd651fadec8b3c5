from rest_framework import serializers

from .models import WishlistItem


class WishlistItemSerializer(serializers.ModelSerializer):
    """Serializer for WishlistItem model."""

    class Meta:
        model = WishlistItem
        fields = ['id', 'product_url', 'product_title', 'product_price', 'product_image', 'created_at']
        read_only_fields = fields


class WishlistAddSerializer(serializers.Serializer):
    """Serializer for adding a product to the wishlist."""
    url = serializers.URLField(max_length=2048)
    title = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    price = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    image = serializers.URLField(required=False, allow_blank=True, allow_null=True, max_length=2048)
