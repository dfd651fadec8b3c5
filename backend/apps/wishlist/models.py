import uuid

from django.db import models


class WishlistItem(models.Model):
    """A product a user saved from a chat answer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64)
    product_url = models.URLField(max_length=2048)
    product_title = models.CharField(max_length=255, blank=True, null=True)
    product_price = models.CharField(max_length=64, blank=True, null=True)
    product_image = models.URLField(max_length=2048, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'wishlist'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user_id', 'product_url'], name='unique_user_product_url'),
        ]

    def __str__(self):
        return f"{self.product_title or self.product_url} ({self.user_id})"
