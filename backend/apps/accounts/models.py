from django.db import models


class MessageUsage(models.Model):
    """Per-user daily chat message counter."""

    user_id = models.CharField(max_length=64)
    usage_date = models.DateField()
    message_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_message_usage'
        constraints = [
            models.UniqueConstraint(fields=['user_id', 'usage_date'], name='unique_user_usage_date'),
        ]

    def __str__(self):
        return f"{self.user_id} {self.usage_date}: {self.message_count}"
