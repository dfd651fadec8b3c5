import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='WishlistItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_id', models.CharField(max_length=64)),
                ('product_url', models.URLField(max_length=2048)),
                ('product_title', models.CharField(blank=True, max_length=255, null=True)),
                ('product_price', models.CharField(blank=True, max_length=64, null=True)),
                ('product_image', models.URLField(blank=True, max_length=2048, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'wishlist',
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('user_id', 'product_url'), name='unique_user_product_url'),
                ],
            },
        ),
    ]
