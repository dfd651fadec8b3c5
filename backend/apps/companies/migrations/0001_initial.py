from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('cui', models.CharField(max_length=20, unique=True)),
                ('name', models.CharField(blank=True, max_length=255, null=True)),
                ('caen', models.CharField(blank=True, max_length=10, null=True)),
                ('reporting_year', models.IntegerField(default=2024)),
                ('turnover', models.FloatField(blank=True, null=True)),
                ('fixed_assets', models.FloatField(blank=True, null=True)),
                ('current_assets', models.FloatField(blank=True, null=True)),
                ('balance_sheet_total', models.FloatField(blank=True, null=True)),
                ('equity', models.FloatField(blank=True, null=True)),
                ('net_profit', models.FloatField(blank=True, null=True)),
                ('net_loss', models.FloatField(blank=True, null=True)),
                ('employees', models.IntegerField(blank=True, null=True)),
                ('is_sme', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'company_financials',
                'indexes': [
                    models.Index(fields=['is_sme'], name='company_fin_is_sme_5c1f0e_idx'),
                    models.Index(fields=['reporting_year'], name='company_fin_reporti_8a2b4d_idx'),
                ],
            },
        ),
    ]
