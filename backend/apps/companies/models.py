from django.db import models


class Company(models.Model):
    """Financial statement snapshot for one company, keyed by its CUI."""

    cui = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=255, blank=True, null=True)
    caen = models.CharField(max_length=10, blank=True, null=True)
    reporting_year = models.IntegerField(default=2024)

    turnover = models.FloatField(null=True, blank=True)
    fixed_assets = models.FloatField(null=True, blank=True)
    current_assets = models.FloatField(null=True, blank=True)
    balance_sheet_total = models.FloatField(null=True, blank=True)
    equity = models.FloatField(null=True, blank=True)
    net_profit = models.FloatField(null=True, blank=True)
    net_loss = models.FloatField(null=True, blank=True)
    employees = models.IntegerField(null=True, blank=True)

    # Computed at import time, never on read
    is_sme = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'company_financials'
        indexes = [
            models.Index(fields=['is_sme'], name='company_fin_is_sme_5c1f0e_idx'),
            models.Index(fields=['reporting_year'], name='company_fin_reporti_8a2b4d_idx'),
        ]

    def __str__(self):
        return f"{self.name or 'N/A'} ({self.cui})"
