"""
Models for the monthly Green ICT audit report and its run lock.
"""

from django.db import models
from django.utils import timezone


class ReportStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    PENDING_REVIEW = "PENDING_REVIEW", "Pending review"
    PUBLISHED = "PUBLISHED", "Published"


class AuditTrigger(models.TextChoices):
    CRON = "cron", "Scheduler"
    ADMIN = "admin", "Administrator"
    COMMAND = "command", "Management command"


class MonthlyReport(models.Model):
    """
    Canonical output of one audit run for one month.

    A derived snapshot: every run for the month overwrites the whole row.
    archive_sha256 is the SHA-256 of archive_markdown so anyone can verify the
    published text.
    """
    period_month = models.DateField(unique=True, help_text="First day of the reporting month")
    methodology_version = models.CharField(max_length=80)

    # --- Summary figures (kgCO2e) ---
    scope1_kg = models.DecimalField(max_digits=18, decimal_places=4)
    scope2_location_kg = models.DecimalField(max_digits=18, decimal_places=4)
    scope2_market_kg = models.DecimalField(max_digits=18, decimal_places=4)
    gross_location_kg = models.DecimalField(max_digits=18, decimal_places=4)
    gross_market_kg = models.DecimalField(max_digits=18, decimal_places=4)
    offsets_kg = models.DecimalField(max_digits=18, decimal_places=4)
    residual_location_kg = models.DecimalField(max_digits=18, decimal_places=4)
    residual_market_kg = models.DecimalField(max_digits=18, decimal_places=4)

    # --- Audit trail ---
    assumptions = models.JSONField(default=dict, blank=True, help_text="Factors, estimate split and month window used")
    metrics = models.JSONField(default=dict, blank=True, help_text="Operational counters and estimated kWh breakdown")
    archive_markdown = models.TextField()
    archive_sha256 = models.CharField(max_length=64)

    generated_at = models.DateTimeField()
    status = models.CharField(max_length=20, choices=ReportStatus.choices, default=ReportStatus.DRAFT, db_index=True)
    published_at = models.DateTimeField(null=True, blank=True)
    trigger = models.CharField(max_length=20, choices=AuditTrigger.choices, default=AuditTrigger.COMMAND)

    class Meta:
        ordering = ['-period_month']
        verbose_name = "Monthly Emissions Report"
        verbose_name_plural = "Monthly Emissions Reports"

    def __str__(self):
        return f"Green ICT report {self.period_month:%Y-%m} ({self.get_status_display()})"

    @property
    def published(self):
        return self.status == ReportStatus.PUBLISHED

    @property
    def month(self):
        return f"{self.period_month.year:04d}-{self.period_month.month:02d}"


class AuditRunLock(models.Model):
    """ One row per month, row-locked for the duration of an audit run. """
    period_month = models.DateField(unique=True)
    last_started_at = models.DateTimeField(default=timezone.now)
    run_count = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = "Audit Run Lock"
        verbose_name_plural = "Audit Run Locks"

    def __str__(self):
        return f"Audit lock {self.period_month:%Y-%m} ({self.run_count} runs)"
