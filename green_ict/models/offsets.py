# green_ict/models/offsets.py
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class OffsetStatus(models.TextChoices):
    PLANNED = "planned", "Planned"
    PURCHASED = "purchased", "Purchased"
    RETIRED = "retired", "Retired"


class OffsetRecord(models.Model):
    """
    A carbon offset applicable to a reporting month.

    Only retired offsets are netted against the month's emissions; planned and
    purchased rows are informational. Records are append-only: corrections are
    entered as new records.
    """
    period_month = models.DateField(db_index=True, help_text="First day of the reporting month")
    provider = models.CharField(max_length=120)
    project_name = models.CharField(max_length=200)
    registry_name = models.CharField(max_length=120, blank=True, default="")
    credit_type = models.CharField(max_length=80, default="carbon_credit")
    quantity_kg = models.DecimalField(max_digits=18, decimal_places=4, validators=[MinValueValidator(0)])
    vintage_year = models.PositiveIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1990), MaxValueValidator(2100)]
    )
    retirement_reference = models.CharField(max_length=180, blank=True, default="")
    certificate_url = models.URLField(max_length=500, blank=True, default="")
    status = models.CharField(max_length=20, choices=OffsetStatus.choices, default=OffsetStatus.PLANNED, db_index=True)
    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='emission_offsets'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-period_month', '-created_at']
        verbose_name = "Carbon Offset"
        verbose_name_plural = "Carbon Offsets"

    def __str__(self):
        return f"{self.quantity_kg} kg {self.get_status_display()} - {self.project_name} ({self.period_month:%Y-%m})"
