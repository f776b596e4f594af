# green_ict/models/activity.py
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

# Source types with a default factor in the methodology profiles
SOURCE_ELECTRICITY_CH = "electricity_ch"
SOURCE_ELECTRICITY_EU_CLOUD = "electricity_eu_cloud"
SOURCE_DIESEL_LITERS = "diesel_liters"
SOURCE_PETROL_LITERS = "petrol_liters"
SOURCE_NATURAL_GAS_KWH = "natural_gas_kwh"


class Scope(models.IntegerChoices):
    SCOPE_1 = 1, "Scope 1 (direct)"
    SCOPE_2 = 2, "Scope 2 (electricity)"


class DataQuality(models.TextChoices):
    MEASURED = "measured", "Measured"
    ESTIMATED = "estimated", "Estimated"
    ASSUMED = "assumed", "Assumed"


class EntryOrigin(models.TextChoices):
    OPERATOR = "operator", "Operator entry"
    SYSTEM_ESTIMATE = "system_estimate", "System estimate"


class EstimateSource(models.TextChoices):
    """ Source names owned by the audit pipeline. Operators cannot use them. """
    SWITZERLAND = "system_estimate_switzerland", "System estimate (Swiss operations)"
    EU_CLOUD = "system_estimate_eu_cloud", "System estimate (EU cloud)"


def is_reserved_source_name(source_name):
    return source_name in EstimateSource.values


class ActivityLogEntry(models.Model):
    """ One measured or estimated emission-relevant activity for a reporting month. """
    period_month = models.DateField(db_index=True, help_text="First day of the reporting month")
    scope = models.PositiveSmallIntegerField(choices=Scope.choices, db_index=True)
    source_type = models.CharField(max_length=100, help_text="Activity category (e.g., electricity_ch, diesel_liters)")
    source_name = models.CharField(max_length=120, help_text="Discriminator within a source type (e.g., measured_input)")

    activity_value = models.DecimalField(max_digits=18, decimal_places=4, validators=[MinValueValidator(0)])
    activity_unit = models.CharField(max_length=40, help_text="Unit of the activity value (e.g., kWh, liters)")

    # Explicit factors in kgCO2e per activity unit; defaults are resolved from the methodology profile when empty
    emission_factor_location = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True, validators=[MinValueValidator(0)])
    emission_factor_market = models.DecimalField(max_digits=12, decimal_places=6, null=True, blank=True, validators=[MinValueValidator(0)])

    data_quality = models.CharField(max_length=20, choices=DataQuality.choices, default=DataQuality.MEASURED)
    entry_origin = models.CharField(max_length=20, choices=EntryOrigin.choices, default=EntryOrigin.OPERATOR)
    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='emission_activity_entries'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        # Re-submission overwrites rather than duplicates
        unique_together = [['period_month', 'scope', 'source_type', 'source_name']]
        ordering = ['-period_month', 'scope', 'source_type', 'source_name']
        verbose_name = "Emission Activity Log Entry"
        verbose_name_plural = "Emission Activity Log Entries"

    def __str__(self):
        return f"S{self.scope} {self.source_type} ({self.source_name}) {self.period_month:%Y-%m} = {self.activity_value} {self.activity_unit}"

    def clean(self):
        super().clean()
        if self.entry_origin == EntryOrigin.OPERATOR and is_reserved_source_name(self.source_name):
            raise ValidationError({'source_name': f"'{self.source_name}' is reserved for system estimates."})
        if self.entry_origin == EntryOrigin.SYSTEM_ESTIMATE and not is_reserved_source_name(self.source_name):
            raise ValidationError({'source_name': "System estimates must use a reserved estimate source name."})
