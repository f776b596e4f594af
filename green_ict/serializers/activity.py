from rest_framework import serializers

from ..models import ActivityLogEntry, is_reserved_source_name
from .fields import PeriodMonthField


class ActivityLogEntrySerializer(serializers.ModelSerializer):
    """
    Operator-entered activity data.
    Posting an existing (month, scope, source_type, source_name) overwrites it.
    """
    period_month = PeriodMonthField()
    source_type = serializers.CharField(min_length=2, max_length=100)
    source_name = serializers.CharField(min_length=2, max_length=120, required=False, default="measured_input")
    activity_value = serializers.DecimalField(max_digits=18, decimal_places=4, min_value=0)
    activity_unit = serializers.CharField(min_length=1, max_length=40)
    emission_factor_location = serializers.DecimalField(
        max_digits=12, decimal_places=6, min_value=0, required=False, allow_null=True
    )
    emission_factor_market = serializers.DecimalField(
        max_digits=12, decimal_places=6, min_value=0, required=False, allow_null=True
    )
    created_by = serializers.StringRelatedField(read_only=True)

    class Meta:
        model = ActivityLogEntry
        fields = [
            'id', 'period_month', 'scope', 'source_type', 'source_name',
            'activity_value', 'activity_unit', 'emission_factor_location',
            'emission_factor_market', 'data_quality', 'entry_origin', 'notes',
            'created_by', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'entry_origin', 'created_by', 'created_at', 'updated_at']
        # The composite key is an upsert key, not a uniqueness error
        validators = []

    def validate_source_name(self, value):
        if is_reserved_source_name(value):
            raise serializers.ValidationError(f"'{value}' is reserved for system estimates.")
        return value
