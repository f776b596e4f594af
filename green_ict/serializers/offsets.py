from rest_framework import serializers

from ..models import OffsetRecord
from .fields import PeriodMonthField


class OffsetRecordSerializer(serializers.ModelSerializer):
    """Carbon offset records. Create only; corrections are new records."""
    period_month = PeriodMonthField()
    provider = serializers.CharField(min_length=2, max_length=120)
    project_name = serializers.CharField(min_length=2, max_length=200)
    quantity_kg = serializers.DecimalField(max_digits=18, decimal_places=4, min_value=0)
    created_by = serializers.StringRelatedField(read_only=True)

    class Meta:
        model = OffsetRecord
        fields = [
            'id', 'period_month', 'provider', 'project_name', 'registry_name',
            'credit_type', 'quantity_kg', 'vintage_year', 'retirement_reference',
            'certificate_url', 'status', 'notes', 'created_by', 'created_at'
        ]
        read_only_fields = ['id', 'created_by', 'created_at']
