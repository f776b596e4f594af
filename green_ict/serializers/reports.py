from rest_framework import serializers

from ..models import MonthlyReport
from ..services.archive import verify_archive
from ..services.periods import is_valid_month
from .fields import PeriodMonthField

FIGURE_FIELDS = [
    'scope1_kg', 'scope2_location_kg', 'scope2_market_kg',
    'gross_location_kg', 'gross_market_kg', 'offsets_kg',
    'residual_location_kg', 'residual_market_kg',
]


class MonthlyReportSerializer(serializers.ModelSerializer):
    """Full report for administrators."""
    period_month = PeriodMonthField(read_only=True)
    published = serializers.BooleanField(read_only=True)

    class Meta:
        model = MonthlyReport
        fields = [
            'id', 'period_month', 'methodology_version', *FIGURE_FIELDS,
            'assumptions', 'metrics', 'archive_markdown', 'archive_sha256',
            'generated_at', 'status', 'published', 'published_at', 'trigger'
        ]
        read_only_fields = fields


class TransparencyReportListSerializer(serializers.ModelSerializer):
    """Public summary of a published report, without the archive text."""
    period_month = PeriodMonthField(read_only=True)

    class Meta:
        model = MonthlyReport
        fields = [
            'period_month', 'methodology_version', *FIGURE_FIELDS,
            'archive_sha256', 'generated_at', 'published_at'
        ]
        read_only_fields = fields


class TransparencyReportDetailSerializer(TransparencyReportListSerializer):
    checksum_valid = serializers.SerializerMethodField()

    class Meta(TransparencyReportListSerializer.Meta):
        fields = TransparencyReportListSerializer.Meta.fields + [
            'assumptions', 'metrics', 'archive_markdown', 'checksum_valid'
        ]
        read_only_fields = fields

    def get_checksum_valid(self, obj):
        return verify_archive(obj)


class RunAuditSerializer(serializers.Serializer):
    month = serializers.CharField(required=False, allow_blank=False)

    def validate_month(self, value):
        if not is_valid_month(value):
            raise serializers.ValidationError("Enter a month in YYYY-MM format.")
        return value
