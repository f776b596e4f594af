from django.contrib import admin, messages

from .models import ActivityLogEntry, OffsetRecord, MonthlyReport, ReportStatus
from .services.archive import verify_archive
from .services.reports import publish_report


@admin.register(ActivityLogEntry)
class ActivityLogEntryAdmin(admin.ModelAdmin):
    list_display = ('period_month', 'scope', 'source_type', 'source_name', 'activity_value', 'activity_unit',
                    'emission_factor_location', 'emission_factor_market', 'data_quality', 'entry_origin')
    list_filter = ('scope', 'data_quality', 'entry_origin', 'period_month')
    search_fields = ('source_type', 'source_name', 'notes')
    readonly_fields = ('entry_origin', 'created_by', 'created_at', 'updated_at')
    date_hierarchy = 'period_month'


@admin.register(OffsetRecord)
class OffsetRecordAdmin(admin.ModelAdmin):
    list_display = ('period_month', 'provider', 'project_name', 'quantity_kg', 'status', 'vintage_year', 'registry_name')
    list_filter = ('status', 'provider', 'period_month')
    search_fields = ('provider', 'project_name', 'retirement_reference')
    readonly_fields = ('created_by', 'created_at')

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(MonthlyReport)
class MonthlyReportAdmin(admin.ModelAdmin):
    list_display = ('period_month', 'status', 'methodology_version', 'scope1_kg', 'scope2_location_kg',
                    'scope2_market_kg', 'offsets_kg', 'residual_market_kg', 'generated_at', 'checksum_ok')
    list_filter = ('status', 'methodology_version', 'trigger')
    actions = ['publish_selected']
    fieldsets = (
        (None, {
            'fields': ('period_month', 'methodology_version', 'status', 'published_at', 'trigger', 'generated_at')
        }),
        ('Figures (kgCO2e)', {
            'fields': ('scope1_kg', 'scope2_location_kg', 'scope2_market_kg', 'gross_location_kg',
                       'gross_market_kg', 'offsets_kg', 'residual_location_kg', 'residual_market_kg')
        }),
        ('Audit trail', {
            'fields': ('assumptions', 'metrics', 'archive_sha256', 'archive_markdown')
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        # Reports are produced by the audit only
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(boolean=True, description='Checksum')
    def checksum_ok(self, obj):
        return verify_archive(obj)

    @admin.action(description='Publish selected reports')
    def publish_selected(self, request, queryset):
        published = 0
        for report in queryset.exclude(status=ReportStatus.PUBLISHED):
            publish_report(report)
            published += 1
        self.message_user(request, f"Published {published} report(s).", messages.SUCCESS)
