from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    ActivityLogEntryViewSet, OffsetRecordViewSet, MonthlyReportViewSet,
    TransparencyReportViewSet, green_ict_audit_cron, run_audit_api
)

router = SimpleRouter()
router.register(r'admin/emissions/activity', ActivityLogEntryViewSet, basename='emission-activity')
router.register(r'admin/emissions/offsets', OffsetRecordViewSet, basename='emission-offset')
router.register(r'admin/emissions/reports', MonthlyReportViewSet, basename='emission-report')
router.register(r'transparency/reports', TransparencyReportViewSet, basename='transparency-report')

urlpatterns = [
    path('cron/green-ict-audit/', green_ict_audit_cron, name='cron-green-ict-audit'),
    path('admin/emissions/run-audit/', run_audit_api, name='emission-run-audit'),
] + router.urls
