from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse, reverse_lazy
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import CustomUser
from green_ict.models import ActivityLogEntry, MonthlyReport, OffsetRecord, ReportStatus
from green_ict.services.audit import run_monthly_audit
from green_ict.services.periods import get_previous_month
from .utils import FEBRUARY, GENERATED_AT, FebruaryActivityMixin

REVIEW_GATED = {
    'CRON_SECRET': 'test-cron-secret',
    'METHODOLOGY_PROFILE': 'v1-switzerland-eu-default',
    'AUTO_PUBLISH': False,
}


class AdminApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = CustomUser.objects.create_platform_admin('admin@lanyards.ch', 'TestPass123!')
        self.volunteer = CustomUser.objects.create_user('volunteer@lanyards.ch', 'TestPass123!')


class ActivityApiTest(AdminApiTestCase):
    url = reverse_lazy('emission-activity-list')

    def payload(self, **overrides):
        data = {
            'period_month': '2026-02',
            'scope': 1,
            'source_type': 'diesel_liters',
            'source_name': 'generator',
            'activity_value': '10.5',
            'activity_unit': 'liters',
        }
        data.update(overrides)
        return data

    def test_requires_authentication(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_requires_admin(self):
        self.client.force_authenticate(user=self.volunteer)
        response = self.client.post(self.url, self.payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(ActivityLogEntry.objects.exists())

    def test_create_then_overwrite(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(self.url, self.payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['period_month'], '2026-02')
        self.assertEqual(response.data['entry_origin'], 'operator')
        self.assertEqual(response.data['data_quality'], 'measured')

        response = self.client.post(self.url, self.payload(activity_value='12'), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        entry = ActivityLogEntry.objects.get()
        self.assertEqual(entry.activity_value, Decimal('12'))
        self.assertEqual(entry.period_month, FEBRUARY)
        self.assertEqual(entry.created_by, self.admin)

    def test_reserved_source_name_is_rejected(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            self.url,
            self.payload(scope=2, source_type='electricity_ch', source_name='system_estimate_switzerland'),
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('source_name', response.data)

    def test_validation_errors(self):
        self.client.force_authenticate(user=self.admin)
        for overrides in [{'period_month': '2026-13'}, {'scope': 3}, {'activity_value': '-1'},
                          {'source_type': 'x'}, {'activity_unit': ''}]:
            response = self.client.post(self.url, self.payload(**overrides), format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, overrides)

    def test_list_filters_by_month_and_limit(self):
        self.client.force_authenticate(user=self.admin)
        self.client.post(self.url, self.payload(), format='json')
        self.client.post(self.url, self.payload(source_name='van'), format='json')
        self.client.post(self.url, self.payload(period_month='2026-03'), format='json')

        response = self.client.get(self.url, {'month': '2026-02'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

        response = self.client.get(self.url, {'limit': 1})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['period_month'], '2026-03')


class OffsetApiTest(AdminApiTestCase):
    url = reverse_lazy('emission-offset-list')

    def test_create_and_list(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {
            'period_month': '2026-02',
            'provider': 'myclimate',
            'project_name': 'Swiss forest',
            'quantity_kg': '25',
            'vintage_year': 2025,
            'status': 'retired',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['credit_type'], 'carbon_credit')
        self.assertEqual(OffsetRecord.objects.get().created_by, self.admin)

        response = self.client.get(self.url, {'month': '2026-02'})
        self.assertEqual(len(response.data), 1)

    def test_default_status_is_planned(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {
            'period_month': '2026-02', 'provider': 'myclimate',
            'project_name': 'Swiss forest', 'quantity_kg': '25',
        }, format='json')
        self.assertEqual(response.data['status'], 'planned')

    def test_vintage_year_range(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {
            'period_month': '2026-02', 'provider': 'myclimate',
            'project_name': 'Swiss forest', 'quantity_kg': '25', 'vintage_year': 1980,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_offsets_cannot_be_deleted(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f'{self.url}1/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class RunAuditApiTest(FebruaryActivityMixin, AdminApiTestCase):
    url = reverse_lazy('emission-run-audit')

    def test_requires_admin(self):
        response = self.client.post(self.url, {'month': '2026-02'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(user=self.volunteer)
        response = self.client.post(self.url, {'month': '2026-02'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(MonthlyReport.objects.exists())

    def test_runs_audit(self):
        self.create_february_activity()
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {'month': '2026-02'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['ok'])
        self.assertEqual(response.data['summary']['residual_market_kg'], 22.9616)
        self.assertEqual(MonthlyReport.objects.get().trigger, 'admin')

    def test_rejects_malformed_month(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {'month': '2026-2'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(MonthlyReport.objects.exists())

    @override_settings(GREEN_ICT_AUDIT={**REVIEW_GATED, 'METHODOLOGY_PROFILE': 'v0-retired'})
    def test_configuration_error(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.url, {'month': '2026-02'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Green ICT audit is not configured')


class CronAuditApiTest(TestCase):
    url = reverse_lazy('cron-green-ict-audit')

    def setUp(self):
        self.client = APIClient()

    def test_missing_secret(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(MonthlyReport.objects.exists())

    def test_wrong_secret(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-the-secret')
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @override_settings(GREEN_ICT_AUDIT={**REVIEW_GATED, 'CRON_SECRET': ''})
    def test_unconfigured_secret_rejects_everything(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer anything')
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_runs_requested_month(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer test-cron-secret')
        response = self.client.get(self.url, {'month': '2026-02'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['month'], '2026-02')
        self.assertEqual(MonthlyReport.objects.get().trigger, 'cron')

    def test_malformed_month_falls_back_to_previous_month(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer test-cron-secret')
        response = self.client.get(self.url, {'month': 'last-month'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['month'], get_previous_month())


class ReportApiTest(FebruaryActivityMixin, AdminApiTestCase):
    def setUp(self):
        super().setUp()
        self.create_february_activity()

    @override_settings(GREEN_ICT_AUDIT=REVIEW_GATED)
    def test_publish_flow(self):
        run_monthly_audit('2026-02', generated_at=GENERATED_AT)

        # Pending reports are not public
        response = self.client.get(reverse('transparency-report-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])
        response = self.client.get(reverse('transparency-report-detail', kwargs={'month': '2026-02'}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(reverse('emission-report-list'))
        self.assertEqual(response.data[0]['status'], ReportStatus.PENDING_REVIEW)
        self.assertFalse(response.data[0]['published'])

        response = self.client.post(reverse('emission-report-publish', kwargs={'month': '2026-02'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['published'])

        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('transparency-report-list'))
        self.assertEqual(len(response.data), 1)
        self.assertNotIn('archive_markdown', response.data[0])

    def test_public_detail_verifies_checksum(self):
        run_monthly_audit('2026-02', generated_at=GENERATED_AT)
        response = self.client.get(reverse('transparency-report-detail', kwargs={'month': '2026-02'}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period_month'], '2026-02')
        self.assertTrue(response.data['checksum_valid'])
        self.assertIn('# Green ICT Audit Report (2026-02)', response.data['archive_markdown'])

        MonthlyReport.objects.filter(period_month=FEBRUARY).update(archive_markdown='edited')
        response = self.client.get(reverse('transparency-report-detail', kwargs={'month': '2026-02'}))
        self.assertFalse(response.data['checksum_valid'])

    def test_report_list_requires_admin(self):
        self.client.force_authenticate(user=self.volunteer)
        response = self.client.get(reverse('emission-report-list'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
