import json
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from green_ict.models import MonthlyReport
from green_ict.services.audit import run_monthly_audit
from .utils import FEBRUARY, GENERATED_AT, FebruaryActivityMixin


class RunGreenIctAuditCommandTest(FebruaryActivityMixin, TestCase):
    def test_runs_month(self):
        self.create_february_activity()
        out = StringIO()
        call_command('run_green_ict_audit', '--month', '2026-02', stdout=out)

        output = out.getvalue()
        result = json.loads(output[:output.rindex('}') + 1])
        self.assertEqual(result['month'], '2026-02')
        self.assertEqual(result['summary']['scope1_kg'], 26.8)
        self.assertIn('completed', output)
        self.assertEqual(MonthlyReport.objects.get(period_month=FEBRUARY).trigger, 'command')

    def test_rejects_malformed_month(self):
        with self.assertRaises(CommandError):
            call_command('run_green_ict_audit', '--month', '02-2026', stdout=StringIO())
        self.assertFalse(MonthlyReport.objects.exists())


class VerifyGreenIctArchivesCommandTest(FebruaryActivityMixin, TestCase):
    def setUp(self):
        self.create_february_activity()
        run_monthly_audit('2026-02', generated_at=GENERATED_AT)

    def test_intact_archives(self):
        out = StringIO()
        call_command('verify_green_ict_archives', stdout=out)
        self.assertIn('2026-02: OK', out.getvalue())

    def test_altered_archive(self):
        MonthlyReport.objects.filter(period_month=FEBRUARY).update(archive_markdown='rewritten history')
        with self.assertRaises(CommandError):
            call_command('verify_green_ict_archives', '--month', '2026-02', stdout=StringIO())

    def test_month_without_report(self):
        out = StringIO()
        call_command('verify_green_ict_archives', '--month', '2025-01', stdout=out)
        self.assertIn('No reports found', out.getvalue())
