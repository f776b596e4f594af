from django.core.management.base import BaseCommand, CommandError

from green_ict.models import MonthlyReport
from green_ict.services.archive import verify_archive
from green_ict.services.periods import is_valid_month, month_to_date


class Command(BaseCommand):
    help = 'Recomputes the SHA-256 of stored report archives and flags any mismatch'

    def add_arguments(self, parser):
        parser.add_argument('--month', help='Only verify this month (YYYY-MM)')

    def handle(self, *args, **options):
        reports = MonthlyReport.objects.order_by('period_month')
        month = options.get('month')
        if month:
            if not is_valid_month(month):
                raise CommandError(f"Invalid month '{month}', expected YYYY-MM")
            reports = reports.filter(period_month=month_to_date(month))

        if not reports.exists():
            self.stdout.write(self.style.WARNING("No reports found."))
            return

        mismatches = []
        for report in reports:
            if verify_archive(report):
                self.stdout.write(f"{report.month}: OK ({report.archive_sha256})")
            else:
                mismatches.append(report.month)
                self.stdout.write(self.style.ERROR(f"{report.month}: checksum mismatch"))

        if mismatches:
            raise CommandError(f"Archive checksum mismatch for: {', '.join(mismatches)}")
        self.stdout.write(self.style.SUCCESS(f"Verified {reports.count()} archive(s)."))
