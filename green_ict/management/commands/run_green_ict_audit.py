import json

from django.core.management.base import BaseCommand, CommandError

from green_ict.exceptions import GreenIctAuditError
from green_ict.models import AuditTrigger
from green_ict.services.audit import run_monthly_audit
from green_ict.services.periods import is_valid_month


class Command(BaseCommand):
    help = 'Runs the monthly Green ICT emissions audit and stores the report'

    def add_arguments(self, parser):
        parser.add_argument('--month', help='Month to audit (YYYY-MM). Defaults to the previous calendar month.')

    def handle(self, *args, **options):
        month = options.get('month')
        if month and not is_valid_month(month):
            raise CommandError(f"Invalid month '{month}', expected YYYY-MM")

        try:
            result = run_monthly_audit(month, trigger=AuditTrigger.COMMAND)
        except GreenIctAuditError as e:
            raise CommandError(f"Green ICT audit failed: {e}")

        self.stdout.write(json.dumps(result, indent=2))
        self.stdout.write(self.style.SUCCESS(f"Green ICT audit for {result['month']} completed"))
