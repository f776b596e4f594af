import datetime
from decimal import Decimal

from django.test import TestCase

from accounts.models import CustomUser
from green_ict.services.collector import collect_operational_metrics
from green_ict.services.periods import get_month_bounds
from lanyards.models import CheckIn, Event, LanyardGrade

UTC = datetime.timezone.utc
LONG_AGO = datetime.datetime(2024, 6, 1, tzinfo=UTC)


def at(*args):
    return datetime.datetime(*args, tzinfo=UTC)


class OperationalMetricsTest(TestCase):
    def setUp(self):
        self.organizer = CustomUser.objects.create_user('org@example.ch', 'pass1234', date_joined=LONG_AGO)
        self.alice = CustomUser.objects.create_user('alice@example.ch', 'pass1234', date_joined=LONG_AGO)
        self.bob = CustomUser.objects.create_user('bob@example.ch', 'pass1234', date_joined=LONG_AGO)
        self.event = Event.objects.create(title='Zurich Expo', organizer=self.organizer, created_at=at(2026, 2, 3))

    def check_in(self, user, created_at):
        return CheckIn.objects.create(
            user=user, event=self.event, latitude=Decimal('47.376900'),
            longitude=Decimal('8.541700'), created_at=created_at
        )

    def test_counts_within_window(self):
        self.check_in(self.alice, at(2026, 2, 1))
        self.check_in(self.alice, at(2026, 2, 10))
        self.check_in(self.bob, datetime.datetime(2026, 2, 28, 23, 59, 59, 999000, tzinfo=UTC))
        # Outside the window
        self.check_in(self.bob, at(2026, 3, 1))
        self.check_in(self.bob, datetime.datetime(2026, 1, 31, 23, 59, 59, tzinfo=UTC))

        LanyardGrade.objects.create(user=self.alice, event=self.event, grade='A', quantity=40, created_at=at(2026, 2, 5))
        LanyardGrade.objects.create(user=self.alice, grade='C', quantity=15, created_at=at(2026, 2, 6))
        LanyardGrade.objects.create(user=self.bob, grade='B', quantity=99, created_at=at(2026, 3, 2))
        Event.objects.create(title='Basel Fair', organizer=self.organizer, created_at=at(2026, 3, 1))

        metrics = collect_operational_metrics(get_month_bounds('2026-02'))
        self.assertEqual(metrics, {
            'check_ins': 3,
            'grade_records': 2,
            'graded_quantity': 55,
            'events_created': 1,
            'active_users_proxy': 2,
        })

    def test_active_users_uses_new_signups_when_larger(self):
        self.check_in(self.alice, at(2026, 2, 10))
        for i in range(3):
            CustomUser.objects.create_user(f'new{i}@example.ch', 'pass1234', date_joined=at(2026, 2, 20))

        metrics = collect_operational_metrics(get_month_bounds('2026-02'))
        self.assertEqual(metrics['active_users_proxy'], 3)

    def test_empty_month(self):
        metrics = collect_operational_metrics(get_month_bounds('2025-05'))
        self.assertEqual(metrics, {
            'check_ins': 0,
            'grade_records': 0,
            'graded_quantity': 0,
            'events_created': 0,
            'active_users_proxy': 0,
        })
