import datetime
from decimal import Decimal

from accounts.models import CustomUser
from green_ict.models import OffsetRecord, OffsetStatus
from green_ict.services.ledger import upsert_activity_entry
from lanyards.models import CheckIn, Event, LanyardGrade

UTC = datetime.timezone.utc
FEBRUARY = datetime.date(2026, 2, 1)
GENERATED_AT = datetime.datetime(2026, 3, 1, 6, 0, tzinfo=UTC)
LONG_AGO = datetime.datetime(2024, 6, 1, tzinfo=UTC)


class FebruaryActivityMixin:
    """
    February 2026 with two check-ins, one graded batch of ten lanyards and one
    event (12.10 kWh estimated), ten litres of generator diesel, 100 kWh of
    measured Swiss electricity with a zero market factor, and 5 kg of retired
    offsets.
    """

    def create_february_activity(self):
        organizer = CustomUser.objects.create_user('org@example.ch', 'pass1234', date_joined=LONG_AGO)
        alice = CustomUser.objects.create_user('alice@example.ch', 'pass1234', date_joined=LONG_AGO)
        bob = CustomUser.objects.create_user('bob@example.ch', 'pass1234', date_joined=LONG_AGO)

        event = Event.objects.create(
            title='Zurich Expo', organizer=organizer,
            created_at=datetime.datetime(2026, 2, 3, tzinfo=UTC)
        )
        for user in (alice, bob):
            CheckIn.objects.create(
                user=user, event=event, latitude=Decimal('47.376900'), longitude=Decimal('8.541700'),
                created_at=datetime.datetime(2026, 2, 4, tzinfo=UTC)
            )
        LanyardGrade.objects.create(
            user=alice, event=event, grade='A', quantity=10,
            created_at=datetime.datetime(2026, 2, 5, tzinfo=UTC)
        )

        upsert_activity_entry(FEBRUARY, 1, 'diesel_liters', 'generator', Decimal('10'), 'liters')
        upsert_activity_entry(
            FEBRUARY, 2, 'electricity_ch', 'measured_input', Decimal('100'), 'kWh',
            emission_factor_market=Decimal('0'),
        )

        OffsetRecord.objects.create(
            period_month=FEBRUARY, provider='myclimate', project_name='Swiss forest',
            quantity_kg=Decimal('5'), status=OffsetStatus.RETIRED,
        )
        OffsetRecord.objects.create(
            period_month=FEBRUARY, provider='myclimate', project_name='Swiss forest',
            quantity_kg=Decimal('100'), status=OffsetStatus.PLANNED,
        )
