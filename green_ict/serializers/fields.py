from rest_framework import serializers

from ..services.periods import date_to_month, is_valid_month, month_to_date


class PeriodMonthField(serializers.Field):
    """
    Accepts 'YYYY-MM' and stores the first day of the month.
    Rendered back as 'YYYY-MM'.
    """
    default_error_messages = {
        'invalid': "Enter a month in YYYY-MM format.",
    }

    def to_internal_value(self, data):
        if not is_valid_month(data):
            self.fail('invalid')
        return month_to_date(data)

    def to_representation(self, value):
        return date_to_month(value)
