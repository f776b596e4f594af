from django.http import Http404
from django.shortcuts import get_object_or_404
from rest_framework.response import Response

from ..services.periods import is_valid_month, month_to_date


def parse_limit(value, default, maximum):
    """Positive integer capped at maximum; anything unparsable gives the default."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    if limit < 1:
        return default
    return min(limit, maximum)


class MonthFilteredListMixin:
    """
    List with ?month=YYYY-MM and ?limit=N.
    An invalid month is ignored rather than rejected.
    """
    default_limit = 200
    max_limit = 500

    def filter_by_month(self, queryset):
        month = self.request.query_params.get('month')
        if is_valid_month(month):
            queryset = queryset.filter(period_month=month_to_date(month))
        return queryset

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.filter_by_month(self.get_queryset()))
        limit = parse_limit(request.query_params.get('limit'), self.default_limit, self.max_limit)
        serializer = self.get_serializer(queryset[:limit], many=True)
        return Response(serializer.data)


class MonthLookupMixin:
    """Detail routes addressed by 'YYYY-MM' instead of the primary key."""
    lookup_url_kwarg = 'month'
    lookup_value_regex = r'\d{4}-\d{2}'

    def get_object(self):
        month = self.kwargs[self.lookup_url_kwarg]
        if not is_valid_month(month):
            raise Http404
        obj = get_object_or_404(self.get_queryset(), period_month=month_to_date(month))
        self.check_object_permissions(self.request, obj)
        return obj
