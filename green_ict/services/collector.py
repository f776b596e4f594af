"""
Collects the month's operational counters from the lanyard platform tables.
"""

import logging
from typing import Dict

from django.contrib.auth import get_user_model
from django.db.models import Sum

from lanyards.models import CheckIn, Event, LanyardGrade

logger = logging.getLogger(__name__)


def collect_operational_metrics(bounds: Dict) -> Dict:
    """
    Count platform activity inside [start, next_start).

    active_users_proxy is the larger of the distinct users who checked in
    or graded during the month and the users who joined during the month.

    Args:
        bounds: month window from periods.get_month_bounds

    Returns:
        dict with check_ins, grade_records, graded_quantity, events_created,
        active_users_proxy (all non-negative ints)
    """
    window = {'created_at__gte': bounds['start'], 'created_at__lt': bounds['next_start']}

    check_ins = CheckIn.objects.filter(**window)
    grades = LanyardGrade.objects.filter(**window)

    check_in_count = check_ins.count()
    grade_record_count = grades.count()
    graded_quantity = grades.aggregate(total=Sum('quantity'))['total'] or 0
    events_created = Event.objects.filter(**window).count()

    active_user_ids = set(check_ins.order_by().values_list('user_id', flat=True).distinct())
    active_user_ids.update(grades.order_by().values_list('user_id', flat=True).distinct())

    joined_users = get_user_model().objects.filter(
        date_joined__gte=bounds['start'],
        date_joined__lt=bounds['next_start'],
    ).count()

    metrics = {
        'check_ins': check_in_count,
        'grade_records': grade_record_count,
        'graded_quantity': int(graded_quantity),
        'events_created': events_created,
        'active_users_proxy': max(len(active_user_ids), joined_users),
    }
    logger.debug(f"[AUDIT] Operational metrics for {bounds['month']}: {metrics}")
    return metrics
