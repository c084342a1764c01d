"""Dashboard counters across the ward."""
from __future__ import annotations

from typing import Any, Dict

from django.db.models import Count
from django.utils import timezone

from ward.models import Card, CardRecord, Employee, LeaveRecord, ResearchTopic
from ward.services.schedules import status_counts


def _count_by(qs, field: str) -> Dict[str, int]:
    return {(row[field] or ''): row['n'] for row in qs.values(field).annotate(n=Count('id')).order_by(field)}


def overview() -> Dict[str, Any]:
    today = timezone.localdate()
    return {
        'employees': {
            'total': Employee.objects.count(),
            'byStatus': _count_by(Employee.objects.all(), 'trang_thai'),
            'byCategory': _count_by(Employee.objects.all(), 'doi_tuong'),
        },
        'cards': _count_by(Card.objects.all(), 'trang_thai'),
        'activeBorrows': CardRecord.objects.filter(trang_thai=CardRecord.STATUS_BORROWING).count(),
        'schedules': status_counts(),
        'research': _count_by(ResearchTopic.objects.all(), 'trang_thai'),
        'onLeaveToday': LeaveRecord.objects.filter(tu_ngay__lte=today, den_ngay__gte=today).count(),
    }
