"""
Work schedule tracker.

Only two statuses are stored: ``Đang thực hiện`` and ``Hoàn thành``.
``Quá hạn`` (overdue) is always computed from the end time and is
rejected on write.
"""
from __future__ import annotations

import json
import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from ward.models import Employee, Schedule
from ward.services.audit import log_action
from ward.services.common import clean_fields
from ward.services import storage

logger = logging.getLogger(__name__)

BUCKETS = ('all', 'today', 'week', 'month', 'custom')


def display_status(schedule, now: Optional[datetime] = None) -> str:
    now = now or timezone.now()
    if getattr(schedule, 'trang_thai', None) == Schedule.STATUS_DONE:
        return Schedule.STATUS_DONE
    end = getattr(schedule, 'ngay_ket_thuc', None)
    if end is not None and end < now:
        return Schedule.STATUS_OVERDUE
    return Schedule.STATUS_IN_PROGRESS


def parse_performers(value: Any) -> List[str]:
    """Accepts a list or its JSON text; ids are kept as strings."""
    if value is None or value == '':
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as e:
            raise ValueError('nguoi_thuc_hien phải là danh sách') from e
    if not isinstance(value, (list, tuple)):
        raise ValueError('nguoi_thuc_hien phải là danh sách')
    return [str(v) for v in value if v is not None and str(v).strip()]


def _prepare(data: Dict[str, Any], *, partial: bool) -> Dict[str, Any]:
    data = dict(data)
    if 'nguoi_thuc_hien' in data:
        data['nguoi_thuc_hien'] = parse_performers(data['nguoi_thuc_hien'])
    status = data.get('trang_thai')
    if status == Schedule.STATUS_OVERDUE:
        raise ValueError('Trạng thái "Quá hạn" được tính tự động, không thể lưu')
    if status and status not in dict(Schedule.STATUS_CHOICES):
        raise ValueError(f'Trạng thái không hợp lệ: {status}')
    fields = clean_fields(Schedule, data)
    if not partial:
        if not (fields.get('noi_dung') or '').strip():
            raise ValueError('Nội dung là bắt buộc')
        if not fields.get('ngay_bat_dau') or not fields.get('ngay_ket_thuc'):
            raise ValueError('Thời gian bắt đầu và kết thúc là bắt buộc')
    return fields


def _check_range(s: Schedule) -> None:
    if s.ngay_bat_dau and s.ngay_ket_thuc and s.ngay_ket_thuc < s.ngay_bat_dau:
        raise ValueError('Thời gian kết thúc phải sau thời gian bắt đầu')


def get_schedules() -> List[Schedule]:
    return list(Schedule.objects.order_by('-ngay_bat_dau', '-id'))


def create_schedule(data: Dict[str, Any], *, user=None) -> Schedule:
    s = Schedule(**_prepare(data, partial=False))
    _check_range(s)
    s.save()
    log_action(user=user, action='schedule_create', object_type='lich_cong_tac', object_id=s.id)
    return s


def update_schedule(schedule_id: int, data: Dict[str, Any], *, user=None) -> Schedule:
    s = Schedule.objects.get(pk=schedule_id)
    for k, v in _prepare(data, partial=True).items():
        setattr(s, k, v)
    _check_range(s)
    s.save()
    log_action(user=user, action='schedule_update', object_type='lich_cong_tac', object_id=s.id)
    return s


def delete_schedule(schedule_id: int, *, user=None) -> None:
    deleted, _ = Schedule.objects.filter(pk=schedule_id).delete()
    if not deleted:
        raise Schedule.DoesNotExist(f'schedule {schedule_id} not found')
    log_action(user=user, action='schedule_delete', object_type='lich_cong_tac', object_id=schedule_id)


def upload_attachment(f, *, request=None) -> str:
    return storage.upload(storage.BUCKET_SCHEDULE, f, request=request)


def resolve_performers(ids: Iterable, employees: Optional[Iterable] = None) -> List[str]:
    """Map employee ids to names; ids with no match are returned unchanged."""
    ids = [str(i) for i in (ids or [])]
    if employees is None:
        employees = Employee.objects.filter(pk__in=[i for i in ids if i.isdigit()])
    names = {}
    for e in employees:
        pk = e.get('id') if isinstance(e, dict) else e.pk
        name = e.get('ho_va_ten') if isinstance(e, dict) else e.ho_va_ten
        names[str(pk)] = name
    return [names.get(i, i) for i in ids]


def _local_day(value: datetime) -> date:
    return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()


def bucket_range(bucket: str, *, start: Optional[date] = None, end: Optional[date] = None,
                 today: Optional[date] = None):
    """Inclusive ``(first_day, last_day)`` for a bucket; ``None`` means open."""
    today = today or timezone.localdate()
    if bucket == 'today':
        return today, today
    if bucket == 'week':
        monday = today - timedelta(days=today.weekday())
        return monday, monday + timedelta(days=6)
    if bucket == 'month':
        first = today.replace(day=1)
        nxt = (first + timedelta(days=32)).replace(day=1)
        return first, nxt - timedelta(days=1)
    if bucket == 'custom':
        return start, end
    return None, None


def filter_schedules(items: Iterable[Schedule], bucket: str = 'all', *, q: Optional[str] = None,
                     start: Optional[date] = None, end: Optional[date] = None,
                     employees: Optional[Iterable] = None, today: Optional[date] = None) -> List[Schedule]:
    """Keep schedules overlapping the bucket's days and matching ``q``.

    ``q`` is matched case-insensitively against the content, the details
    and the resolved performer names.
    """
    if bucket not in BUCKETS:
        raise ValueError(f'Bộ lọc không hợp lệ: {bucket}')
    items = list(items)
    lo, hi = bucket_range(bucket, start=start, end=end, today=today)
    out = []
    employees = list(employees) if employees is not None else None
    if employees is None and q:
        employees = list(Employee.objects.all())
    term = (q or '').strip().lower()
    for s in items:
        first, last = _local_day(s.ngay_bat_dau), _local_day(s.ngay_ket_thuc)
        if lo is not None and last < lo:
            continue
        if hi is not None and first > hi:
            continue
        if term:
            haystack = [s.noi_dung or '', s.chi_tiet or ''] + resolve_performers(s.nguoi_thuc_hien, employees)
            if not any(term in h.lower() for h in haystack):
                continue
        out.append(s)
    return out


def calendar(start: date, end: date) -> Dict[str, List[Schedule]]:
    """Schedules overlapping ``[start, end]`` grouped by each local day they cover."""
    if end < start:
        raise ValueError('Khoảng thời gian không hợp lệ')
    days: Dict[str, List[Schedule]] = OrderedDict()
    cur = start
    while cur <= end:
        days[cur.isoformat()] = []
        cur += timedelta(days=1)
    for s in filter_schedules(Schedule.objects.order_by('ngay_bat_dau', 'id'), 'custom', start=start, end=end):
        first = max(_local_day(s.ngay_bat_dau), start)
        last = min(_local_day(s.ngay_ket_thuc), end)
        cur = first
        while cur <= last:
            days[cur.isoformat()].append(s)
            cur += timedelta(days=1)
    return days


def status_counts(now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or timezone.now()
    counts = {Schedule.STATUS_IN_PROGRESS: 0, Schedule.STATUS_DONE: 0, Schedule.STATUS_OVERDUE: 0}
    for s in Schedule.objects.only('trang_thai', 'ngay_ket_thuc'):
        counts[display_status(s, now)] += 1
    return counts
