"""
On-call (duty) roster.

One row per day; each role column is free text holding the names on
duty, separated by commas or newlines.  The absence roster reads the
nurse column to work out who is off the following day.
"""
from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from django.db import transaction

from ward.models import DutySchedule
from ward.services.audit import log_action
from ward.services.common import clean_fields
from ward.services.spreadsheet import build_workbook, cell_text, read_rows

logger = logging.getLogger(__name__)

# sheet order for import, export and the template
DUTY_COLUMNS = [
    ('ngay_truc', 'Ngày trực'),
    ('bac_sy', 'Bác sỹ'),
    ('sau_dai_hoc', 'Sau đại học'),
    ('dieu_duong', 'Điều dưỡng'),
    ('phu_dieu_duong', 'Phụ điều dưỡng'),
    ('ghi_chu', 'Ghi chú'),
]

_NAME_SEP = re.compile(r'[\n,]')


def split_names(value: Optional[str]) -> List[str]:
    return [n.strip() for n in _NAME_SEP.split(value or '') if n.strip()]


def get_duty_schedules(month: Optional[int] = None, year: Optional[int] = None) -> List[DutySchedule]:
    """All rows, one calendar month, or one year; oldest day first.

    A month without a year is ignored.
    """
    qs = DutySchedule.objects.all()
    if month and year:
        qs = qs.filter(ngay_truc__year=year, ngay_truc__month=month)
    elif year:
        qs = qs.filter(ngay_truc__year=year)
    return list(qs.order_by('ngay_truc', 'id'))


def duty_on(day: date) -> Optional[DutySchedule]:
    return DutySchedule.objects.filter(ngay_truc=day).order_by('id').first()


def _apply(schedule: DutySchedule, data: Dict[str, Any]) -> None:
    for k, v in clean_fields(DutySchedule, data, exclude=('id', 'created_at', 'created_by')).items():
        setattr(schedule, k, v)
    if schedule.ngay_truc is None:
        raise ValueError('Ngày trực là bắt buộc')


def create_duty(data: Dict[str, Any], *, user=None) -> DutySchedule:
    schedule = DutySchedule(created_by=user if getattr(user, 'pk', None) else None)
    _apply(schedule, data)
    schedule.save()
    log_action(user=user, action='duty_create', object_type='lich_truc', object_id=schedule.id)
    return schedule


def update_duty(duty_id: int, data: Dict[str, Any], *, user=None) -> DutySchedule:
    schedule = DutySchedule.objects.get(pk=duty_id)
    _apply(schedule, data)
    schedule.save()
    log_action(user=user, action='duty_update', object_type='lich_truc', object_id=schedule.id)
    return schedule


def delete_duty(duty_id: int, *, user=None) -> None:
    deleted, _ = DutySchedule.objects.filter(pk=duty_id).delete()
    if not deleted:
        raise DutySchedule.DoesNotExist(f'duty {duty_id} not found')
    log_action(user=user, action='duty_delete', object_type='lich_truc', object_id=duty_id)


@transaction.atomic
def import_duties(f, *, user=None) -> Dict[str, int]:
    """Insert every sheet row or none of them.

    Rows without a date are skipped; a date that cannot be read fails
    the whole import with the sheet row number.
    """
    created = 0
    for line, row in enumerate(read_rows(f), start=2):
        if not row or not cell_text(row[0]):
            continue
        data = {'ngay_truc': row[0]}
        for idx, (field, _) in enumerate(DUTY_COLUMNS[1:], start=1):
            data[field] = cell_text(row[idx]) if idx < len(row) else None
        try:
            create_duty(data, user=user)
        except ValueError as e:
            raise ValueError(f'Dòng {line}: {e}') from e
        created += 1
    logger.info('duty import: %d rows', created)
    return {'success': created}


def export_duties(schedules: List[DutySchedule]) -> bytes:
    rows = []
    for s in schedules:
        rows.append([s.ngay_truc.strftime('%d/%m/%Y')] + [getattr(s, field) or '' for field, _ in DUTY_COLUMNS[1:]])
    return build_workbook([label for _, label in DUTY_COLUMNS], rows, 'Lich_Truc')


def duties_template() -> bytes:
    headers = ['Ngày trực (YYYY-MM-DD)'] + [label for _, label in DUTY_COLUMNS[1:]]
    return build_workbook(headers, [], 'Mau_Lich_Truc')
