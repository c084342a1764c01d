"""
Daily absence roster (quân số nghỉ).

Entries are per day.  Besides manual entry a day can be filled by
copying selected entries from another day, or generated from the duty
roster: nurses on duty the day before are off today.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from django.db import transaction

from ward.models import Absence, Employee
from ward.services import duty
from ward.services.audit import log_action
from ward.services.common import clean_fields

logger = logging.getLogger(__name__)

UNMATCHED_NOTE = 'Tự động tạo từ lịch trực (Không tìm thấy nhân viên trong DS)'


def absences_on_date(day: date) -> List[Absence]:
    return list(Absence.objects.filter(ngay_nghi=day).order_by('-created_at', '-id'))


def absence_exists(employee_id: int, day: date) -> bool:
    return Absence.objects.filter(dsnv_id=employee_id, ngay_nghi=day).exists()


def _apply(record: Absence, data: Dict[str, Any]) -> None:
    fields = clean_fields(Absence, data, exclude=('id', 'created_at', 'created_by'))
    for k, v in fields.items():
        setattr(record, k, v)
    if 'dsnv_id' in fields and record.dsnv_id:
        emp = Employee.objects.filter(pk=record.dsnv_id).first()
        if emp is None:
            raise ValueError('Nhân viên không tồn tại')
        if not data.get('ho_va_ten'):
            record.ho_va_ten = emp.ho_va_ten
    if not (record.ho_va_ten or '').strip():
        raise ValueError('Cần chọn nhân viên hoặc nhập họ tên')
    if record.ngay_nghi is None:
        raise ValueError('Ngày nghỉ là bắt buộc')


def create_absence(data: Dict[str, Any], *, user=None) -> Absence:
    record = Absence(created_by=user if getattr(user, 'pk', None) else None)
    _apply(record, data)
    record.save()
    log_action(user=user, action='absence_create', object_type='quan_so_nghi', object_id=record.id)
    return record


def update_absence(absence_id: int, data: Dict[str, Any], *, user=None) -> Absence:
    record = Absence.objects.get(pk=absence_id)
    _apply(record, data)
    record.save()
    log_action(user=user, action='absence_update', object_type='quan_so_nghi', object_id=record.id)
    return record


def delete_absence(absence_id: int, *, user=None) -> None:
    deleted, _ = Absence.objects.filter(pk=absence_id).delete()
    if not deleted:
        raise Absence.DoesNotExist(f'absence {absence_id} not found')
    log_action(user=user, action='absence_delete', object_type='quan_so_nghi', object_id=absence_id)


@transaction.atomic
def copy_absences(ids: Sequence[int], target: date, *, user=None) -> List[Absence]:
    """Copy the chosen entries to ``target``.

    Employees already listed on ``target`` are skipped; free-text names
    are always copied.
    """
    copied = []
    for src in Absence.objects.filter(pk__in=ids).order_by('id'):
        if src.dsnv_id and absence_exists(src.dsnv_id, target):
            continue
        copied.append(create_absence({
            'dsnv_id': src.dsnv_id,
            'ho_va_ten': src.ho_va_ten,
            'loai_nghi': src.loai_nghi,
            'ngay_nghi': target,
            'ghi_chu': f'{src.ghi_chu} (Sao chép)' if src.ghi_chu else 'Sao chép',
        }, user=user))
    logger.info('absence copy to %s: %d of %d', target, len(copied), len(ids))
    return copied


@transaction.atomic
def generate_from_duty(day: date, *, user=None) -> List[Absence]:
    """Add a ``Nghỉ trực`` entry on ``day`` for every nurse on the previous day's roster.

    Names are matched to employees case-insensitively; a name with no
    match still gets an entry with a note saying so.  Running it twice
    adds nothing new.
    """
    duty_day = day - timedelta(days=1)
    schedule = duty.duty_on(duty_day)
    if schedule is None:
        raise ValueError(f'Không tìm thấy lịch trực ngày {duty_day:%d/%m/%Y}')
    names = duty.split_names(schedule.dieu_duong)
    if not names:
        raise ValueError(f'Không có điều dưỡng nào được phân công trực ngày {duty_day:%d/%m/%Y}')

    by_name: Dict[str, Employee] = {}
    for emp in Employee.objects.order_by('id'):
        by_name.setdefault(emp.ho_va_ten.strip().lower(), emp)

    created = []
    for name in names:
        emp = by_name.get(name.lower())
        if emp is not None:
            if absence_exists(emp.pk, day):
                continue
            data = {'dsnv_id': emp.pk, 'ho_va_ten': emp.ho_va_ten,
                    'ghi_chu': f'Tự động tạo từ lịch trực ngày {duty_day.isoformat()}'}
        else:
            if Absence.objects.filter(dsnv__isnull=True, ho_va_ten=name, ngay_nghi=day).exists():
                continue
            data = {'ho_va_ten': name, 'ghi_chu': UNMATCHED_NOTE}
        data.update(loai_nghi=Absence.TYPE_POST_DUTY, ngay_nghi=day)
        created.append(create_absence(data, user=user))
    logger.info('absence generate for %s from duty %s: %d added', day, duty_day, len(created))
    return created
