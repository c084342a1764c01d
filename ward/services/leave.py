"""Leave registrations."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from ward.models import Employee, LeaveRecord
from ward.services.audit import log_action
from ward.services.common import clean_fields

SNAPSHOT_FIELDS = ('ho_va_ten', 'cap_bac', 'chuc_vu')


def _apply(record: LeaveRecord, data: Dict[str, Any]) -> None:
    fields = clean_fields(LeaveRecord, data, exclude=('id', 'created_at', 'created_by'))
    for k, v in fields.items():
        setattr(record, k, v)
    if 'dsnv_id' in fields and record.dsnv_id:
        emp = Employee.objects.filter(pk=record.dsnv_id).first()
        if emp is None:
            raise ValueError('Nhân viên không tồn tại')
        for name in SNAPSHOT_FIELDS:
            if not data.get(name):
                setattr(record, name, getattr(emp, name))
    if record.tu_ngay and record.den_ngay and record.tu_ngay > record.den_ngay:
        raise ValueError('Ngày bắt đầu phải trước ngày kết thúc')


def get_leaves() -> List[LeaveRecord]:
    return list(LeaveRecord.objects.order_by('-created_at', '-id'))


def create_leave(data: Dict[str, Any], *, user=None) -> LeaveRecord:
    record = LeaveRecord(created_by=user if getattr(user, 'pk', None) else None)
    _apply(record, data)
    if not record.ho_va_ten:
        raise ValueError('Cần chọn nhân viên hoặc nhập họ tên')
    record.save()
    log_action(user=user, action='leave_create', object_type='quan_ly_phep', object_id=record.id)
    return record


def update_leave(leave_id: int, data: Dict[str, Any], *, user=None) -> LeaveRecord:
    record = LeaveRecord.objects.get(pk=leave_id)
    _apply(record, data)
    record.save()
    log_action(user=user, action='leave_update', object_type='quan_ly_phep', object_id=record.id)
    return record


def delete_leave(leave_id: int, *, user=None) -> None:
    deleted, _ = LeaveRecord.objects.filter(pk=leave_id).delete()
    if not deleted:
        raise LeaveRecord.DoesNotExist(f'leave {leave_id} not found')
    log_action(user=user, action='leave_delete', object_type='quan_ly_phep', object_id=leave_id)


def leaves_on_date(day: date) -> List[LeaveRecord]:
    return list(LeaveRecord.objects.filter(tu_ngay__lte=day, den_ngay__gte=day).order_by('ho_va_ten', 'id'))
