"""
Personnel directory: employees and their history lists.

Create and update take the employee fields plus four child lists
(family, work history, training, salary) and persist them in one
transaction.  Update replaces each child list that is sent and keeps
the ones left out; child ids from the payload are ignored.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from django.db import transaction
from django.db.models import Q

from ward.models import Employee, FamilyMember, Salary, Training, WorkHistory
from ward.services.audit import log_action
from ward.services.common import clean_fields, paginate
from ward.services.spreadsheet import build_workbook, cell_text, process_date, read_rows
from ward.services import storage

logger = logging.getLogger(__name__)

CHILD_MODELS = {
    'family': FamilyMember,
    'work_history': WorkHistory,
    'training': Training,
    'salary': Salary,
}

OFFICER = 'Sĩ quan'
OFFICER_ALT = 'Sỹ quan'

IMPORT_HEADERS = [
    "Họ và tên", "Ngày sinh", "Giới tính", "Cấp bậc", "Chức vụ", "CCCD",
    "Ngày cấp CCCD", "CMQĐ", "Ngày cấp CMQĐ", "Quê quán", "Nơi ở hiện nay",
    "Điện thoại", "Tháng năm tuyển dụng", "Tháng năm nhập ngũ", "Ngày về khoa",
    "Trạng thái", "Diện quản lý", "Ngày vào đảng", "Ngày chính thức",
    "Số thẻ đảng", "Ngày cấp thẻ đảng",
]
OPTIONAL_HEADER = "Chứng chỉ hành nghề"

# column index -> field; date columns go through process_date
IMPORT_COLUMNS = [
    'ho_va_ten', 'ngay_sinh', 'gioi_tinh', 'cap_bac', 'chuc_vu', 'cccd',
    'ngay_cap_cccd', 'cmqd', 'ngay_cap_cmqd', 'que_quan', 'noi_o_hien_nay',
    'dien_thoai', 'thang_nam_tuyen_dung', 'thang_nam_nhap_ngu',
    'ngay_ve_khoa_cong_tac', 'trang_thai', 'dien_quan_ly', 'ngay_vao_dang',
    'ngay_chinh_thuc', 'so_the_dang', 'ngay_cap_the_dang', 'chung_chi_hanh_nghe',
]
DATE_COLUMNS = {1, 6, 8, 12, 13, 14, 17, 18, 20}


def category_q(category: Optional[str]) -> Q:
    if not category or category == 'all':
        return Q()
    q = Q(doi_tuong=category) | Q(trang_thai=category)
    if category == OFFICER:
        q |= Q(doi_tuong=OFFICER_ALT)
    return q


def search_q(term: Optional[str]) -> Q:
    term = (term or '').strip()
    if not term:
        return Q()
    return (Q(ho_va_ten__icontains=term) | Q(chuc_vu__icontains=term) | Q(so_the_dang__icontains=term)
            | Q(cccd__icontains=term) | Q(cmqd__icontains=term) | Q(dien_thoai__icontains=term))


def list_employees(*, category: Optional[str] = None, q: Optional[str] = None,
                   page: Optional[int] = None, page_size: Optional[int] = None):
    qs = Employee.objects.filter(category_q(category) & search_q(q)).order_by('ho_va_ten', 'id')
    if page is None and page_size is None:
        items = list(qs)
        return items, {'page': 1, 'pageSize': len(items), 'total': len(items)}
    return paginate(qs, page, page_size)


def get_employee_details(employee_id: int) -> Dict[str, Any]:
    emp = Employee.objects.get(pk=employee_id)
    return {
        'employee': emp,
        'family': list(emp.family.order_by('id')),
        'work_history': list(emp.work_history.order_by('id')),
        'training': list(emp.training.order_by('id')),
        'salary': list(emp.salary.order_by('id')),
    }


def _insert_children(emp: Employee, children: Dict[str, Optional[Sequence[dict]]]) -> None:
    for key, model in CHILD_MODELS.items():
        items = children.get(key) or []
        objs = [model(dsnv=emp, **clean_fields(model, item, exclude=('id', 'dsnv'))) for item in items]
        if objs:
            model.objects.bulk_create(objs)


def _validate_employee(fields: Dict[str, Any], *, partial: bool = False) -> None:
    if not partial or 'ho_va_ten' in fields:
        if not (fields.get('ho_va_ten') or '').strip():
            raise ValueError('Họ và tên là bắt buộc')


@transaction.atomic
def create_employee(data: Dict[str, Any], *, family=None, work_history=None, training=None, salary=None,
                    user=None) -> Employee:
    fields = clean_fields(Employee, data)
    _validate_employee(fields)
    emp = Employee.objects.create(**fields)
    _insert_children(emp, {'family': family, 'work_history': work_history, 'training': training, 'salary': salary})
    log_action(user=user, action='employee_create', object_type='dsnv', object_id=emp.id)
    return emp


@transaction.atomic
def update_employee(employee_id: int, data: Dict[str, Any], *, family=None, work_history=None, training=None,
                    salary=None, user=None) -> Employee:
    emp = Employee.objects.select_for_update().get(pk=employee_id)
    fields = clean_fields(Employee, data)
    _validate_employee(fields, partial=True)
    for k, v in fields.items():
        setattr(emp, k, v)
    emp.save()
    # a list that was sent (even empty) replaces the stored one; None keeps it
    children = {'family': family, 'work_history': work_history, 'training': training, 'salary': salary}
    children = {k: v for k, v in children.items() if v is not None}
    for key in children:
        CHILD_MODELS[key].objects.filter(dsnv=emp).delete()
    _insert_children(emp, children)
    log_action(user=user, action='employee_update', object_type='dsnv', object_id=emp.id)
    return emp


def delete_employee(employee_id: int, *, user=None) -> None:
    deleted, _ = Employee.objects.filter(pk=employee_id).delete()
    if not deleted:
        raise Employee.DoesNotExist(f'employee {employee_id} not found')
    log_action(user=user, action='employee_delete', object_type='dsnv', object_id=employee_id)


@transaction.atomic
def bulk_create_employees(rows: Sequence[Dict[str, Any]], *, user=None) -> List[Employee]:
    objs = []
    for row in rows:
        fields = clean_fields(Employee, row)
        _validate_employee(fields)
        objs.append(Employee(**fields))
    # save() per row so post_save broadcasts each insert
    for obj in objs:
        obj.save()
    log_action(user=user, action='employee_bulk_create', object_type='dsnv', detail={'count': len(objs)})
    return objs


def bulk_update_employees(ids: Sequence[int], updates: Dict[str, Any], *, user=None) -> int:
    """Assign the same fields to every listed employee.  Re-running is harmless."""
    fields = clean_fields(Employee, updates)
    if not fields:
        return 0
    _validate_employee(fields, partial=True)
    count = 0
    for emp in Employee.objects.filter(pk__in=list(ids)):
        for k, v in fields.items():
            setattr(emp, k, v)
        emp.save(update_fields=list(fields.keys()))
        count += 1
    log_action(user=user, action='employee_bulk_update', object_type='dsnv',
               detail={'ids': list(ids), 'fields': sorted(fields.keys())})
    return count


def update_employee_status(ids: Sequence[int], status: str, *, user=None) -> int:
    return bulk_update_employees(ids, {'trang_thai': status}, user=user)


def upload_party_card_image(f, *, request=None) -> str:
    return storage.upload(storage.BUCKET_PARTY_CARD, f, request=request)


# ---------------------------------------------------------------------------
# Aggregate history views
# ---------------------------------------------------------------------------

def all_work_history() -> List[WorkHistory]:
    return list(WorkHistory.objects.select_related('dsnv').order_by('-tu_thang_nam', 'id'))


def all_training() -> List[Training]:
    return list(Training.objects.select_related('dsnv').order_by('-tu_thang_nam', 'id'))


# ---------------------------------------------------------------------------
# Spreadsheet import / template
# ---------------------------------------------------------------------------

def row_to_employee(row: Sequence[Any]) -> Optional[Dict[str, Any]]:
    """Map one template row to employee fields, ``None`` when it has no name."""
    cells = list(row) + [None] * (len(IMPORT_COLUMNS) - len(row))
    name = cell_text(cells[0])
    if not name:
        return None
    out: Dict[str, Any] = {}
    for idx, field in enumerate(IMPORT_COLUMNS):
        value = cells[idx]
        out[field] = process_date(value) if idx in DATE_COLUMNS else cell_text(value)
    out['ho_va_ten'] = name
    return out


def import_employees(f, *, user=None) -> Dict[str, Any]:
    rows = read_rows(f)
    payload = [emp for emp in (row_to_employee(r) for r in rows) if emp]
    if not payload:
        raise ValueError('Không tìm thấy dữ liệu hợp lệ trong tệp')
    created = bulk_create_employees(payload, user=user)
    logger.info('imported %d employees (%d rows read)', len(created), len(rows))
    return {'ok': True, 'created': len(created)}


def import_template() -> bytes:
    sample = ['Nguyễn Văn A', '01/01/1990', 'Nam', 'Đại úy', 'Bác sĩ', '001090000001',
              '01/01/2021', '123456', '01/01/2015', 'Hà Nội', 'Hà Nội', '0912345678',
              '01/09/2012', '01/09/2010', '01/01/2016', 'Đang công tác', 'Sĩ quan',
              '03/02/2012', '03/02/2013', '0123456', '03/02/2013', '']
    return build_workbook(IMPORT_HEADERS + [OPTIONAL_HEADER], [sample], 'Danh sách nhân sự')


