"""
Patient-card catalog and lending records.

A lending record moves from ``Đang mượn thẻ`` to ``Đã trả thẻ`` exactly
once.  The deposit handover on each leg (borrow, return) is a separate
``Chưa bàn giao``/``Đã bàn giao`` flag with its own actor and time, and
is the only thing the batch update touches.

The list filters at the bottom of this module work on already fetched
records and do not hit the database.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from ward.models import Card, CardRecord
from ward.services.audit import log_action
from ward.services.common import clean_fields
from ward.services.spreadsheet import build_workbook, cell_text, read_dicts, read_rows

logger = logging.getLogger(__name__)

DATE_BUCKETS = ('all', 'today', 'yesterday', 'days_ago', 'custom')
STATUS_FILTERS = {
    'all': None,
    'borrowing': CardRecord.STATUS_BORROWING,
    'returned': CardRecord.STATUS_RETURNED,
}
LEGS = ('borrow', 'return')
HANDOVER_FIELDS = ('trang_thai_tien_muon', 'trang_thai_tien_tra')
# only meaningful once the card is back
RETURN_FIELDS = ('ngay_tra', 'nguoi_nhan_lai_the', 'trang_thai_tien_tra',
                 'nguoi_ban_giao_tien_tra', 'ngay_ban_giao_tien_tra')

CARD_HEADERS = ["Số thẻ", "Trạng thái", "Ghi chú"]

# (field, Vietnamese header) for record export/import; either header spelling is accepted on import
RECORD_COLUMNS = [
    ('so_the', 'Số thẻ'),
    ('ho_ten_benh_nhan', 'Họ tên bệnh nhân'),
    ('nam_sinh', 'Năm sinh'),
    ('ho_ten_nguoi_cham', 'Họ tên người chăm'),
    ('sdt_nguoi_cham', 'SĐT người chăm'),
    ('so_tien_cuoc', 'Số tiền cược'),
    ('ngay_muon', 'Ngày mượn'),
    ('nguoi_cho_muon', 'Người cho mượn'),
    ('trang_thai', 'Trạng thái'),
    ('trang_thai_tien_muon', 'Trạng thái tiền mượn'),
    ('nguoi_ban_giao_tien_muon', 'Người bàn giao tiền mượn'),
    ('ngay_ban_giao_tien_muon', 'Ngày bàn giao tiền mượn'),
    ('ngay_tra', 'Ngày trả'),
    ('nguoi_nhan_lai_the', 'Người nhận lại thẻ'),
    ('trang_thai_tien_tra', 'Trạng thái tiền trả'),
    ('nguoi_ban_giao_tien_tra', 'Người bàn giao tiền trả'),
    ('ngay_ban_giao_tien_tra', 'Ngày bàn giao tiền trả'),
    ('ghi_chu', 'Ghi chú'),
]


def _actor_name(user) -> str:
    if user is None:
        return 'Admin'
    return getattr(user, 'display_name', None) or getattr(user, 'username', '') or 'Admin'


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def get_cards() -> List[Card]:
    return list(Card.objects.order_by('so_the'))


def _check_card_status(status: str) -> None:
    if status not in dict(Card.STATUS_CHOICES):
        raise ValueError('Trạng thái thẻ không hợp lệ')


def create_card(data: Dict[str, Any], *, user=None) -> Card:
    fields = clean_fields(Card, data)
    if not (fields.get('so_the') or '').strip():
        raise ValueError('Số thẻ là bắt buộc')
    fields['so_the'] = fields['so_the'].strip()
    if 'trang_thai' in fields:
        _check_card_status(fields['trang_thai'])
    if Card.objects.filter(so_the=fields['so_the']).exists():
        raise ValueError(f"Thẻ {fields['so_the']} đã tồn tại")
    card = Card.objects.create(**fields)
    log_action(user=user, action='card_create', object_type='dm_the_cham', object_id=card.id)
    return card


def update_card(card_id: int, data: Dict[str, Any], *, user=None) -> Card:
    card = Card.objects.get(pk=card_id)
    fields = clean_fields(Card, data)
    if 'trang_thai' in fields:
        _check_card_status(fields['trang_thai'])
    for k, v in fields.items():
        setattr(card, k, v)
    try:
        card.save()
    except IntegrityError as e:
        raise ValueError(f'Thẻ {card.so_the} đã tồn tại') from e
    log_action(user=user, action='card_update', object_type='dm_the_cham', object_id=card.id)
    return card


def delete_card(card_id: int, *, user=None) -> None:
    deleted, _ = Card.objects.filter(pk=card_id).delete()
    if not deleted:
        raise Card.DoesNotExist(f'card {card_id} not found')
    log_action(user=user, action='card_delete', object_type='dm_the_cham', object_id=card_id)


def bulk_update_card_status(ids: Sequence[int], status: str, *, user=None) -> Dict[str, Any]:
    _check_card_status(status)
    updated, failed = [], []
    for cid in ids:
        try:
            card = Card.objects.get(pk=cid)
            card.trang_thai = status
            card.save(update_fields=['trang_thai'])
            updated.append(cid)
        except Card.DoesNotExist:
            failed.append(cid)
    if failed:
        logger.warning('card status update: %d of %d failed (%s)', len(failed), len(ids), failed)
    log_action(user=user, action='card_bulk_status', object_type='dm_the_cham',
               detail={'ids': list(ids), 'status': status, 'failed': failed})
    return {'updated': updated, 'failed': failed}


def _set_catalog_status(so_the: str, status: str) -> None:
    card = Card.objects.filter(so_the=so_the).first()
    if card and card.trang_thai != status:
        card.trang_thai = status
        card.save(update_fields=['trang_thai'])


def import_cards(f, *, user=None) -> Dict[str, int]:
    """Each row is inserted on its own; duplicates and bad rows count as failures."""
    success = failed = 0
    for row in read_rows(f):
        so_the = cell_text(row[0] if row else None)
        if not so_the:
            continue
        data = {
            'so_the': so_the,
            'trang_thai': cell_text(row[1] if len(row) > 1 else None) or Card.STATUS_AVAILABLE,
            'ghi_chu': cell_text(row[2] if len(row) > 2 else None) or '',
        }
        try:
            create_card(data, user=user)
            success += 1
        except (ValueError, IntegrityError) as e:
            logger.info('card import skipped %s: %s', so_the, e)
            failed += 1
    logger.info('card import: %d ok, %d failed', success, failed)
    return {'success': success, 'failed': failed}


def cards_template() -> bytes:
    sample = [['T001', Card.STATUS_AVAILABLE, ''], ['T002', Card.STATUS_AVAILABLE, 'Thẻ mới']]
    return build_workbook(CARD_HEADERS, sample, 'Danh_Sach_The')


# ---------------------------------------------------------------------------
# Lending records
# ---------------------------------------------------------------------------

def get_card_records() -> List[CardRecord]:
    return list(CardRecord.objects.order_by('-created_at', '-id'))


def get_card_record(record_id: int) -> CardRecord:
    return CardRecord.objects.get(pk=record_id)


def get_active_card_records() -> List[CardRecord]:
    return list(CardRecord.objects.filter(trang_thai=CardRecord.STATUS_BORROWING).order_by('-created_at', '-id'))


def create_card_record(data: Dict[str, Any], *, user=None) -> CardRecord:
    fields = clean_fields(CardRecord, data)
    if not (fields.get('so_the') or '').strip():
        raise ValueError('Số thẻ là bắt buộc')
    if not (fields.get('ho_ten_benh_nhan') or '').strip():
        raise ValueError('Họ tên bệnh nhân là bắt buộc')
    if not fields.get('ngay_muon'):
        fields['ngay_muon'] = timezone.now()
    rec = CardRecord.objects.create(**fields)
    log_action(user=user, action='card_record_create', object_type='quan_ly_the_cham', object_id=rec.id)
    return rec


def update_card_record(record_id: int, data: Dict[str, Any], *, user=None) -> CardRecord:
    """Edit a record's details.

    The borrowing/returned status is not editable here: a record only
    moves to returned through :func:`return_card`.
    """
    rec = CardRecord.objects.get(pk=record_id)
    fields = clean_fields(CardRecord, data)
    if fields.pop('trang_thai', rec.trang_thai) != rec.trang_thai:
        raise ValueError('Trạng thái mượn/trả chỉ thay đổi qua thao tác trả thẻ')
    for name in HANDOVER_FIELDS:
        if fields.get(name) is not None and fields[name] not in dict(CardRecord.HANDOVER_CHOICES):
            raise ValueError('Trạng thái bàn giao tiền không hợp lệ')
    if fields.get('so_tien_cuoc') is not None and fields['so_tien_cuoc'] < 0:
        raise ValueError('Số tiền cược không được âm')
    if rec.trang_thai == CardRecord.STATUS_BORROWING:
        if any(fields.get(name) is not None for name in RETURN_FIELDS):
            raise ValueError('Thẻ chưa trả, không thể ghi thông tin trả thẻ')
    elif 'ngay_tra' in fields and fields['ngay_tra'] is None:
        raise ValueError('Thẻ đã trả phải có ngày trả')
    for k, v in fields.items():
        setattr(rec, k, v)
    try:
        rec.save()
    except IntegrityError as e:
        raise ValueError('Dữ liệu thẻ chăm không hợp lệ') from e
    log_action(user=user, action='card_record_update', object_type='quan_ly_the_cham', object_id=rec.id)
    return rec


def delete_card_record(record_id: int, *, user=None) -> None:
    deleted, _ = CardRecord.objects.filter(pk=record_id).delete()
    if not deleted:
        raise CardRecord.DoesNotExist(f'record {record_id} not found')
    log_action(user=user, action='card_record_delete', object_type='quan_ly_the_cham', object_id=record_id)


def check_patient_borrowing(name: str) -> List[CardRecord]:
    name = (name or '').strip()
    if not name:
        return []
    return list(CardRecord.objects.filter(trang_thai=CardRecord.STATUS_BORROWING,
                                          ho_ten_benh_nhan__icontains=name).order_by('-ngay_muon', '-id'))


def format_vn_date(value) -> str:
    if isinstance(value, datetime):
        value = timezone.localtime(value) if timezone.is_aware(value) else value
        value = value.date()
    return value.strftime('%d/%m/%Y') if value else ''


def borrowing_warning(name: str) -> Optional[str]:
    """Advisory text when the patient already holds a card, else ``None``."""
    matches = check_patient_borrowing(name)
    if not matches:
        return None
    d = matches[0]
    return (f"CẢNH BÁO: Bệnh nhân {d.ho_ten_benh_nhan} đã mượn thẻ {d.so_the} "
            f"ngày {format_vn_date(d.ngay_muon)}, người cho mượn: {d.nguoi_cho_muon or '---'}")


@transaction.atomic
def borrow_card(data: Dict[str, Any], *, user=None):
    """Register a new borrow.  Returns ``(record, warning)``; never blocks on duplicates."""
    warning = borrowing_warning(data.get('ho_ten_benh_nhan') or '')
    payload = dict(data)
    payload['trang_thai'] = CardRecord.STATUS_BORROWING
    payload.setdefault('trang_thai_tien_muon', CardRecord.HANDOVER_PENDING)
    if not payload.get('so_tien_cuoc'):
        payload['so_tien_cuoc'] = getattr(settings, 'CARD_DEFAULT_DEPOSIT', 500000)
    if not payload.get('nguoi_cho_muon'):
        payload['nguoi_cho_muon'] = _actor_name(user)
    for key in ('ngay_tra', 'nguoi_nhan_lai_the', 'trang_thai_tien_tra', 'nguoi_ban_giao_tien_tra', 'ngay_ban_giao_tien_tra'):
        payload.pop(key, None)
    rec = create_card_record(payload, user=user)
    _set_catalog_status(rec.so_the, Card.STATUS_BORROWED)
    if warning:
        logger.info('borrow %s registered despite active borrow: %s', rec.id, warning)
    return rec, warning


@transaction.atomic
def return_card(record_id: int, data: Optional[Dict[str, Any]] = None, *, user=None) -> CardRecord:
    rec = CardRecord.objects.select_for_update().get(pk=record_id)
    if rec.trang_thai == CardRecord.STATUS_RETURNED:
        raise ValueError('Thẻ đã được trả trước đó')
    data = clean_fields(CardRecord, data or {})
    rec.trang_thai = CardRecord.STATUS_RETURNED
    rec.ngay_tra = data.get('ngay_tra') or timezone.now()
    rec.nguoi_nhan_lai_the = data.get('nguoi_nhan_lai_the') or _actor_name(user)
    rec.trang_thai_tien_tra = data.get('trang_thai_tien_tra') or CardRecord.HANDOVER_PENDING
    if data.get('nguoi_ban_giao_tien_tra'):
        rec.nguoi_ban_giao_tien_tra = data['nguoi_ban_giao_tien_tra']
    if data.get('ngay_ban_giao_tien_tra'):
        rec.ngay_ban_giao_tien_tra = data['ngay_ban_giao_tien_tra']
    if data.get('ghi_chu'):
        rec.ghi_chu = data['ghi_chu']
    rec.save()
    _set_catalog_status(rec.so_the, Card.STATUS_AVAILABLE)
    log_action(user=user, action='card_return', object_type='quan_ly_the_cham', object_id=rec.id)
    return rec


def batch_update_handover(ids: Sequence[int], leg: str, status: str, actor_name: str,
                          at: Optional[datetime] = None, *, user=None) -> Dict[str, List[int]]:
    """Set one leg's handover status, actor and time on each record.

    Every id is its own update; a failure is reported and does not undo
    the others.  Running the same batch twice leaves the same result.
    """
    if leg not in LEGS:
        raise ValueError("leg phải là 'borrow' hoặc 'return'")
    if status not in dict(CardRecord.HANDOVER_CHOICES):
        raise ValueError('Trạng thái bàn giao không hợp lệ')
    at = at or timezone.now()
    if timezone.is_naive(at):
        at = timezone.make_aware(at)
    suffix = 'muon' if leg == 'borrow' else 'tra'
    values = {
        f'trang_thai_tien_{suffix}': status,
        f'nguoi_ban_giao_tien_{suffix}': actor_name,
        f'ngay_ban_giao_tien_{suffix}': at,
    }
    updated, failed = [], []
    for rid in ids:
        try:
            rec = CardRecord.objects.get(pk=rid)
            for k, v in values.items():
                setattr(rec, k, v)
            rec.save(update_fields=list(values.keys()))
            updated.append(rid)
        except (CardRecord.DoesNotExist, ValueError, TypeError):
            logger.warning('handover update failed for record %s', rid, exc_info=True)
            failed.append(rid)
    log_action(user=user, action='card_batch_handover', object_type='quan_ly_the_cham',
               detail={'leg': leg, 'status': status, 'updated': updated, 'failed': failed})
    return {'updated': updated, 'failed': failed}


# ---------------------------------------------------------------------------
# Record import / export
# ---------------------------------------------------------------------------

def _export_value(value):
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.strftime('%d/%m/%Y %H:%M')
    return '' if value is None else value


def export_records(records: Iterable[CardRecord]) -> bytes:
    rows = ([_export_value(getattr(r, field)) for field, _ in RECORD_COLUMNS] for r in records)
    return build_workbook([label for _, label in RECORD_COLUMNS], rows, 'Quan_ly_the_cham')


def _parse_export_datetime(value):
    if isinstance(value, datetime):
        return value
    text = cell_text(value)
    if not text:
        return None
    for fmt in ('%d/%m/%Y %H:%M', '%d/%m/%Y', '%Y-%m-%d %H:%M:%S', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d'):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def import_records(f, *, user=None) -> Dict[str, int]:
    by_label = {label: field for field, label in RECORD_COLUMNS}
    success = failed = 0
    for raw in read_dicts(f):
        data: Dict[str, Any] = {}
        for key, value in raw.items():
            field = by_label.get(key) or (key if key in dict(RECORD_COLUMNS) else None)
            if field:
                data[field] = value
        if not cell_text(data.get('so_the')) or not cell_text(data.get('ho_ten_benh_nhan')):
            failed += 1
            continue
        for field in ('ngay_muon', 'ngay_ban_giao_tien_muon', 'ngay_tra', 'ngay_ban_giao_tien_tra'):
            if field in data:
                data[field] = _parse_export_datetime(data[field])
        for field, _ in RECORD_COLUMNS:
            if field in data and not field.startswith('ngay_') and field != 'so_tien_cuoc':
                data[field] = cell_text(data[field]) or ''
        data['trang_thai'] = data.get('trang_thai') or CardRecord.STATUS_BORROWING
        data['trang_thai_tien_muon'] = data.get('trang_thai_tien_muon') or CardRecord.HANDOVER_PENDING
        data['so_tien_cuoc'] = data.get('so_tien_cuoc') or getattr(settings, 'CARD_DEFAULT_DEPOSIT', 500000)
        try:
            create_card_record(data, user=user)
            success += 1
        except ValueError as e:
            logger.info('record import skipped row: %s', e)
            failed += 1
    logger.info('card record import: %d ok, %d failed', success, failed)
    return {'success': success, 'failed': failed}


# ---------------------------------------------------------------------------
# In-memory list filters
# ---------------------------------------------------------------------------

def _get(record, key):
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def _local_date(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    return None


def search_filter(records: Iterable, q: Optional[str]) -> list:
    term = (q or '').strip().lower()
    records = list(records)
    if not term:
        return records
    return [r for r in records
            if any(term in (_get(r, k) or '').lower() for k in ('ho_ten_benh_nhan', 'ho_ten_nguoi_cham', 'so_the'))]


def date_filter(records: Iterable, bucket: str = 'all', *, days: Optional[int] = None,
                start: Optional[date] = None, end: Optional[date] = None, today: Optional[date] = None) -> list:
    """Keep records whose local borrow date falls in ``bucket``.

    ``days_ago`` selects the single day ``today - days``; ``custom`` is the
    inclusive ``[start, end]`` range, either end optional.
    """
    records = list(records)
    if not bucket or bucket == 'all':
        return records
    if bucket not in DATE_BUCKETS:
        raise ValueError(f'Bộ lọc ngày không hợp lệ: {bucket}')
    today = today or timezone.localdate()
    if bucket == 'today':
        lo = hi = today
    elif bucket == 'yesterday':
        lo = hi = today - timedelta(days=1)
    elif bucket == 'days_ago':
        lo = hi = today - timedelta(days=int(days or 0))
    else:
        lo, hi = start, end
    out = []
    for r in records:
        d = _local_date(_get(r, 'ngay_muon'))
        if d is None:
            continue
        if lo is not None and d < lo:
            continue
        if hi is not None and d > hi:
            continue
        out.append(r)
    return out


def status_filter(records: Iterable, status: Optional[str] = 'all') -> list:
    records = list(records)
    status = status or 'all'
    if status not in STATUS_FILTERS:
        raise ValueError(f'Bộ lọc trạng thái không hợp lệ: {status}')
    wanted = STATUS_FILTERS[status]
    if wanted is None:
        return records
    return [r for r in records if _get(r, 'trang_thai') == wanted]


def filter_records(records: Iterable, *, q: Optional[str] = None, bucket: str = 'all', days: Optional[int] = None,
                   start: Optional[date] = None, end: Optional[date] = None, status: Optional[str] = 'all',
                   today: Optional[date] = None) -> list:
    out = search_filter(records, q)
    out = date_filter(out, bucket, days=days, start=start, end=end, today=today)
    return status_filter(out, status or 'all')
