"""Research topics (NCKH): paginated listing, CRUD, clone and evidence files."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.db import transaction
from django.db.models import Q

from ward.models import ResearchTopic
from ward.services.audit import log_action
from ward.services.common import clean_fields
from ward.services import storage

logger = logging.getLogger(__name__)

COPY_SUFFIX = ' (Bản sao)'


def list_topics(page: int = 1, page_size: int = 10, q: Optional[str] = None) -> Tuple[List[ResearchTopic], int]:
    page = max(int(page or 1), 1)
    page_size = min(max(int(page_size or 10), 1), 200)
    qs = ResearchTopic.objects.select_related('dsnv')
    term = (q or '').strip()
    if term:
        qs = qs.filter(Q(ten_de_tai__icontains=term) | Q(cap_quan_ly__icontains=term)
                       | Q(ket_qua__icontains=term) | Q(vai_tro__icontains=term))
    total = qs.count()
    start = (page - 1) * page_size
    return list(qs.order_by('-created_at', '-id')[start:start + page_size]), total


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    # ho_va_ten is the joined employee name, never a column
    data = {k: v for k, v in data.items() if k not in ('ho_va_ten', 'created_by', 'created_by_id')}
    if 'minh_chung' in data and data['minh_chung'] is not None and not isinstance(data['minh_chung'], list):
        raise ValueError('minh_chung phải là danh sách')
    fields = clean_fields(ResearchTopic, data)
    if fields.get('trang_thai') and fields['trang_thai'] not in dict(ResearchTopic.STATUS_CHOICES):
        raise ValueError(f"Trạng thái không hợp lệ: {fields['trang_thai']}")
    if 'minh_chung' in fields and fields['minh_chung'] is None:
        fields['minh_chung'] = []
    return fields


def create_topic(data: Dict[str, Any], *, user=None) -> ResearchTopic:
    fields = _clean(data)
    if not (fields.get('ten_de_tai') or '').strip():
        raise ValueError('Tên đề tài là bắt buộc')
    topic = ResearchTopic.objects.create(created_by=user if getattr(user, 'pk', None) else None, **fields)
    log_action(user=user, action='research_create', object_type='nckh', object_id=topic.id)
    return topic


def update_topic(topic_id: int, data: Dict[str, Any], *, user=None) -> ResearchTopic:
    topic = ResearchTopic.objects.get(pk=topic_id)
    fields = _clean(data)
    if 'ten_de_tai' in fields and not (fields['ten_de_tai'] or '').strip():
        raise ValueError('Tên đề tài là bắt buộc')
    for k, v in fields.items():
        setattr(topic, k, v)
    topic.save()
    log_action(user=user, action='research_update', object_type='nckh', object_id=topic.id)
    return topic


def delete_topic(topic_id: int, *, user=None) -> None:
    deleted, _ = ResearchTopic.objects.filter(pk=topic_id).delete()
    if not deleted:
        raise ResearchTopic.DoesNotExist(f'topic {topic_id} not found')
    log_action(user=user, action='research_delete', object_type='nckh', object_id=topic_id)


def clone_topic(topic_id: int, *, user=None) -> ResearchTopic:
    src = ResearchTopic.objects.get(pk=topic_id)
    copy = ResearchTopic.objects.create(
        ten_de_tai=f'{src.ten_de_tai}{COPY_SUFFIX}',
        dsnv_id=src.dsnv_id,
        vai_tro=src.vai_tro,
        cap_quan_ly=src.cap_quan_ly,
        trang_thai=src.trang_thai,
        ngay_bat_dau=src.ngay_bat_dau,
        ngay_ket_thuc=src.ngay_ket_thuc,
        ket_qua=src.ket_qua,
        minh_chung=list(src.minh_chung or []),
        created_by=user if getattr(user, 'pk', None) else None,
    )
    log_action(user=user, action='research_clone', object_type='nckh', object_id=copy.id, detail={'from': src.id})
    return copy


def upload_evidence(files: Sequence, *, request=None) -> List[str]:
    if not files:
        raise ValueError('Chưa chọn tệp minh chứng')
    return storage.upload_many(storage.BUCKET_RESEARCH, files, request=request)


@transaction.atomic
def append_evidence(topic_id: int, urls: Sequence[str], *, user=None) -> ResearchTopic:
    topic = ResearchTopic.objects.select_for_update().get(pk=topic_id)
    topic.minh_chung = list(topic.minh_chung or []) + [u for u in urls if u]
    topic.save(update_fields=['minh_chung', 'updated_at'])
    log_action(user=user, action='research_evidence', object_type='nckh', object_id=topic.id,
               detail={'added': len(urls)})
    return topic
