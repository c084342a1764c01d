"""
File uploads into named buckets.

A bucket is a folder under ``MEDIA_ROOT`` handled by Django's default
storage.  Uploads are size/type checked the same way for every bucket
and stored under a random name; the returned value is an absolute
public URL when a request is available.
"""
from __future__ import annotations

import logging
import os
import time
import uuid
from typing import Iterable, List, Optional

from django.conf import settings
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

BUCKET_PARTY_CARD = 'the_dang'
BUCKET_RESEARCH = 'file_nckh'
BUCKET_SCHEDULE = 'lich_cong_tac'
BUCKET_BACKGROUND = 'backgrounds'


def validate_upload(f) -> None:
    size_mb = (getattr(f, 'size', 0) or 0) / (1024 * 1024)
    if size_mb > settings.UPLOAD_MAX_MB:
        raise ValueError('Tệp quá lớn')
    ctype = getattr(f, 'content_type', '') or ''
    if not any(ctype.startswith(prefix) for prefix in settings.ALLOWED_UPLOAD_TYPES):
        raise ValueError('Định dạng tệp không được hỗ trợ')


def _random_name(original: str, prefix: str = '') -> str:
    ext = os.path.splitext(original or '')[1].lower()
    return f"{prefix}{int(time.time() * 1000)}_{uuid.uuid4().hex[:10]}{ext}"


def upload(bucket: str, f, *, request=None, prefix: str = '') -> str:
    """Store one uploaded file in ``bucket`` and return its public URL."""
    validate_upload(f)
    name = default_storage.save(f"{bucket}/{_random_name(getattr(f, 'name', ''), prefix)}", f)
    url = default_storage.url(name)
    logger.info('stored %s (%s bytes) in %s', name, getattr(f, 'size', 0), bucket)
    if request is not None:
        return request.build_absolute_uri(url)
    return url


def upload_many(bucket: str, files: Iterable, *, request=None) -> List[str]:
    # validate everything first so a bad file does not leave half the batch stored
    files = list(files)
    for f in files:
        validate_upload(f)
    return [upload(bucket, f, request=request) for f in files]


def file_list(request, field: str = 'files') -> list:
    if hasattr(request.FILES, 'getlist'):
        files = request.FILES.getlist(field)
        if files:
            return files
    single: Optional[object] = request.FILES.get('file')
    return [single] if single else []
