"""Helpers shared by the domain services: payload cleaning and row dicts."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .spreadsheet import process_date

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 200


def sanitize(data: Any) -> Any:
    """Blank strings become ``None``, recursively through lists and dicts."""
    if isinstance(data, str):
        return None if not data.strip() else data
    if isinstance(data, (list, tuple)):
        return [sanitize(item) for item in data]
    if isinstance(data, dict):
        return {k: sanitize(v) for k, v in data.items()}
    return data


def clean_fields(model, data: Dict[str, Any], *, exclude: Iterable[str] = ('id', 'created_at', 'updated_at')) -> Dict[str, Any]:
    """Keep only concrete, editable fields of ``model`` and coerce values.

    Unknown keys are dropped.  Date fields also accept ``D/M/YYYY`` and
    spreadsheet serials.  Raises ``ValueError`` on values that cannot be
    coerced.
    """
    out: Dict[str, Any] = {}
    skip = set(exclude)
    for field in model._meta.concrete_fields:
        if field.primary_key or field.name in skip:
            continue
        key = field.attname if field.attname in data else field.name
        if key not in data:
            continue
        value = sanitize(data[key])
        if isinstance(field, models.ForeignKey):
            if isinstance(value, models.Model):
                value = value.pk
            out[field.attname] = int(value) if value not in (None, '') else None
            continue
        if value is None:
            if not field.null and field.has_default():
                value = field.get_default()
            elif not field.null and isinstance(field, (models.CharField, models.TextField)):
                value = ''
            out[field.name] = value
            continue
        if isinstance(field, models.DateField) and not isinstance(field, models.DateTimeField):
            parsed = process_date(value)
            if parsed is None:
                raise ValueError(f'{field.name}: ngày không hợp lệ')
            value = date.fromisoformat(parsed)
        else:
            try:
                value = field.to_python(value)
            except ValidationError as e:
                raise ValueError(f'{field.name}: {"; ".join(e.messages)}') from e
            if isinstance(value, datetime) and timezone.is_naive(value):
                value = timezone.make_aware(value)
        out[field.name] = value
    return out


def as_dict(instance, *, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for field in instance._meta.concrete_fields:
        if field.name == 'password':
            continue
        value = getattr(instance, field.attname)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, date):
            value = value.isoformat()
        data[field.attname] = value
    if extra:
        data.update(extra)
    return data


def paginate(qs, page: Optional[int], page_size: Optional[int]):
    """Slice ``qs`` (a queryset or list) and return ``(items, meta)``."""
    page = max(int(page or 1), 1)
    page_size = min(max(int(page_size or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)
    total = qs.count() if hasattr(qs, 'count') and not isinstance(qs, list) else len(qs)
    start = (page - 1) * page_size
    items = list(qs[start:start + page_size])
    return items, {'page': page, 'pageSize': page_size, 'total': total}
