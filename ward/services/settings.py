"""Key/value system settings: login background and sidebar menu order."""
from __future__ import annotations

import json
import logging
from typing import List

from ward.models import SystemSetting
from ward.services.audit import log_action
from ward.services import storage

logger = logging.getLogger(__name__)

LOGIN_BACKGROUND = 'login_background'
MENU_ORDER = 'sidebar_menu_order'


def get_value(key: str, default: str = '') -> str:
    row = SystemSetting.objects.filter(pk=key).first()
    return row.value if row else default


def set_value(key: str, value: str) -> SystemSetting:
    row, _ = SystemSetting.objects.update_or_create(key=key, defaults={'value': value})
    return row


def get_background() -> str:
    return get_value(LOGIN_BACKGROUND)


def update_background(f, *, request=None, user=None) -> str:
    ctype = getattr(f, 'content_type', '') or ''
    if not ctype.startswith('image/'):
        raise ValueError('Ảnh nền phải là tệp hình ảnh')
    url = storage.upload(storage.BUCKET_BACKGROUND, f, request=request, prefix='bg-')
    set_value(LOGIN_BACKGROUND, url)
    log_action(user=user, action='settings_background', object_type='system_settings', object_id=LOGIN_BACKGROUND)
    return url


def get_menu_order() -> List[str]:
    raw = get_value(MENU_ORDER)
    if not raw:
        return []
    try:
        order = json.loads(raw)
    except ValueError:
        logger.warning('invalid %s value, ignoring', MENU_ORDER)
        return []
    return order if isinstance(order, list) else []


def update_menu_order(order: List[str], *, user=None) -> List[str]:
    if not isinstance(order, list) or not all(isinstance(k, str) for k in order):
        raise ValueError('Thứ tự menu phải là danh sách chuỗi')
    set_value(MENU_ORDER, json.dumps(order, ensure_ascii=False))
    log_action(user=user, action='settings_menu_order', object_type='system_settings', object_id=MENU_ORDER)
    return order
