"""Per-role module permissions (the ``permissions`` table)."""
from __future__ import annotations

from typing import Dict, List, Optional

from ward.models import ModulePermission, User
from ward.services.audit import log_action

ACTIONS = ('view', 'add', 'edit', 'delete')

# in-scope feature modules, used for seeding
MODULES = [
    ('dashboard', 'Tổng quan'),
    ('personnel', 'Quản lý Nhân sự'),
    ('p-list', 'Danh sách nhân viên'),
    ('p-salary', 'Lên lương'),
    ('p-family', 'Quan hệ gia đình'),
    ('p-training', 'Quá trình đào tạo'),
    ('p-work', 'Quá trình công tác'),
    ('leave', 'Quản lý phép/Tranh thủ'),
    ('absence', 'Quản lý Quân số nghỉ'),
    ('research', 'Nghiên cứu khoa học'),
    ('r-topics', 'Đề tài NCKH'),
    ('patient-card-management', 'Quản lý thẻ chăm'),
    ('schedule', 'Lịch công tác'),
    ('duty', 'Lịch trực'),
    ('settings', 'Cài đặt hệ thống'),
]

# defaults applied by seed_permissions when a row is missing
ROLE_DEFAULTS = {
    User.ROLE_MANAGER: dict(can_view=True, can_add=True, can_edit=True, can_delete=False),
    User.ROLE_USER: dict(can_view=True, can_add=False, can_edit=False, can_delete=False),
}


def list_permissions() -> List[ModulePermission]:
    return list(ModulePermission.objects.order_by('module', 'role'))


def permissions_for_role(role: str) -> List[ModulePermission]:
    return list(ModulePermission.objects.filter(role=role).order_by('module'))


def update_permission(perm_id: int, updates: Dict[str, bool], *, actor=None) -> ModulePermission:
    perm = ModulePermission.objects.get(pk=perm_id)
    changed = []
    for action in ACTIONS:
        key = f'can_{action}'
        if key in updates:
            setattr(perm, key, bool(updates[key]))
            changed.append(key)
    if changed:
        perm.save(update_fields=changed)
    log_action(user=actor, action='permission_update', object_type='permissions', object_id=perm.id,
               detail={k: getattr(perm, k) for k in changed})
    return perm


def effective_permission(user, module: str) -> Dict[str, bool]:
    """Admin gets everything; a missing row grants nothing."""
    if getattr(user, 'role', None) == User.ROLE_ADMIN:
        return {f'can_{a}': True for a in ACTIONS}
    perm: Optional[ModulePermission] = ModulePermission.objects.filter(
        role=getattr(user, 'role', None), module=module).first()
    if perm is None:
        return {f'can_{a}': False for a in ACTIONS}
    return {f'can_{a}': getattr(perm, f'can_{a}') for a in ACTIONS}


def has_permission(user, module: str, action: str) -> bool:
    if action not in ACTIONS:
        return False
    return effective_permission(user, module)[f'can_{action}']


def seed_defaults() -> int:
    created = 0
    for role, defaults in ROLE_DEFAULTS.items():
        for module, _label in MODULES:
            _, was_created = ModulePermission.objects.get_or_create(role=role, module=module, defaults=defaults)
            created += int(was_created)
    return created
