"""System user accounts."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError

from ward.services.audit import log_action

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


def check_password_pair(password: Optional[str], confirm: Optional[str]) -> None:
    if len(password or '') < MIN_PASSWORD_LENGTH:
        raise ValueError(f'Mật khẩu phải có ít nhất {MIN_PASSWORD_LENGTH} ký tự')
    if password != confirm:
        raise ValueError('Mật khẩu xác nhận không khớp')


def _check_role(role: Optional[str]) -> None:
    if role and role not in dict(User.ROLE_CHOICES):
        raise ValueError(f'Vai trò không hợp lệ: {role}')


def list_users() -> List[User]:
    return list(User.objects.select_related('employee').order_by('username'))


def create_user(data: Dict[str, Any], *, actor=None) -> User:
    username = (data.get('username') or '').strip()
    if not username:
        raise ValueError('Tên đăng nhập là bắt buộc')
    check_password_pair(data.get('password'), data.get('confirm_password'))
    _check_role(data.get('role'))
    if User.objects.filter(username=username).exists():
        raise ValueError('Tên đăng nhập đã tồn tại')
    user = User(
        username=username,
        full_name=(data.get('full_name') or '').strip(),
        role=data.get('role') or User.ROLE_USER,
        employee_id=data.get('dsnv_id') or data.get('employee_id') or None,
    )
    user.set_password(data['password'])
    try:
        user.save()
    except IntegrityError as e:
        raise ValueError('Không thể tạo người dùng') from e
    log_action(user=actor, action='user_create', object_type='users', object_id=user.id)
    return user


def update_user(user_id: int, data: Dict[str, Any], *, actor=None) -> User:
    """Empty password leaves the stored one unchanged."""
    user = User.objects.get(pk=user_id)
    if 'username' in data:
        username = (data.get('username') or '').strip()
        if not username:
            raise ValueError('Tên đăng nhập là bắt buộc')
        if User.objects.filter(username=username).exclude(pk=user.pk).exists():
            raise ValueError('Tên đăng nhập đã tồn tại')
        user.username = username
    if 'full_name' in data:
        user.full_name = (data.get('full_name') or '').strip()
    if 'role' in data:
        _check_role(data.get('role'))
        user.role = data.get('role') or User.ROLE_USER
    if 'dsnv_id' in data or 'employee_id' in data:
        user.employee_id = data.get('dsnv_id') or data.get('employee_id') or None
    if data.get('password'):
        check_password_pair(data.get('password'), data.get('confirm_password'))
        user.set_password(data['password'])
    user.save()
    log_action(user=actor, action='user_update', object_type='users', object_id=user.id,
               detail={'password_changed': bool(data.get('password'))})
    return user


def delete_user(user_id: int, *, actor=None) -> None:
    if actor is not None and getattr(actor, 'pk', None) == int(user_id):
        raise ValueError('Không thể xóa tài khoản đang đăng nhập')
    deleted, _ = User.objects.filter(pk=user_id).delete()
    if not deleted:
        raise User.DoesNotExist(f'user {user_id} not found')
    log_action(user=actor, action='user_delete', object_type='users', object_id=user_id)


def change_password(user: User, old_password: str, new_password: str, confirm: str) -> None:
    if not user.check_password(old_password or ''):
        raise ValueError('Mật khẩu hiện tại không đúng')
    check_password_pair(new_password, confirm)
    user.set_password(new_password)
    user.save(update_fields=['password', 'updated_at'])
    log_action(user=user, action='password_change', object_type='users', object_id=user.id)
