"""User management endpoints (admin only)."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import IsAdminRole
from ward.serializers.users import UserCreateSerializer, UserUpdateSerializer
from ward.services import users as svc


def _serialize(user) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'full_name': user.full_name,
        'role': user.role,
        'dsnv_id': user.employee_id,
        'ho_va_ten': user.employee.ho_va_ten if user.employee_id else None,
        'is_active': user.is_active,
        'created_at': user.date_joined.isoformat() if user.date_joined else None,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users(request):
    if request.method == 'POST':
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = svc.create_user(s.validated_data, actor=request.user)
        return Response({'ok': True, 'data': _serialize(user)}, status=201)
    return Response({'ok': True, 'data': [_serialize(u) for u in svc.list_users()]})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, user_id: int):
    if request.method == 'DELETE':
        svc.delete_user(user_id, actor=request.user)
        return Response({'ok': True})
    s = UserUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = svc.update_user(user_id, s.validated_data, actor=request.user)
    return Response({'ok': True, 'data': _serialize(user)})
