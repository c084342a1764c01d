"""Module permission endpoints."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import IsAdminRole
from ward.serializers.settings import PermissionUpdateSerializer
from ward.services import permissions as svc
from ward.services.common import as_dict


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def permissions_list(request):
    role = request.query_params.get('role')
    rows = svc.permissions_for_role(role) if role else svc.list_permissions()
    return Response({'ok': True, 'data': [as_dict(p) for p in rows],
                     'modules': [{'key': k, 'label': label} for k, label in svc.MODULES]})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdminRole])
def permission_detail(request, perm_id: int):
    s = PermissionUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    perm = svc.update_permission(perm_id, s.validated_data, actor=request.user)
    return Response({'ok': True, 'data': as_dict(perm)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_permissions(request):
    """Effective permissions of the current user, one entry per module."""
    module = request.query_params.get('module')
    modules = [module] if module else [k for k, _ in svc.MODULES]
    return Response({'ok': True, 'data': {m: svc.effective_permission(request.user, m) for m in modules}})
