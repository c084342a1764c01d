from __future__ import annotations

from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import module_permission
from ward.services import leave as svc
from ward.services.common import as_dict

MODULE = 'leave'


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def leaves(request):
    if request.method == 'POST':
        record = svc.create_leave(request.data, user=request.user)
        return Response({'ok': True, 'data': as_dict(record)}, status=201)
    raw = request.query_params.get('date')
    if raw:
        day = parse_date(raw)
        if day is None:
            raise ValueError('Ngày không hợp lệ')
        return Response({'ok': True, 'data': [as_dict(r) for r in svc.leaves_on_date(day)]})
    return Response({'ok': True, 'data': [as_dict(r) for r in svc.get_leaves()]})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def leave_detail(request, leave_id: int):
    if request.method == 'DELETE':
        svc.delete_leave(leave_id, user=request.user)
        return Response({'ok': True})
    return Response({'ok': True, 'data': as_dict(svc.update_leave(leave_id, request.data, user=request.user))})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def leaves_today(request):
    return Response({'ok': True, 'data': [as_dict(r) for r in svc.leaves_on_date(timezone.localdate())]})
