"""Work schedule endpoints.  Responses carry the derived ``trang_thai_hien_thi``."""
from __future__ import annotations

from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.models import Employee
from ward.permissions import module_permission
from ward.serializers.schedules import CalendarQuerySerializer, ScheduleListQuerySerializer
from ward.services import schedules as svc
from ward.services.common import as_dict
from ward.services.storage import file_list

MODULE = 'schedule'


def _serialize(s, employees, now) -> dict:
    return as_dict(s, extra={
        'trang_thai_hien_thi': svc.display_status(s, now),
        'nguoi_thuc_hien_ten': svc.resolve_performers(s.nguoi_thuc_hien, employees),
    })


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def schedules(request):
    now = timezone.now()
    employees = list(Employee.objects.only('id', 'ho_va_ten'))
    if request.method == 'POST':
        s = svc.create_schedule(request.data, user=request.user)
        return Response({'ok': True, 'data': _serialize(s, employees, now)}, status=201)

    q = ScheduleListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    items = svc.filter_schedules(svc.get_schedules(), v.get('filter') or 'all', q=v.get('q'),
                                 start=v.get('start'), end=v.get('end'), employees=employees)
    return Response({'ok': True, 'data': [_serialize(s, employees, now) for s in items]})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def schedule_detail(request, schedule_id: int):
    if request.method == 'DELETE':
        svc.delete_schedule(schedule_id, user=request.user)
        return Response({'ok': True})
    s = svc.update_schedule(schedule_id, request.data, user=request.user)
    return Response({'ok': True, 'data': _serialize(s, None, timezone.now())})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def schedule_calendar(request):
    q = CalendarQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    now = timezone.now()
    employees = list(Employee.objects.only('id', 'ho_va_ten'))
    days = svc.calendar(q.validated_data['start'], q.validated_data['end'])
    return Response({'ok': True, 'data': {d: [_serialize(s, employees, now) for s in items] for d, items in days.items()}})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def schedule_attachment(request):
    files = file_list(request)
    if not files:
        raise ValueError('Chưa chọn tệp đính kèm')
    return Response({'ok': True, 'url': svc.upload_attachment(files[0], request=request)}, status=201)
