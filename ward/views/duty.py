"""
Duty roster and daily absence roster endpoints.

The absence day defaults to today; ``generate`` fills it from the nurses
on the previous day's duty roster.
"""
from __future__ import annotations

from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import module_permission
from ward.serializers.duty import AbsenceCopySerializer, AbsenceGenerateSerializer, DutyListQuerySerializer
from ward.services import absence as absence_svc
from ward.services import duty as svc
from ward.services.common import as_dict
from ward.services.storage import file_list
from ward.views.personnel import xlsx_response

MODULE = 'duty'
ABSENCE_MODULE = 'absence'


def _first_file(request):
    files = file_list(request)
    if not files:
        raise ValueError('Chưa chọn tệp Excel')
    return files[0]


def _month_filter(request):
    q = DutyListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return svc.get_duty_schedules(q.validated_data.get('month'), q.validated_data.get('year'))


# ---------------------------------------------------------------------
# Duty roster
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def duties(request):
    if request.method == 'POST':
        schedule = svc.create_duty(request.data, user=request.user)
        return Response({'ok': True, 'data': as_dict(schedule)}, status=201)
    return Response({'ok': True, 'data': [as_dict(s) for s in _month_filter(request)]})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def duty_detail(request, duty_id: int):
    if request.method == 'DELETE':
        svc.delete_duty(duty_id, user=request.user)
        return Response({'ok': True})
    return Response({'ok': True, 'data': as_dict(svc.update_duty(duty_id, request.data, user=request.user))})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def duty_import(request):
    return Response({'ok': True, **svc.import_duties(_first_file(request), user=request.user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def duty_export(request):
    return xlsx_response(svc.export_duties(_month_filter(request)), 'Lich_Truc_Export.xlsx')


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def duty_template(request):
    return xlsx_response(svc.duties_template(), 'Mau_Nhap_Lieu_Lich_Truc.xlsx')


# ---------------------------------------------------------------------
# Absence roster
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(ABSENCE_MODULE)])
def absences(request):
    if request.method == 'POST':
        record = absence_svc.create_absence(request.data, user=request.user)
        return Response({'ok': True, 'data': as_dict(record)}, status=201)
    raw = request.query_params.get('date')
    day = parse_date(raw) if raw else timezone.localdate()
    if day is None:
        raise ValueError('Ngày không hợp lệ')
    return Response({'ok': True, 'data': [as_dict(r) for r in absence_svc.absences_on_date(day)]})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(ABSENCE_MODULE)])
def absence_detail(request, absence_id: int):
    if request.method == 'DELETE':
        absence_svc.delete_absence(absence_id, user=request.user)
        return Response({'ok': True})
    record = absence_svc.update_absence(absence_id, request.data, user=request.user)
    return Response({'ok': True, 'data': as_dict(record)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(ABSENCE_MODULE, 'add')])
def absence_copy(request):
    s = AbsenceCopySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    copied = absence_svc.copy_absences(s.validated_data['ids'], s.validated_data['ngay_nghi'], user=request.user)
    return Response({'ok': True, 'copied': len(copied), 'data': [as_dict(r) for r in copied]}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(ABSENCE_MODULE, 'add')])
def absence_generate(request):
    s = AbsenceGenerateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    day = s.validated_data.get('ngay_nghi') or timezone.localdate()
    created = absence_svc.generate_from_duty(day, user=request.user)
    return Response({'ok': True, 'created': len(created), 'data': [as_dict(r) for r in created]}, status=201)
