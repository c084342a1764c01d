"""
Patient-card catalog and lending endpoints.

The record list is fetched once and filtered in memory by search text,
borrow-date bucket and status, mirroring what the ward screen does.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import module_permission
from ward.serializers.cards import (
    BorrowSerializer,
    CardRecordUpdateSerializer,
    CardStatusBatchSerializer,
    HandoverBatchSerializer,
    RecordListQuerySerializer,
    ReturnSerializer,
)
from ward.services import cards as svc
from ward.services.common import as_dict
from ward.services.storage import file_list
from ward.views.personnel import xlsx_response

MODULE = 'patient-card-management'


def _first_file(request):
    files = file_list(request)
    if not files:
        raise ValueError('Chưa chọn tệp Excel')
    return files[0]


# ---------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def cards(request):
    if request.method == 'POST':
        card = svc.create_card(request.data, user=request.user)
        return Response({'ok': True, 'data': as_dict(card)}, status=201)
    return Response({'ok': True, 'data': [as_dict(c) for c in svc.get_cards()]})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def card_detail(request, card_id: int):
    if request.method == 'DELETE':
        svc.delete_card(card_id, user=request.user)
        return Response({'ok': True})
    return Response({'ok': True, 'data': as_dict(svc.update_card(card_id, request.data, user=request.user))})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def card_status_batch(request):
    s = CardStatusBatchSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    result = svc.bulk_update_card_status(s.validated_data['ids'], s.validated_data['trang_thai'], user=request.user)
    return Response({'ok': not result['failed'], **result})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def card_import(request):
    return Response({'ok': True, **svc.import_cards(_first_file(request), user=request.user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def card_template(request):
    return xlsx_response(svc.cards_template(), 'Mau_Nhap_The_Cham.xlsx')


# ---------------------------------------------------------------------
# Lending records
# ---------------------------------------------------------------------
def _filtered_records(request):
    q = RecordListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    return svc.filter_records(svc.get_card_records(), q=v.get('q'), bucket=v.get('date') or 'all',
                              days=v.get('days'), start=v.get('start'), end=v.get('end'),
                              status=v.get('status') or 'all')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def records(request):
    if request.method == 'POST':
        s = BorrowSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        rec, warning = svc.borrow_card(s.validated_data, user=request.user)
        return Response({'ok': True, 'data': as_dict(rec), 'warning': warning}, status=201)
    return Response({'ok': True, 'data': [as_dict(r) for r in _filtered_records(request)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def active_records(request):
    return Response({'ok': True, 'data': [as_dict(r) for r in svc.get_active_card_records()]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def check_borrowing(request):
    name = request.query_params.get('name', '')
    matches = svc.check_patient_borrowing(name)
    return Response({'ok': True, 'data': [as_dict(r) for r in matches], 'warning': svc.borrowing_warning(name)})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def record_detail(request, record_id: int):
    if request.method == 'DELETE':
        svc.delete_card_record(record_id, user=request.user)
        return Response({'ok': True})
    if request.method == 'PUT':
        s = CardRecordUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        rec = svc.update_card_record(record_id, s.validated_data, user=request.user)
    else:
        rec = svc.get_card_record(record_id)
    return Response({'ok': True, 'data': as_dict(rec)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def return_record(request, record_id: int):
    s = ReturnSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    rec = svc.return_card(record_id, s.validated_data, user=request.user)
    return Response({'ok': True, 'data': as_dict(rec)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def handover_batch(request):
    s = HandoverBatchSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    result = svc.batch_update_handover(v['ids'], v['type'], v['trang_thai'], v['nguoi_ban_giao'],
                                       v.get('ngay_ban_giao'), user=request.user)
    return Response({'ok': not result['failed'], **result})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def export_records(request):
    return xlsx_response(svc.export_records(_filtered_records(request)), 'Quan_ly_the_cham.xlsx')


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def import_records(request):
    return Response({'ok': True, **svc.import_records(_first_file(request), user=request.user)})
