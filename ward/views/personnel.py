"""
Personnel directory endpoints.

Create/update accept ``{"employee": {...}, "family": [...],
"work_history": [...], "training": [...], "salary": [...]}`` and save
everything in one transaction.
"""
from __future__ import annotations

from django.http import HttpResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import module_permission
from ward.serializers.personnel import (
    BulkCreateSerializer,
    BulkUpdateSerializer,
    EmployeeListQuerySerializer,
    EmployeePayloadSerializer,
)
from ward.services import personnel as svc
from ward.services.common import as_dict
from ward.services.spreadsheet import XLSX_CONTENT_TYPE
from ward.services.storage import file_list

MODULE = 'p-list'


def xlsx_response(content: bytes, filename: str) -> HttpResponse:
    resp = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
    resp['Content-Disposition'] = f'attachment; filename="{filename}"'
    return resp


def _detail(details: dict) -> dict:
    return {
        'employee': as_dict(details['employee']),
        'family': [as_dict(x) for x in details['family']],
        'work_history': [as_dict(x) for x in details['work_history']],
        'training': [as_dict(x) for x in details['training']],
        'salary': [as_dict(x) for x in details['salary']],
    }


def _payload(request):
    s = EmployeePayloadSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    return v['employee'], {k: v.get(k) for k in ('family', 'work_history', 'training', 'salary')}


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def employees(request):
    if request.method == 'POST':
        data, children = _payload(request)
        emp = svc.create_employee(data, user=request.user, **children)
        return Response({'ok': True, 'data': as_dict(emp)}, status=201)

    q = EmployeeListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    items, meta = svc.list_employees(category=v.get('category'), q=v.get('q'),
                                     page=v.get('page'), page_size=v.get('pageSize'))
    return Response({'ok': True, 'data': [as_dict(e) for e in items], 'pagination': meta})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def employee_detail(request, employee_id: int):
    if request.method == 'DELETE':
        svc.delete_employee(employee_id, user=request.user)
        return Response({'ok': True})
    if request.method == 'PUT':
        data, children = _payload(request)
        svc.update_employee(employee_id, data, user=request.user, **children)
    return Response({'ok': True, 'data': _detail(svc.get_employee_details(employee_id))})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def bulk_create(request):
    s = BulkCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    created = svc.bulk_create_employees(s.validated_data['rows'], user=request.user)
    return Response({'ok': True, 'created': len(created)}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def bulk_update(request):
    s = BulkUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    if v.get('status'):
        count = svc.update_employee_status(v['ids'], v['status'], user=request.user)
    else:
        count = svc.bulk_update_employees(v['ids'], v['updates'], user=request.user)
    return Response({'ok': True, 'updated': count})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def import_xlsx(request):
    files = file_list(request)
    if not files:
        raise ValueError('Chưa chọn tệp Excel')
    return Response(svc.import_employees(files[0], user=request.user), status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'view')])
def import_template(request):
    return xlsx_response(svc.import_template(), 'Mau_Nhap_Nhan_Su.xlsx')


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def party_card_image(request):
    files = file_list(request)
    if not files:
        raise ValueError('Chưa chọn ảnh')
    return Response({'ok': True, 'url': svc.upload_party_card_image(files[0], request=request)}, status=201)


def _with_employee(row) -> dict:
    return as_dict(row, extra={'dsnv': {'ho_va_ten': row.dsnv.ho_va_ten, 'cmqd': row.dsnv.cmqd}})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission('p-work', 'view')])
def work_history(request):
    return Response({'ok': True, 'data': [_with_employee(r) for r in svc.all_work_history()]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission('p-training', 'view')])
def training(request):
    return Response({'ok': True, 'data': [_with_employee(r) for r in svc.all_training()]})
