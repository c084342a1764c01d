import logging

from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = 'Có lỗi xảy ra, vui lòng thử lại.'
MISSING_TABLE_MESSAGE = (
    'Bảng dữ liệu chưa được khởi tạo. Vui lòng chạy "python manage.py migrate" để tạo cơ sở dữ liệu.'
)
MISSING_TABLE_MARKERS = ('no such table', 'does not exist', '42p01')


def is_missing_table_error(exc) -> bool:
    if not isinstance(exc, DatabaseError):
        return False
    text = str(exc).lower()
    code = str(getattr(getattr(exc, '__cause__', None), 'pgcode', '') or '').lower()
    return code == '42p01' or any(m in text for m in MISSING_TABLE_MARKERS)


def api_exception_handler(exc, context):
    if isinstance(exc, ObjectDoesNotExist):
        return Response({'ok': False, 'error': {'code': 'not_found', 'message': 'Không tìm thấy dữ liệu'}}, status=404)
    if isinstance(exc, ValueError):
        return Response({'ok': False, 'error': {'code': 'invalid', 'message': str(exc)}}, status=400)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        if is_missing_table_error(exc):
            logger.error('missing table in %s: %s', type(view).__name__, exc)
            return Response({'ok': False, 'error': {'code': 'missing_table', 'message': MISSING_TABLE_MESSAGE}}, status=503)
        logger.exception('unhandled error in %s', type(view).__name__, exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': GENERIC_MESSAGE}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(exc, 'default_code', 'api_error')
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
