"""System settings endpoints."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from ward.permissions import IsAdminRole
from ward.serializers.settings import MenuOrderSerializer
from ward.services import settings as svc
from ward.services.storage import file_list


@api_view(['GET'])
@permission_classes([AllowAny])
def background(request):
    """Login screen background; readable before login."""
    return Response({'ok': True, 'url': svc.get_background()})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def background_upload(request):
    files = file_list(request)
    if not files:
        raise ValueError('Chưa chọn ảnh nền')
    return Response({'ok': True, 'url': svc.update_background(files[0], request=request, user=request.user)})


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def menu_order(request):
    """Every signed-in user reads the order; only admins change it."""
    if request.method == 'PUT':
        if not IsAdminRole().has_permission(request, None):
            return Response({'ok': False, 'error': {'code': 'permission_denied',
                                                    'message': 'Chỉ quản trị viên được thay đổi menu'}}, status=403)
        s = MenuOrderSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return Response({'ok': True, 'data': svc.update_menu_order(s.validated_data['order'], user=request.user)})
    return Response({'ok': True, 'data': svc.get_menu_order()})
