"""
Authentication endpoints.

Login issues both a DRF token and a SimpleJWT pair so the front-end can
use either ``Authorization: Token <key>`` or ``Bearer <jwt>``.  The
session lives on the client; ``me`` rehydrates the user from a token.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from ward.serializers.auth import ChangePasswordSerializer, LoginSerializer
from ward.services.audit import log_action
from ward.services.users import change_password


def user_payload(user) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'full_name': user.display_name,
        'role': user.role,
        'dsnv_id': user.employee_id,
    }


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    user = authenticate(request, username=username, password=s.validated_data['password'])
    if not user:
        log_action(user=None, action='login', object_type='users',
                   detail={'result': 'fail', 'username': username, 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'ok': False, 'error': {'code': 'invalid_credentials',
                                                'message': 'Tên đăng nhập hoặc mật khẩu không đúng'}}, status=400)

    log_action(user=user, action='login', object_type='users', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return Response({
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': user_payload(user),
    })

# ScopedRateThrottle reads throttle_scope from the wrapped view class
login_view.cls.throttle_scope = 'login'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    return Response({'ok': True, 'data': user_payload(request.user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        return Response({'ok': False, 'error': {'code': 'token_not_valid', 'message': str(e)}}, status=401)
    data = dict(s.validated_data)
    data['jwt_access'] = data.pop('access')
    if 'refresh' in data:
        data['jwt_refresh'] = data.pop('refresh')
    return Response({'ok': True, **data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Blacklist one refresh token, or all of the user's when none is given."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            count = 1
        except TokenError:
            return Response({'ok': False, 'error': {'code': 'token_not_valid', 'message': 'Token không hợp lệ'}},
                            status=400)
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='users', object_id=request.user.id)
    return Response({'ok': True, 'blacklisted': count})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password_view(request):
    s = ChangePasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    change_password(request.user, v['old_password'], v['new_password'], v['confirm_password'])
    return Response({'ok': True})
