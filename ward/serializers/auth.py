from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Tên đăng nhập không được để trống')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Mật khẩu không được để trống')
        return v


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField()
    new_password = serializers.CharField(min_length=6)
    confirm_password = serializers.CharField()

    def validate(self, attrs):
        if attrs['new_password'] != attrs['confirm_password']:
            raise serializers.ValidationError({'confirm_password': 'Mật khẩu xác nhận không khớp'})
        return attrs
