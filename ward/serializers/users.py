from rest_framework import serializers

ROLES = ['user', 'manager', 'admin']


class UserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=ROLES, required=False)
    password = serializers.CharField(min_length=6)
    confirm_password = serializers.CharField()
    dsnv_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def validate(self, attrs):
        if attrs['password'] != attrs['confirm_password']:
            raise serializers.ValidationError({'confirm_password': 'Mật khẩu xác nhận không khớp'})
        return attrs


class UserUpdateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150, required=False)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=ROLES, required=False)
    # blank keeps the current password
    password = serializers.CharField(required=False, allow_blank=True)
    confirm_password = serializers.CharField(required=False, allow_blank=True)
    dsnv_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
