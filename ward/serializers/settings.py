from rest_framework import serializers


class MenuOrderSerializer(serializers.Serializer):
    order = serializers.ListField(child=serializers.CharField(max_length=64))


class PermissionUpdateSerializer(serializers.Serializer):
    can_view = serializers.BooleanField(required=False)
    can_add = serializers.BooleanField(required=False)
    can_edit = serializers.BooleanField(required=False)
    can_delete = serializers.BooleanField(required=False)
