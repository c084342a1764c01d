from rest_framework import serializers


class EmployeeListQuerySerializer(serializers.Serializer):
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    q = serializers.CharField(max_length=100, required=False, allow_blank=True)
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False)


class EmployeePayloadSerializer(serializers.Serializer):
    """Employee fields plus the four history lists, saved together."""
    employee = serializers.DictField()
    family = serializers.ListField(child=serializers.DictField(), required=False, allow_null=True)
    work_history = serializers.ListField(child=serializers.DictField(), required=False, allow_null=True)
    training = serializers.ListField(child=serializers.DictField(), required=False, allow_null=True)
    salary = serializers.ListField(child=serializers.DictField(), required=False, allow_null=True)


class BulkCreateSerializer(serializers.Serializer):
    rows = serializers.ListField(child=serializers.DictField(), allow_empty=False)


class BulkUpdateSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    updates = serializers.DictField(required=False)
    status = serializers.CharField(max_length=100, required=False)

    def validate(self, attrs):
        if not attrs.get('updates') and not attrs.get('status'):
            raise serializers.ValidationError('Cần có updates hoặc status')
        return attrs
