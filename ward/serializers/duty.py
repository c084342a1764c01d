from rest_framework import serializers


class DutyListQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=1900, max_value=9999, required=False)

    def validate(self, attrs):
        if attrs.get('month') and not attrs.get('year'):
            raise serializers.ValidationError({'year': 'Cần năm khi lọc theo tháng'})
        return attrs


class AbsenceCopySerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    ngay_nghi = serializers.DateField()


class AbsenceGenerateSerializer(serializers.Serializer):
    ngay_nghi = serializers.DateField(required=False)
