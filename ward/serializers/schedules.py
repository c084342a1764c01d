from rest_framework import serializers


class ScheduleListQuerySerializer(serializers.Serializer):
    filter = serializers.ChoiceField(choices=['all', 'today', 'week', 'month', 'custom'], required=False)
    q = serializers.CharField(max_length=100, required=False, allow_blank=True)
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)


class CalendarQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()

    def validate(self, attrs):
        if attrs['end'] < attrs['start']:
            raise serializers.ValidationError({'end': 'Ngày kết thúc phải sau ngày bắt đầu'})
        if (attrs['end'] - attrs['start']).days > 92:
            raise serializers.ValidationError('Khoảng thời gian tối đa 92 ngày')
        return attrs
