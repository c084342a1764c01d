from rest_framework import serializers


class TopicListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False)
    q = serializers.CharField(max_length=100, required=False, allow_blank=True)


class EvidenceAppendSerializer(serializers.Serializer):
    urls = serializers.ListField(child=serializers.CharField(max_length=512), allow_empty=False)
