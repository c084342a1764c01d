"""Research topic (NCKH) endpoints."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import module_permission
from ward.serializers.research import EvidenceAppendSerializer, TopicListQuerySerializer
from ward.services import research as svc
from ward.services.common import as_dict
from ward.services.storage import file_list

MODULE = 'r-topics'


def _serialize(topic) -> dict:
    return as_dict(topic, extra={'ho_va_ten': topic.dsnv.ho_va_ten if topic.dsnv_id else None})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def topics(request):
    if request.method == 'POST':
        topic = svc.create_topic(request.data, user=request.user)
        return Response({'ok': True, 'data': _serialize(topic)}, status=201)
    q = TopicListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = q.validated_data.get('page') or 1
    page_size = q.validated_data.get('pageSize') or 10
    items, total = svc.list_topics(page, page_size, q.validated_data.get('q'))
    return Response({'ok': True, 'data': [_serialize(t) for t in items],
                     'pagination': {'page': page, 'pageSize': page_size, 'total': total}})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, module_permission(MODULE)])
def topic_detail(request, topic_id: int):
    if request.method == 'DELETE':
        svc.delete_topic(topic_id, user=request.user)
        return Response({'ok': True})
    return Response({'ok': True, 'data': _serialize(svc.update_topic(topic_id, request.data, user=request.user))})


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'add')])
def topic_clone(request, topic_id: int):
    return Response({'ok': True, 'data': _serialize(svc.clone_topic(topic_id, user=request.user))}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def evidence_upload(request):
    """Upload files only; returns their URLs for the form to keep."""
    urls = svc.upload_evidence(file_list(request), request=request)
    return Response({'ok': True, 'urls': urls}, status=201)


@api_view(['POST'])
@permission_classes([IsAuthenticated, module_permission(MODULE, 'edit')])
def topic_evidence(request, topic_id: int):
    """Attach evidence to a topic, either uploaded files or already stored URLs."""
    files = file_list(request)
    if files:
        urls = svc.upload_evidence(files, request=request)
    else:
        s = EvidenceAppendSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        urls = s.validated_data['urls']
    topic = svc.append_evidence(topic_id, urls, user=request.user)
    return Response({'ok': True, 'data': _serialize(topic), 'urls': urls})
