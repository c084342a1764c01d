from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ward.permissions import module_permission
from ward.services.overview import overview


@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission('dashboard', 'view')])
def overview_view(request):
    return Response({'ok': True, 'data': overview()})
