import logging

from django.db import DatabaseError, connections
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    """
    Readiness check for the cluster probe: 200 once the default database
    answers a query, 503 otherwise.
    """
    try:
        with connections['default'].cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.warning(f"Health check failed: {e}")
        return Response(
            {'status': 'unavailable', 'detail': str(e)},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    return Response({'status': 'ok'}, status=status.HTTP_200_OK)
