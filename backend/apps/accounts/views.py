import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .entitlements import get_usage_summary

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def usage(request):
    """
    Daily message usage and subscription state.

    GET /api/account/usage/
    """
    try:
        return Response(get_usage_summary(request.user))
    except DatabaseError as e:
        logger.error(f"Error fetching usage for {request.user.id}: {str(e)}")
        return Response({"error": "Nu s-a putut citi consumul de mesaje"},
                        status=status.HTTP_500_INTERNAL_SERVER_ERROR)
