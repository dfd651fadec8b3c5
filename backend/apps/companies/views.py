import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.authentication import IsImportAdmin
from .importer import get_import_stats, upsert_companies
from .registry import check_company_is_sme
from .serializers import ImportRequestSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsImportAdmin])
def import_financials(request):
    """
    Financial data import endpoint.

    POST /api/import/
    {"action": "batch-insert", "data": [...], "year": 2024}
    {"action": "get-stats"}
    {"action": "check-cui", "cui": "123456"}
    """
    serializer = ImportRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({
            "error": "Cerere invalidă",
            "errors": serializer.errors
        }, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    action = data['action']
    logger.info(f"Import action: {action}, year: {data.get('year')}")

    try:
        if action == 'batch-insert':
            count = upsert_companies(data['data'], data.get('year'))
            return Response({"success": True, "count": count})

        if action == 'get-stats':
            return Response(get_import_stats())

        return Response(check_company_is_sme(data['cui']))

    except DatabaseError as e:
        logger.error(f"Import error: {str(e)}")
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
