import logging

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import CronSecretAuthentication, IsCronTrigger, PlatformAdmin
from ..exceptions import AuditConfigurationError, AuditStorageError
from ..models import AuditTrigger
from ..serializers import RunAuditSerializer
from ..services.audit import run_monthly_audit

logger = logging.getLogger(__name__)


def _audit_response(month, trigger):
    try:
        result = run_monthly_audit(month, trigger=trigger)
    except AuditConfigurationError as e:
        logger.error(f"[AUDIT] Audit not configured: {e}", exc_info=True)
        return Response(
            {'error': 'Green ICT audit is not configured'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    except AuditStorageError as e:
        logger.error(f"[AUDIT] Audit failed ({trigger}): {e}", exc_info=True)
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return Response(result, status=status.HTTP_200_OK)


@api_view(['GET'])
@authentication_classes([CronSecretAuthentication])
@permission_classes([IsCronTrigger])
def green_ict_audit_cron(request):
    """
    Scheduler entry point. Requires `Authorization: Bearer <cron secret>`.
    A missing or malformed ?month= runs the previous calendar month.
    """
    month = request.query_params.get('month')
    logger.info(f"[AUDIT] Cron trigger received (month={month!r})")
    return _audit_response(month, AuditTrigger.CRON)


@api_view(['POST'])
@permission_classes([IsAuthenticated, PlatformAdmin])
def run_audit_api(request):
    """
    Manual audit run by a platform admin.
    Body: {"month": "YYYY-MM"} (optional, defaults to the previous month).
    """
    serializer = RunAuditSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    month = serializer.validated_data.get('month')
    logger.info(f"[AUDIT] Manual run requested by {request.user} (month={month!r})")
    return _audit_response(month, AuditTrigger.ADMIN)
