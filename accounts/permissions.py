import hmac

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import BasePermission

CRON_TRIGGER = 'cron'


class PlatformAdmin(BasePermission):
    """
    Permission class for platform administrators.
    Grants access to the emissions ledgers and the audit trigger.
    """
    message = 'FORBIDDEN'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and getattr(request.user, 'is_admin', False))


class CronSecretAuthentication(BaseAuthentication):
    """
    Authenticates scheduler calls carrying `Authorization: Bearer <secret>`.

    The secret comes from settings.GREEN_ICT_AUDIT['CRON_SECRET']. A request
    without the header is left unauthenticated (401 via the permission
    check); a request with a wrong secret fails immediately.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise AuthenticationFailed('Unauthorized')

        expected = settings.GREEN_ICT_AUDIT.get('CRON_SECRET') or ''
        provided = auth[1].decode('latin-1')
        if not expected or not hmac.compare_digest(provided, expected):
            raise AuthenticationFailed('Unauthorized')
        return (AnonymousUser(), CRON_TRIGGER)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="cron"'


class IsCronTrigger(BasePermission):
    message = 'Unauthorized'

    def has_permission(self, request, view):
        return request.auth == CRON_TRIGGER
