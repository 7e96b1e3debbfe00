"""
Home redirect rules
"""
from apps.core.models import ClientType


# Client types with a dedicated dashboard (URL names)
TYPE_DASHBOARDS = {
    ClientType.SAAS: 'crm:staffluent_dashboard',
    ClientType.BOOKING: 'crm:booking_dashboard',
    ClientType.STUDIO: 'crm:studio_dashboard',
    ClientType.VENUEBOOST: 'crm:venueboost_dashboard',
    ClientType.PIXELBREEZE: 'crm:pixelbreeze_dashboard',
    ClientType.QYTETARET: 'crm:qytetaret_dashboard',
}


def get_default_route(user):
    """
    URL name the home page redirects to

    - anonymous               -> login
    - role ADMIN / superuser  -> platform dashboard
    - SAAS client             -> staffluent dashboard
    - any other client type   -> platform dashboard (which forwards to the
                                 type's own dashboard when there is one)
    - no role, no client      -> "no client assigned" page
    """
    if user is None or not user.is_authenticated:
        return 'accounts:login'

    if user.is_admin():
        return 'core:dashboard'

    if user.client_type == ClientType.SAAS:
        return 'crm:staffluent_dashboard'

    if user.client_type:
        return 'core:dashboard'

    return 'core:no_client'


def get_client_ip(request):

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        # First one is the original client IP
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip
