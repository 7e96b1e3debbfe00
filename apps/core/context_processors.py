from .navigation import build_navigation, resolve_client_type
from .utils import get_user_client


def navigation(request):
    """Sidebar sections and the current client for every template."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return {}

    return {
        'sidebar_sections': build_navigation(user, request.path),
        'current_client': get_user_client(request),
        'current_client_type': resolve_client_type(user, request.path),
    }
