# Decorators in this file:
# 1. admin_required - Only platform admins can access
# 2. role_required - Only the listed roles can access
# 3. client_required - User must belong to a client (or be a platform admin)
# 4. client_type_required - User's client must be one of the listed types
# 5. same_client_required - Accessed object must belong to the user's client
# 6. gateway_key_required - Current client must have a gateway API key
# 7. api_login_required - JSON 401 instead of a login redirect
# 8. ajax_required / post_required - Request type checks
#
# Page requests get a message + redirect; AJAX and /api/ callers get JSON.
# ==============================================================================

from functools import wraps
from django.shortcuts import redirect
from django.contrib import messages
from django.http import Http404, HttpResponseForbidden, JsonResponse
from django.utils.translation import gettext_lazy as _

from apps.core.utils import get_user_client, get_gateway_api_key


def wants_json(request):
    return (
        request.headers.get('X-Requested-With') == 'XMLHttpRequest'
        or request.path.startswith('/api/')
        or request.content_type == 'application/json'
    )


def _login_redirect(request):
    if wants_json(request):
        return JsonResponse({'success': False, 'error': 'Authentication required'}, status=401)
    messages.error(request, _('Please login to continue.'))
    return redirect('accounts:login')


def _deny(request, message, status=403, redirect_to='home'):
    if wants_json(request):
        return JsonResponse({'success': False, 'error': str(message)}, status=status)
    messages.error(request, message)
    return redirect(redirect_to)


# ROLE-BASED DECORATORS
def admin_required(view_func):
    """
    Decorator: Only platform admins can access this view

    Checks:
    1. User is authenticated (logged in)
    2. User role is ADMIN OR is superuser
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _login_redirect(request)

        if request.user.is_admin():
            return view_func(request, *args, **kwargs)

        return _deny(request, _('You do not have permission to access this page. Admin access required.'))

    return wrapper


def role_required(*allowed_roles):
    """
    Decorator: Only specific roles can access

    Usage:
        @role_required(Role.ADMIN, Role.SALES)
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _login_redirect(request)

            if request.user.role in allowed_roles or request.user.is_superuser:
                return view_func(request, *args, **kwargs)

            return _deny(request, _('You do not have permission to access this page.'))

        return wrapper

    return decorator


# CLIENT-BASED DECORATORS
def client_required(view_func):
    """
    Checks:
    1. User is authenticated
    2. User has a client assigned (platform admins always pass)
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _login_redirect(request)

        if request.user.client_id or request.user.is_admin():
            return view_func(request, *args, **kwargs)

        return _deny(request, _('You must be assigned to a client to access this page.'),
                     redirect_to='core:no_client')

    return wrapper


def client_type_required(*client_types):
    """
    Decorator: The current client must be one of the given types

    Platform admins are checked against the client they selected.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _login_redirect(request)

            client = get_user_client(request)
            if client is not None and client.type in client_types:
                return view_func(request, *args, **kwargs)

            if request.user.is_admin() and client is None:
                return _deny(request, _('Select a client first.'), redirect_to='core:client_selector')

            return _deny(request, _('This page is not available for your client type.'))

        return wrapper

    return decorator


def same_client_required(model_class, pk_param='pk'):
    """
    Decorator: Verify accessed object belongs to user's client

    Objects of other clients answer 404 (hides their existence).
    Platform admins reach every client's objects.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _login_redirect(request)

            pk = kwargs.get(pk_param)
            if not pk or request.user.is_admin():
                return view_func(request, *args, **kwargs)

            if not model_class.objects.filter(pk=pk, client_id=request.user.client_id).exists():
                raise Http404(
                    f"{model_class.__name__} not found or you don't have access to it."
                )

            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


def gateway_key_required(view_func):
    """
    Decorator: The current client must have an OmniStack gateway API key

    Sets request.gateway_api_key for the view.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _login_redirect(request)

        api_key = get_gateway_api_key(request)
        if api_key:
            request.gateway_api_key = api_key
            return view_func(request, *args, **kwargs)

        if request.user.is_admin() and get_user_client(request) is None:
            return _deny(request, _('Select a client to manage first.'), status=404,
                         redirect_to='core:client_selector')

        return _deny(request, _('Client API key not found'), status=404)

    return wrapper


def api_login_required(view_func):

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'error': 'Unauthorized'}, status=401)
        return view_func(request, *args, **kwargs)

    return wrapper


# REQUEST TYPE DECORATORS
def ajax_required(view_func):
    """
    Decorator: Only AJAX requests allowed (X-Requested-With header)
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
            return view_func(request, *args, **kwargs)

        return HttpResponseForbidden('AJAX requests only')

    return wrapper


def post_required(view_func):
    """
    Decorator: Only POST requests allowed
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if request.method == 'POST':
            return view_func(request, *args, **kwargs)

        return JsonResponse({
            'success': False,
            'error': 'POST requests only'
        }, status=405)

    return wrapper
