"""
Helper utilities for client selection
"""
from apps.core.models import Client


SELECTED_CLIENT_SESSION_KEY = 'selected_client_id'


def get_user_client(request):
    """
    Get the client for the current user:
    - Platform admin: from session (selected client), falling back to user.client
    - Regular users: from user.client

    Returns:
        Client object or None
    """
    if not request.user.is_authenticated:
        return None

    # Platform admins can select any client
    if request.user.is_admin():
        client_id = request.session.get(SELECTED_CLIENT_SESSION_KEY)
        if client_id:
            try:
                return Client.objects.get(pk=client_id)
            except Client.DoesNotExist:
                # Client deleted - clear session
                request.session.pop(SELECTED_CLIENT_SESSION_KEY, None)
        return request.user.client

    return request.user.client


def set_selected_client(request, client_id):
    """
    Set the selected client in session (platform admins only)

    Returns:
        True if successful, False otherwise
    """
    if not request.user.is_authenticated or not request.user.is_admin():
        return False

    try:
        client = Client.objects.get(pk=client_id)
    except (Client.DoesNotExist, ValueError):
        return False

    request.session[SELECTED_CLIENT_SESSION_KEY] = client.id
    return True


def clear_selected_client(request):
    """Clear selected client from session"""
    request.session.pop(SELECTED_CLIENT_SESSION_KEY, None)


def get_gateway_api_key(request):
    """API key of the current client, or None when there is none."""
    client = get_user_client(request)
    if client and client.has_gateway_access():
        return client.omni_gateway_api_key
    return None


def user_can_access_client(user, client_id):
    """Platform admins reach every client; other users only their own."""
    if not user.is_authenticated:
        return False
    if user.is_admin():
        return True
    return user.client_id is not None and str(user.client_id) == str(client_id)
