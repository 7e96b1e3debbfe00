import json
import logging
import math

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse

from apps.gateway.client import GatewayError

logger = logging.getLogger(__name__)

ITEM_KEYS = ('items', 'data', 'results')


def list_params(request, default_limit=None):
    """page, limit and search of a list page, read from the query string."""
    try:
        page = max(int(request.GET.get('page', 1)), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = max(int(request.GET.get('limit', default_limit or settings.PAGINATION_SIZE)), 1)
    except (TypeError, ValueError):
        limit = default_limit or settings.PAGINATION_SIZE
    search = request.GET.get('search', '').strip() or None
    return page, limit, search


def extract_items(result, *keys):
    """
    Rows of a gateway list response

    Lists come back bare or wrapped under a resource key ("tickets",
    "businesses", ...) or a generic one ("items", "data").
    """
    if result is None:
        return []
    if isinstance(result, list):
        return result
    for key in keys + ITEM_KEYS:
        value = result.get(key)
        if isinstance(value, list):
            return value
    return []


def pagination_context(result, items, page, limit):
    total = len(items)
    if isinstance(result, dict):
        reported = result.get('total') or (result.get('pagination') or {}).get('total')
        try:
            total = int(reported) if reported else total
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric total from gateway: {reported!r}")
    total_pages = max(math.ceil(total / limit), 1)
    return {
        'page': page,
        'limit': limit,
        'total': total,
        'total_pages': total_pages,
        'has_previous': page > 1,
        'has_next': page < total_pages,
        'previous_page': page - 1,
        'next_page': page + 1,
    }


def gateway_page_call(request, label, func, *args, default=None, **kwargs):
    """
    Run a wrapper call for a page

    A GatewayError becomes an error message and `default` is returned, so
    the page still renders with an empty result.
    """
    try:
        return func(*args, **kwargs)
    except GatewayError as e:
        logger.error(f"{label} failed for {request.user.email}: {e}")
        messages.error(request, f'{label} failed: {e.message}')
        return default


def gateway_action(label, func, *args, success_message=None, **kwargs):
    """JsonResponse of a wrapper call made by an action endpoint (502 on GatewayError)."""
    try:
        result = func(*args, **kwargs)
    except GatewayError as e:
        logger.error(f"{label} failed: {e}")
        return JsonResponse({'success': False, 'error': e.message}, status=502)

    logger.info(f"{label} succeeded")
    return JsonResponse({
        'success': True,
        'message': success_message or f'{label} succeeded',
        'data': result,
    })


def request_data(request):
    """POSTed values of an action, from a JSON body or a form submission."""
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
    return request.POST.dict()


def as_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).lower() in ('1', 'true', 'yes', 'on')
