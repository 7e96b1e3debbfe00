import logging
from datetime import timedelta, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .client import GatewayAPI

logger = logging.getLogger(__name__)

RECENT_CLIENT_DAYS = 30


def _is_recent(created_at, since):
    if not created_at:
        return False
    created = parse_datetime(str(created_at).replace('Z', '+00:00'))
    if created is None:
        return False
    if timezone.is_naive(created):
        created = timezone.make_aware(created, dt_timezone.utc)
    return created >= since


def build_clients_response(clients):
    """
    Wrap a bare list of gateway clients into the paged shape the pages use,
    with total/active/inactive/recent metrics.
    """
    since = timezone.now() - timedelta(days=RECENT_CLIENT_DAYS)
    active = [client for client in clients if client.get('isActive')]

    return {
        'data': clients,
        'total': len(clients),
        'message': 'Success',
        'metrics': {
            'totalClients': len(clients),
            'activeClients': len(active),
            'inactiveClients': len(clients) - len(active),
            'recentClients': len([c for c in clients if _is_recent(c.get('createdAt'), since)]),
        },
    }


class ClientsAPI(GatewayAPI):

    def get_clients(self, page=None, limit=None, search=None, status=None, from_date=None, to_date=None):
        data = self.api.get('/clients', params={
            'page': page,
            'limit': limit,
            'search': search,
            'status': status,
            'fromDate': from_date,
            'toDate': to_date,
        })

        if isinstance(data, list):
            logger.debug(f"Wrapping {len(data)} gateway clients into a paged response")
            return build_clients_response(data)
        return data

    def get_client_apps(self, page=None, limit=None, search=None, type=None, status=None,
                        from_date=None, to_date=None):
        return self.api.get('/client-apps', params={
            'page': page,
            'limit': limit,
            'search': search,
            'type': type,
            'status': status,
            'fromDate': from_date,
            'toDate': to_date,
        })


def create_clients_api(api_key):
    return ClientsAPI(api_key)
