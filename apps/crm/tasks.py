from celery import shared_task
import logging

from apps.core.models import Client, ClientStatus, ClientType
from apps.gateway.bookings import create_bookings_api
from apps.gateway.campaigns import create_campaigns_api
from apps.gateway.client import GatewayError

logger = logging.getLogger(__name__)

# resource -> (wrapper factory, sync method, client types it applies to; None = all)
SYNC_RESOURCES = {
    'campaigns': (create_campaigns_api, 'sync_campaigns', None),
    'bookings': (create_bookings_api, 'sync_bookings', (ClientType.BOOKING,)),
}


def clients_to_sync(resource):
    clients = Client.objects.filter(status=ClientStatus.ACTIVE).exclude(omni_gateway_api_key='')
    client_types = SYNC_RESOURCES[resource][2]
    if client_types:
        clients = clients.filter(type__in=client_types)
    return clients


@shared_task
def sync_client_resource(client_id, resource):
    """Ask the gateway to sync one resource of one client."""
    if resource not in SYNC_RESOURCES:
        raise ValueError(f"Unknown sync resource: {resource}")

    client = Client.objects.filter(pk=client_id).first()
    if client is None or not client.has_gateway_access():
        logger.warning(f"Skipping {resource} sync: client {client_id} missing or without API key")
        return f'Skipped {resource} sync for client {client_id}'

    factory, method_name, _types = SYNC_RESOURCES[resource]
    try:
        getattr(factory(client.omni_gateway_api_key), method_name)()
    except GatewayError as e:
        logger.error(f"{resource} sync failed for {client.name}: {e}")
        raise

    logger.info(f"{resource} synced for {client.name}")
    return f'{resource} synced for {client.name}'


@shared_task
def sync_all_clients(resource):
    """
    Periodic task queueing a sync of `resource` for every active client
    with a gateway key. Scheduled in config/celery.py
    """
    if resource not in SYNC_RESOURCES:
        raise ValueError(f"Unknown sync resource: {resource}")

    queued = 0
    for client_id in clients_to_sync(resource).values_list('id', flat=True):
        sync_client_resource.delay(client_id, resource)
        queued += 1

    logger.info(f"Queued {resource} sync for {queued} clients")
    return f'{queued} {resource} syncs queued.'
