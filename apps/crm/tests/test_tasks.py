"""
Sync Tasks Tests
================

Tasks are called directly (not through a broker); queueing is patched.
"""

from unittest.mock import MagicMock, patch

from django.test import TestCase
from apps.core.models import Client, ClientStatus, ClientType
from apps.crm import tasks
from apps.crm.tasks import clients_to_sync, sync_all_clients, sync_client_resource
from apps.gateway.client import GatewayError


class ClientsToSyncTest(TestCase):

    def setUp(self):
        self.booking = Client.objects.create(name='Metro Suites', type=ClientType.BOOKING,
                                             omni_gateway_api_key='k1')
        self.studio = Client.objects.create(name='Studio', type=ClientType.STUDIO, omni_gateway_api_key='k2')
        Client.objects.create(name='No Key', type=ClientType.BOOKING)
        Client.objects.create(name='Suspended', type=ClientType.BOOKING, omni_gateway_api_key='k3',
                              status=ClientStatus.SUSPENDED)

    def test_campaigns_go_to_every_active_client_with_key(self):
        self.assertEqual(set(clients_to_sync('campaigns')), {self.booking, self.studio})

    def test_bookings_only_for_booking_clients(self):
        self.assertEqual(list(clients_to_sync('bookings')), [self.booking])

    @patch('apps.crm.tasks.sync_client_resource.delay')
    def test_sync_all_queues_one_task_per_client(self, mock_delay):
        result = sync_all_clients('bookings')

        mock_delay.assert_called_once_with(self.booking.id, 'bookings')
        self.assertEqual(result, '1 bookings syncs queued.')

    def test_unknown_resource(self):
        with self.assertRaises(ValueError):
            sync_all_clients('invoices')


class SyncClientResourceTest(TestCase):

    def setUp(self):
        self.tenant = Client.objects.create(name='Metro Suites', type=ClientType.BOOKING,
                                            omni_gateway_api_key='metro-key')
        self.factory = MagicMock()
        patcher = patch.dict(tasks.SYNC_RESOURCES, {'campaigns': (self.factory, 'sync_campaigns', None)})
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_sync(self):
        result = sync_client_resource(self.tenant.id, 'campaigns')

        self.factory.assert_called_once_with('metro-key')
        self.factory.return_value.sync_campaigns.assert_called_once_with()
        self.assertEqual(result, 'campaigns synced for Metro Suites')

    def test_missing_client_is_skipped(self):
        result = sync_client_resource(99999, 'campaigns')

        self.assertEqual(result, 'Skipped campaigns sync for client 99999')
        self.factory.assert_not_called()

    def test_gateway_error_propagates(self):
        self.factory.return_value.sync_campaigns.side_effect = GatewayError('Gateway down', 503)

        with self.assertRaises(GatewayError):
            sync_client_resource(self.tenant.id, 'campaigns')
