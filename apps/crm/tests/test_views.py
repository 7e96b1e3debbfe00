"""
CRM Gateway Pages Tests
=======================

Test Coverage:
1. Businesses - list, detail, actions, features, agents, registration
2. Subscriptions - status lists, cancel
3. Loyalty, guests, reports, tickets
4. OmniStack clients page (platform admins)

Every gateway wrapper factory is patched in apps.crm.views; the mocks
return gateway-shaped dicts whose records carry `_id`.

Run tests:
    python manage.py test apps.crm.tests.test_views
"""

import json
from unittest.mock import patch

from django.test import TestCase, Client as TestClient
from django.urls import reverse
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from apps.accounts.models import Role
from apps.core.models import Client, ClientType
from apps.core.utils import SELECTED_CLIENT_SESSION_KEY
from apps.gateway.client import GatewayError

User = get_user_model()


class CrmViewTestCase(TestCase):

    def setUp(self):
        self.client = TestClient()

        self.tenant = Client.objects.create(
            name='Staffluent',
            type=ClientType.SAAS,
            omni_gateway_id='gw-client-1',
            omni_gateway_api_key='saas-key',
        )
        self.user = User.objects.create_user(email='ops@staffluent.al', password='testpass123',
                                             first_name='Ola', last_name='Kola', client=self.tenant)
        self.client.force_login(self.user)

    def post_json(self, url, data=None):
        return self.client.post(url, data=json.dumps(data or {}), content_type='application/json')


class BusinessListViewTest(CrmViewTestCase):

    @patch('apps.crm.views.create_business_api')
    def test_list_renders_gateway_items(self, mock_factory):
        mock_factory.return_value.get_businesses.return_value = {
            'items': [{'_id': 'b1', 'name': 'Hotel Arbri', 'email': 'info@arbri.al', 'isActive': True}],
            'total': 25,
        }

        response = self.client.get(reverse('crm:business_list'), {'page': 2, 'search': 'arbri'})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Hotel Arbri')
        self.assertEqual(response.context['total_pages'], 3)
        self.assertTrue(response.context['has_previous'])
        mock_factory.assert_called_once_with('saas-key')
        mock_factory.return_value.get_businesses.assert_called_once_with(
            page=2, limit=10, search='arbri', status=None, is_test_account=None,
        )

    @patch('apps.crm.views.create_business_api')
    def test_gateway_error_renders_empty_page_with_message(self, mock_factory):
        mock_factory.return_value.get_businesses.side_effect = GatewayError('Gateway down', 503)

        response = self.client.get(reverse('crm:business_list'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['items'], [])
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        self.assertIn('Loading businesses failed: Gateway down', messages)

    @patch('apps.crm.views.create_business_api')
    def test_trials_use_trial_endpoint(self, mock_factory):
        mock_factory.return_value.get_trial_businesses.return_value = {'businesses': [], 'total': 0}

        response = self.client.get(reverse('crm:business_trials'))

        self.assertTrue(response.context['trials'])
        mock_factory.return_value.get_trial_businesses.assert_called_once()

    def test_client_without_key_redirected(self):
        self.tenant.omni_gateway_api_key = ''
        self.tenant.save()

        response = self.client.get(reverse('crm:business_list'))

        self.assertEqual(response.status_code, 302)


class BusinessDetailViewTest(CrmViewTestCase):

    @patch('apps.crm.views.create_agents_api')
    @patch('apps.crm.views.create_features_api')
    @patch('apps.crm.views.create_business_api')
    def test_detail(self, mock_business, mock_features, mock_agents):
        mock_business.return_value.get_business_details.return_value = {
            'business': {'_id': 'b1', 'name': 'Hotel Arbri', 'isActive': True},
        }
        mock_features.return_value.get_business_features.return_value = {'customFeatures': ['ai_reports']}
        mock_agents.return_value.get_business_agents.return_value = [
            {'agentType': 'customer_service', 'isEnabled': True},
        ]

        response = self.client.get(reverse('crm:business_detail', args=['b1']))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['business']['name'], 'Hotel Arbri')
        self.assertEqual(len(response.context['agents']), 1)
        self.assertContains(response, 'ai_reports')

    @patch('apps.crm.views.create_business_api')
    def test_missing_business_redirects_to_list(self, mock_business):
        mock_business.return_value.get_business_details.side_effect = GatewayError('Business not found', 404)

        response = self.client.get(reverse('crm:business_detail', args=['nope']))

        self.assertRedirects(response, reverse('crm:business_list'), fetch_redirect_response=False)


class BusinessActionViewTest(CrmViewTestCase):

    @patch('apps.crm.views.create_business_api')
    def test_activate(self, mock_factory):
        mock_factory.return_value.activate_business.return_value = {'success': True}

        response = self.post_json(reverse('crm:business_action', args=['b1', 'activate']))

        self.assertEqual(response.json(), {'success': True, 'message': 'Business activated',
                                           'data': {'success': True}})
        mock_factory.return_value.activate_business.assert_called_once_with('b1')

    @patch('apps.crm.views.create_business_api')
    def test_gateway_error_is_502(self, mock_factory):
        mock_factory.return_value.soft_delete_business.side_effect = GatewayError('Cannot delete', 409)

        response = self.post_json(reverse('crm:business_action', args=['b1', 'delete']))

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {'success': False, 'error': 'Cannot delete'})

    @patch('apps.crm.views.create_business_api')
    def test_test_account_flag(self, mock_factory):
        mock_factory.return_value.update_test_account_status.return_value = {'success': True}

        self.post_json(reverse('crm:business_action', args=['b1', 'test-account']), {'is_test_account': False})

        mock_factory.return_value.update_test_account_status.assert_called_once_with('b1', False)

    def test_magic_link_requires_email(self):
        response = self.post_json(reverse('crm:business_action', args=['b1', 'magic-link']))

        self.assertEqual(response.status_code, 400)

    def test_unknown_action(self):
        response = self.post_json(reverse('crm:business_action', args=['b1', 'explode']))

        self.assertEqual(response.status_code, 400)

    def test_get_not_allowed(self):
        response = self.client.get(reverse('crm:business_action', args=['b1', 'activate']))

        self.assertEqual(response.status_code, 405)


class BusinessFeaturesAndAgentsTest(CrmViewTestCase):

    @patch('apps.crm.views.create_features_api')
    def test_add_feature(self, mock_factory):
        mock_factory.return_value.add_custom_feature.return_value = {'success': True}

        self.post_json(reverse('crm:business_features', args=['b1']), {'action': 'add', 'feature_key': 'ai'})

        mock_factory.return_value.add_custom_feature.assert_called_once_with('b1', 'ai')

    @patch('apps.crm.views.create_features_api')
    def test_set_limit_needs_number(self, mock_factory):
        mock_factory.return_value.set_custom_limit.return_value = {'success': True}
        url = reverse('crm:business_features', args=['b1'])

        bad = self.post_json(url, {'action': 'set_limit', 'limit_key': 'max_users', 'value': 'many'})
        good = self.post_json(url, {'action': 'set_limit', 'limit_key': 'max_users', 'value': '50'})

        self.assertEqual(bad.status_code, 400)
        self.assertEqual(good.status_code, 200)
        mock_factory.return_value.set_custom_limit.assert_called_once_with('b1', 'max_users', 50)

    @patch('apps.crm.views.create_agents_api')
    def test_enable_agent_uses_client_gateway_id(self, mock_factory):
        mock_factory.return_value.enable_agent.return_value = {'success': True}

        self.post_json(reverse('crm:business_agent', args=['b1', 'customer_service', 'enable']))

        mock_factory.return_value.enable_agent.assert_called_once_with('gw-client-1', 'b1', 'customer_service')

    def test_enable_agent_needs_gateway_id(self):
        self.tenant.omni_gateway_id = ''
        self.tenant.save()

        response = self.post_json(reverse('crm:business_agent', args=['b1', 'customer_service', 'enable']))

        self.assertEqual(response.status_code, 400)


class BusinessRegisterViewTest(CrmViewTestCase):

    form_data = {
        'business_name': 'Hotel Arbri',
        'business_email': 'info@arbri.al',
        'business_type': 'hotel',
        'full_name': 'Arben Kola',
        'phone': '',
        'street': 'Rruga e Kavajes 1',
        'postcode': '',
        'tax_id': '',
        'vat_number': '',
        'plan_id': 'price_basic',
        'interval': 'month',
        'auto_verify_email': 'on',
    }

    @patch('apps.crm.views.create_admin_subscription_api')
    def test_register_redirects_to_new_business(self, mock_factory):
        mock_factory.return_value.register_and_subscribe_business.return_value = {
            'success': True, 'businessId': 'b42', 'message': 'Business registered',
        }

        response = self.client.post(reverse('crm:business_register'), self.form_data)

        self.assertRedirects(response, reverse('crm:business_detail', args=['b42']),
                             fetch_redirect_response=False)
        payload = mock_factory.return_value.register_and_subscribe_business.call_args.args[0]
        self.assertEqual(payload['subscription'], {'planId': 'price_basic', 'interval': 'month'})
        self.assertEqual(payload['address'], {'street': 'Rruga e Kavajes 1'})
        self.assertTrue(payload['autoVerifyEmail'])
        self.assertFalse(payload['sendWelcomeEmail'])
        self.assertNotIn('phone', payload)

    @patch('apps.crm.views.create_admin_subscription_api')
    def test_gateway_rejection_rerenders_form(self, mock_factory):
        mock_factory.return_value.register_and_subscribe_business.side_effect = GatewayError('Plan not found', 400)

        response = self.client.post(reverse('crm:business_register'), self.form_data)

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Registration failed: Plan not found')


class SubscriptionViewsTest(CrmViewTestCase):

    @patch('apps.crm.views.create_subscriptions_api')
    def test_status_list_uses_status_method(self, mock_factory):
        mock_factory.return_value.get_past_due_subscriptions.return_value = {'items': [], 'total': 0}

        response = self.client.get(reverse('crm:subscription_past_due'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['status'], 'past_due')
        mock_factory.return_value.get_past_due_subscriptions.assert_called_once()

    @patch('apps.crm.views.create_subscriptions_api')
    def test_cancel(self, mock_factory):
        mock_factory.return_value.cancel_subscription.return_value = {'status': 'canceled'}

        response = self.post_json(reverse('crm:subscription_cancel', args=['s1']),
                                  {'cancel_at_period_end': False, 'reason': 'Closing down'})

        self.assertEqual(response.status_code, 200)
        mock_factory.return_value.cancel_subscription.assert_called_once_with(
            's1', cancel_at_period_end=False, reason='Closing down',
        )


class LoyaltyProgramViewTest(CrmViewTestCase):

    @patch('apps.crm.views.create_loyalty_api')
    def test_form_prefilled_from_gateway(self, mock_factory):
        mock_factory.return_value.get_loyalty_program.return_value = {
            'programName': 'Metro Rewards',
            'currency': 'EUR',
            'pointsSystem': {'earningPoints': {'spend': 1}, 'redeemingPoints': {'pointsPerDiscount': 100}},
        }

        response = self.client.get(reverse('crm:loyalty_program'))

        self.assertEqual(response.context['form'].initial['program_name'], 'Metro Rewards')
        self.assertEqual(response.context['form'].initial['points_per_discount'], 100)

    @patch('apps.crm.views.create_loyalty_api')
    def test_save(self, mock_factory):
        response = self.client.post(reverse('crm:loyalty_program'), {
            'program_name': 'Metro Rewards',
            'currency': 'eur',
            'spend': '1.5',
            'sign_up_bonus': '50',
            'review_points': '10',
            'social_share_points': '5',
            'points_per_discount': '100',
            'discount_value': '5',
            'discount_type': 'fixed',
        })

        self.assertRedirects(response, reverse('crm:loyalty_program'), fetch_redirect_response=False)
        payload = mock_factory.return_value.update_loyalty_program.call_args.args[0]
        self.assertEqual(payload['currency'], 'EUR')
        self.assertEqual(payload['pointsSystem']['earningPoints']['signUpBonus'], 50)


class GuestListViewTest(CrmViewTestCase):

    @patch('apps.crm.views.create_guests_api')
    def test_query_uses_search_endpoint(self, mock_factory):
        mock_factory.return_value.search_guests.return_value = [{'_id': 'g1', 'name': 'Mira Leka'}]

        response = self.client.get(reverse('crm:guest_list'), {'query': 'mira'})

        self.assertContains(response, 'Mira Leka')
        mock_factory.return_value.search_guests.assert_called_once_with('mira')
        mock_factory.return_value.get_guests.assert_not_called()


class ReportViewsTest(CrmViewTestCase):

    @patch('apps.crm.views.create_reports_api')
    def test_list(self, mock_factory):
        mock_factory.return_value.get_reports.return_value = {
            'data': [{'_id': 'r1', 'title': 'Broken streetlight', 'status': 'pending'}],
            'total': 1,
        }
        mock_factory.return_value.get_reports_summary.return_value = {'byStatus': {'pending': 1}}

        response = self.client.get(reverse('crm:report_list'))

        self.assertContains(response, 'Broken streetlight')
        self.assertContains(response, reverse('crm:report_detail', args=['r1']))

    @patch('apps.crm.views.create_reports_api')
    def test_status_update(self, mock_factory):
        mock_factory.return_value.update_report_status.return_value = {'status': 'resolved'}
        url = reverse('crm:report_status', args=['r1'])

        invalid = self.post_json(url, {'status': 'exploded'})
        valid = self.post_json(url, {'status': 'resolved'})

        self.assertEqual(invalid.status_code, 400)
        self.assertEqual(valid.status_code, 200)
        mock_factory.return_value.update_report_status.assert_called_once_with('r1', 'resolved')


class TicketViewsTest(CrmViewTestCase):

    @patch('apps.crm.views.create_tickets_api')
    def test_reply(self, mock_factory):
        response = self.client.post(reverse('crm:ticket_detail', args=['t1']), {'message': 'We are on it'})

        self.assertRedirects(response, reverse('crm:ticket_detail', args=['t1']), fetch_redirect_response=False)
        mock_factory.return_value.add_message.assert_called_once_with('t1', {
            'message': 'We are on it',
            'senderName': 'Ola Kola',
            'senderEmail': 'ops@staffluent.al',
        })

    @patch('apps.crm.views.create_tickets_api')
    def test_detail_renders_messages(self, mock_factory):
        mock_factory.return_value.get_ticket.return_value = {
            '_id': 't1',
            'title': 'Cannot log in',
            'status': 'open',
            'messages': [{'sender': 'business', 'senderName': 'Arben', 'message': 'Help please'}],
        }

        response = self.client.get(reverse('crm:ticket_detail', args=['t1']))

        self.assertContains(response, 'Cannot log in')
        self.assertContains(response, 'Help please')

    @patch('apps.crm.views.create_tickets_api')
    def test_status_update_payload(self, mock_factory):
        mock_factory.return_value.update_ticket.return_value = {'status': 'resolved'}

        self.post_json(reverse('crm:ticket_status', args=['t1']),
                       {'status': 'resolved', 'resolution_notes': 'Password reset'})

        mock_factory.return_value.update_ticket.assert_called_once_with(
            't1', {'status': 'resolved', 'resolutionNotes': 'Password reset'},
        )


class GatewayClientListViewTest(CrmViewTestCase):

    @patch('apps.crm.views.create_clients_api')
    def test_admin_sees_metrics(self, mock_factory):
        mock_factory.return_value.get_clients.return_value = {
            'data': [{'_id': 'c1', 'name': 'Metro Suites', 'code': 'METRO', 'isActive': True}],
            'total': 1,
            'metrics': {'totalClients': 1, 'activeClients': 1, 'inactiveClients': 0, 'recentClients': 0},
        }
        admin = User.objects.create_user(email='admin@test.com', password='testpass123', role=Role.ADMIN)
        self.client.force_login(admin)
        session = self.client.session
        session[SELECTED_CLIENT_SESSION_KEY] = self.tenant.id
        session.save()

        response = self.client.get(reverse('crm:gateway_client_list'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['metrics']['activeClients'], 1)
        self.assertContains(response, 'METRO')

    def test_client_user_denied(self):
        response = self.client.get(reverse('crm:gateway_client_list'))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, '/')
