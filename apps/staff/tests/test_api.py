"""
Staff JSON Handlers Tests
=========================

Test Coverage:
1. Staff collection / detail - list, filter, create, update, deactivate
2. Staff communications - notes, email, SMS opt-in rules
3. Store connections - local record and gateway connect
4. Departments - list with staff counts, create
5. Sales team - list and stats
6. Service-to-service access check - verify_access_view

Run tests:
    python manage.py test apps.staff.tests.test_api
"""

import json
import smtplib
from unittest.mock import patch

from django.core import mail
from django.test import TestCase, Client as TestClient, override_settings
from django.urls import reverse
from django.contrib.auth import get_user_model
from apps.accounts.models import Role
from apps.core.models import Client, ClientType
from apps.gateway.client import GatewayError
from apps.staff.models import (
    CommunicationStatus,
    Department,
    Staff,
    StaffCommunication,
    StaffRole,
    StaffStatus,
)

User = get_user_model()


class StaffApiTestCase(TestCase):
    """Shared fixtures: a BOOKING client with a front office, and another client"""

    def setUp(self):
        self.client = TestClient()

        self.tenant = Client.objects.create(name='Metro Suites', type=ClientType.BOOKING,
                                            omni_gateway_api_key='tenant-key')
        self.other_tenant = Client.objects.create(name='Other Hotel', type=ClientType.BOOKING)

        self.department = Department.objects.create(client=self.tenant, name='Front Office', code='FO')

        self.user = User.objects.create_user(email='manager@metro.al', password='testpass123',
                                             client=self.tenant, role=Role.SALES)
        self.client.force_login(self.user)

        self.staff = Staff.objects.create(
            client=self.tenant,
            department=self.department,
            first_name='Ana',
            last_name='Hoxha',
            email='ana@metro.al',
            role=StaffRole.SALES,
            sub_role='Sales Associate',
            performance_score=80,
        )
        self.foreign_staff = Staff.objects.create(
            client=self.other_tenant, first_name='Ben', last_name='Lika', email='ben@other.al',
        )

    def post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')


class StaffCollectionTest(StaffApiTestCase):

    def test_anonymous_gets_401(self):
        response = TestClient().get(reverse('staff_api:staff_collection'), {'client_id': self.tenant.id})

        self.assertEqual(response.status_code, 401)

    def test_client_id_required(self):
        response = self.client.get(reverse('staff_api:staff_collection'))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Client ID required'})

    def test_other_client_forbidden(self):
        response = self.client.get(reverse('staff_api:staff_collection'), {'client_id': self.other_tenant.id})

        self.assertEqual(response.status_code, 403)

    def test_list_is_paginated(self):
        for i in range(3):
            Staff.objects.create(client=self.tenant, first_name=f'Extra{i}', last_name='X',
                                 email=f'extra{i}@metro.al')

        response = self.client.get(reverse('staff_api:staff_collection'),
                                   {'client_id': self.tenant.id, 'limit': 2, 'page': 2})

        data = response.json()
        self.assertEqual(data['total'], 4)
        self.assertEqual(data['page'], 2)
        self.assertEqual(data['limit'], 2)
        self.assertEqual(data['total_pages'], 2)
        self.assertEqual(len(data['items']), 2)

    def test_filters(self):
        Staff.objects.create(client=self.tenant, first_name='Cara', last_name='Dema', email='cara@metro.al',
                             role=StaffRole.MANAGER, status=StaffStatus.ON_LEAVE)
        url = reverse('staff_api:staff_collection')

        by_search = self.client.get(url, {'client_id': self.tenant.id, 'search': 'hoxha'}).json()
        by_role = self.client.get(url, {'client_id': self.tenant.id, 'role': 'MANAGER'}).json()
        by_status = self.client.get(url, {'client_id': self.tenant.id, 'status': 'all'}).json()
        by_department = self.client.get(url, {'client_id': self.tenant.id,
                                              'department_id': self.department.id}).json()

        self.assertEqual([s['email'] for s in by_search['items']], ['ana@metro.al'])
        self.assertEqual([s['email'] for s in by_role['items']], ['cara@metro.al'])
        self.assertEqual(by_status['total'], 2)
        self.assertEqual(by_department['items'][0]['department'], {'id': self.department.id,
                                                                    'name': 'Front Office'})

    def test_search_matches_email_and_employee_id(self):
        url = reverse('staff_api:staff_collection')

        by_email = self.client.get(url, {'client_id': self.tenant.id, 'search': 'ANA@METRO'}).json()
        by_employee_id = self.client.get(url, {'client_id': self.tenant.id,
                                               'search': self.staff.employee_id.lower()}).json()

        self.assertEqual([s['email'] for s in by_email['items']], ['ana@metro.al'])
        self.assertEqual([s['email'] for s in by_employee_id['items']], ['ana@metro.al'])

    def test_non_numeric_department_id_rejected(self):
        response = self.client.get(reverse('staff_api:staff_collection'),
                                   {'client_id': self.tenant.id, 'department_id': 'abc'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Invalid department ID'})

    def test_non_numeric_client_id_rejected_for_admin(self):
        admin = User.objects.create_user(email='admin@metro.al', password='testpass123', role=Role.ADMIN)
        self.client.force_login(admin)

        for url in (reverse('staff_api:staff_collection'), reverse('staff_api:department_collection'),
                    reverse('staff_api:sales_team'), reverse('staff_api:sales_team_stats')):
            response = self.client.get(url, {'client_id': 'abc'})
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), {'error': 'Invalid client ID'})

    def test_create_staff(self):
        response = self.post_json(reverse('staff_api:staff_collection'), {
            'client_id': self.tenant.id,
            'department_id': self.department.id,
            'first_name': 'Dea',
            'last_name': 'Krasniqi',
            'email': 'dea@metro.al',
            'role': 'STAFF',
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertTrue(data['employee_id'].startswith('EMP-'))
        self.assertEqual(data['full_name'], 'Dea Krasniqi')
        self.assertIsNone(data['user_id'])
        self.assertEqual(data['communication_preferences'], {'email': True, 'sms': False})

    def test_create_staff_with_app_access_creates_user(self):
        response = self.post_json(reverse('staff_api:staff_collection'), {
            'client_id': self.tenant.id,
            'first_name': 'Eni',
            'last_name': 'Gashi',
            'email': 'eni@metro.al',
            'role': 'SALES',
            'can_access_app': True,
            'password': 'welcome123',
        })

        self.assertEqual(response.status_code, 201)
        staff = Staff.objects.get(email='eni@metro.al')
        self.assertEqual(staff.sub_role, 'Sales Associate')
        self.assertIsNotNone(staff.user)
        self.assertEqual(staff.user.role, Role.SALES)
        self.assertEqual(staff.user.client, self.tenant)
        self.assertTrue(staff.user.check_password('welcome123'))
        self.assertIn('Sales associate app access granted', staff.notes)
        self.assertNotIn('password', response.json())

    def test_create_staff_with_existing_user_email_rejected(self):
        response = self.post_json(reverse('staff_api:staff_collection'), {
            'client_id': self.tenant.id,
            'first_name': 'Dup',
            'last_name': 'User',
            'email': 'manager@metro.al',
            'can_access_app': True,
            'password': 'welcome123',
        })

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Staff.objects.filter(email='manager@metro.al').exists())

    def test_create_staff_with_foreign_department_rejected(self):
        foreign_department = Department.objects.create(client=self.other_tenant, name='Kitchen')

        response = self.post_json(reverse('staff_api:staff_collection'), {
            'client_id': self.tenant.id,
            'department_id': foreign_department.id,
            'first_name': 'Fat',
            'last_name': 'Berisha',
            'email': 'fat@metro.al',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('department_id', response.json()['details'])

    def test_invalid_json_body(self):
        response = self.client.post(reverse('staff_api:staff_collection'), data='{not json',
                                    content_type='application/json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Invalid JSON body'})


class StaffDetailTest(StaffApiTestCase):

    def test_get(self):
        response = self.client.get(reverse('staff_api:staff_detail', args=[self.staff.id]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['email'], 'ana@metro.al')

    def test_missing_staff(self):
        response = self.client.get(reverse('staff_api:staff_detail', args=[99999]))

        self.assertEqual(response.status_code, 404)

    def test_foreign_staff_forbidden(self):
        response = self.client.get(reverse('staff_api:staff_detail', args=[self.foreign_staff.id]))

        self.assertEqual(response.status_code, 403)

    def test_partial_update_ignores_password(self):
        response = self.client.put(
            reverse('staff_api:staff_detail', args=[self.staff.id]),
            data=json.dumps({'phone': '+355691234567', 'password': 'should-be-ignored'}),
            content_type='application/json',
        )

        self.assertEqual(response.status_code, 200)
        self.staff.refresh_from_db()
        self.assertEqual(self.staff.phone, '+355691234567')
        self.assertEqual(self.staff.first_name, 'Ana')

    def test_cannot_move_to_other_client(self):
        response = self.client.put(
            reverse('staff_api:staff_detail', args=[self.staff.id]),
            data=json.dumps({'client_id': self.other_tenant.id}),
            content_type='application/json',
        )

        self.assertEqual(response.status_code, 400)

    def test_delete_deactivates(self):
        response = self.client.delete(reverse('staff_api:staff_detail', args=[self.staff.id]))

        self.assertEqual(response.json(), {'message': 'Staff member deactivated successfully'})
        self.staff.refresh_from_db()
        self.assertEqual(self.staff.status, StaffStatus.INACTIVE)


class StaffCommunicationsTest(StaffApiTestCase):

    def url(self, staff=None):
        return reverse('staff_api:staff_communications', args=[(staff or self.staff).id])

    def test_note_gets_default_subject(self):
        response = self.post_json(self.url(), {'type': 'NOTE', 'message': 'Great week at the desk'})

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['subject'], 'Staff Note')
        self.assertEqual(data['status'], CommunicationStatus.SENT)
        self.assertEqual(len(mail.outbox), 0)

    def test_email_is_sent(self):
        response = self.post_json(self.url(), {'type': 'EMAIL', 'subject': 'Shift change',
                                               'message': 'You start at 8 tomorrow'})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['ana@metro.al'])
        self.assertEqual(mail.outbox[0].subject, 'Shift change')

    @patch('apps.staff.views_api.send_mail', side_effect=smtplib.SMTPException('server down'))
    def test_email_failure_marks_communication_failed(self, mock_send):
        response = self.post_json(self.url(), {'type': 'EMAIL', 'subject': 'Hi', 'message': 'Hello'})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['status'], CommunicationStatus.FAILED)

    def test_sms_requires_opt_in(self):
        response = self.post_json(self.url(), {'type': 'SMS', 'subject': 'Hi', 'message': 'Hello'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Staff member has not opted in for SMS communications')

    def test_no_preferences(self):
        self.staff.communication_preferences = {}
        self.staff.save()

        response = self.post_json(self.url(), {'type': 'EMAIL', 'subject': 'Hi', 'message': 'Hello'})

        self.assertEqual(response.json()['error'], 'Staff member has no communication preferences set')

    def test_validation_errors(self):
        missing = self.post_json(self.url(), {'type': 'NOTE'})
        invalid = self.post_json(self.url(), {'type': 'FAX', 'message': 'Hello'})
        no_subject = self.post_json(self.url(), {'type': 'EMAIL', 'message': 'Hello'})

        self.assertEqual(missing.json(), {'error': 'Type and message are required'})
        self.assertEqual(invalid.json(), {'error': 'Invalid communication type'})
        self.assertEqual(no_subject.json(), {'error': 'Subject is required for communications'})

    def test_non_string_values_are_coerced(self):
        response = self.post_json(self.url(), {'type': 'NOTE', 'subject': 42, 'message': 1234})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['subject'], '42')
        self.assertEqual(response.json()['message'], '1234')

    def test_list_newest_first(self):
        self.post_json(self.url(), {'type': 'NOTE', 'message': 'first'})
        self.post_json(self.url(), {'type': 'NOTE', 'message': 'second'})

        response = self.client.get(self.url())

        self.assertEqual([c['message'] for c in response.json()], ['second', 'first'])

    def test_foreign_staff_forbidden(self):
        response = self.client.get(self.url(self.foreign_staff))

        self.assertEqual(response.status_code, 403)

    def test_non_booking_client_forbidden(self):
        self.tenant.type = ClientType.SAAS
        self.tenant.save()

        response = self.client.get(self.url())

        self.assertEqual(response.status_code, 403)
        self.assertFalse(StaffCommunication.objects.exists())


class StoreConnectionTest(StaffApiTestCase):

    def test_connect_then_disconnect(self):
        url = reverse('staff_api:store_connection')

        connected = self.post_json(url, {'staff_id': self.staff.id, 'store_id': 'store-1', 'action': 'connect'})
        self.assertEqual(connected.status_code, 200)
        self.assertEqual([c['store_id'] for c in connected.json()['store_connections']], ['store-1'])

        disconnected = self.post_json(url, {'staff_id': self.staff.id, 'store_id': 'store-1',
                                            'action': 'disconnect'})
        self.assertEqual(disconnected.json()['store_connections'], [])

    def test_unknown_action(self):
        response = self.post_json(reverse('staff_api:store_connection'),
                                  {'staff_id': self.staff.id, 'store_id': 'store-1', 'action': 'swap'})

        self.assertEqual(response.status_code, 400)

    def test_missing_ids(self):
        response = self.post_json(reverse('staff_api:store_connection'), {'staff_id': self.staff.id})

        self.assertEqual(response.status_code, 400)

    def test_unknown_staff(self):
        response = self.post_json(reverse('staff_api:store_connection'),
                                  {'staff_id': 99999, 'store_id': 'store-1', 'action': 'connect'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Staff not found'})

    @patch('apps.staff.views_api.create_users_api')
    def test_gateway_connect(self, mock_factory):
        response = self.post_json(reverse('staff_api:connect_store'),
                                  {'staff_id': self.staff.id, 'store_id': 'store-9'})

        self.assertEqual(response.json(), {'success': True})
        mock_factory.assert_called_once_with('tenant-key')
        mock_factory.return_value.connect_store.assert_called_once_with(self.staff.id, 'store-9')

    @patch('apps.staff.views_api.create_users_api')
    def test_gateway_connect_failure(self, mock_factory):
        mock_factory.return_value.connect_store.side_effect = GatewayError('boom', 500)

        response = self.post_json(reverse('staff_api:connect_store'),
                                  {'staff_id': self.staff.id, 'store_id': 'store-9'})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {'error': 'Failed to connect store'})

    def test_gateway_connect_without_client_key(self):
        self.tenant.omni_gateway_api_key = ''
        self.tenant.save()

        response = self.post_json(reverse('staff_api:connect_store'),
                                  {'staff_id': self.staff.id, 'store_id': 'store-9'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Client API key not found'})


class DepartmentCollectionTest(StaffApiTestCase):

    def test_list_counts_staff(self):
        Department.objects.create(client=self.tenant, name='Archive', is_active=False)

        response = self.client.get(reverse('staff_api:department_collection'), {'client_id': self.tenant.id})

        data = response.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['name'], 'Front Office')
        self.assertEqual(data[0]['staff_count'], 1)

    def test_create(self):
        response = self.post_json(reverse('staff_api:department_collection'),
                                  {'client_id': self.tenant.id, 'name': 'Housekeeping', 'code': 'HK'})

        self.assertEqual(response.status_code, 201)
        self.assertTrue(Department.objects.filter(client=self.tenant, name='Housekeeping').exists())

    def test_duplicate_name_rejected(self):
        response = self.post_json(reverse('staff_api:department_collection'),
                                  {'client_id': self.tenant.id, 'name': 'front office'})

        self.assertEqual(response.status_code, 400)


class SalesTeamTest(StaffApiTestCase):

    def setUp(self):
        super().setUp()
        Staff.objects.create(client=self.tenant, first_name='Gent', last_name='Shala', email='gent@metro.al',
                             role=StaffRole.SALES, sub_role='Team Lead', performance_score=60)
        Staff.objects.create(client=self.tenant, first_name='Hana', last_name='Rama', email='hana@metro.al',
                             role=StaffRole.SALES, status=StaffStatus.INACTIVE, performance_score=10)
        Staff.objects.create(client=self.tenant, first_name='Ilir', last_name='Meta', email='ilir@metro.al',
                             role=StaffRole.SUPPORT)

    def test_list_only_sales(self):
        response = self.client.get(reverse('staff_api:sales_team'), {'client_id': self.tenant.id})

        self.assertEqual(response.json()['total'], 3)

    def test_position_and_status_filters(self):
        url = reverse('staff_api:sales_team')

        leads = self.client.get(url, {'client_id': self.tenant.id, 'position': 'Team Lead'}).json()
        inactive = self.client.get(url, {'client_id': self.tenant.id, 'status': 'INACTIVE',
                                         'position': 'all'}).json()

        self.assertEqual([s['email'] for s in leads['items']], ['gent@metro.al'])
        self.assertEqual([s['email'] for s in inactive['items']], ['hana@metro.al'])

    def test_stats(self):
        response = self.client.get(reverse('staff_api:sales_team_stats'), {'client_id': self.tenant.id})

        data = response.json()
        self.assertEqual(data['active_associates'], 2)
        self.assertEqual(data['avg_performance'], 70)
        self.assertEqual(data['total_sales'], 0)

    def test_stats_of_other_client_forbidden(self):
        response = self.client.get(reverse('staff_api:sales_team_stats'), {'client_id': self.other_tenant.id})

        self.assertEqual(response.status_code, 403)


@override_settings(INTERNAL_API_KEY='internal-secret')
class VerifyAccessTest(StaffApiTestCase):

    def verify(self, body, api_key='internal-secret'):
        headers = {'HTTP_X_API_KEY': api_key} if api_key else {}
        return TestClient().post(reverse('staff_api:verify_access'), data=json.dumps(body),
                                 content_type='application/json', **headers)

    def test_missing_or_wrong_key(self):
        for api_key in (None, 'wrong'):
            response = self.verify({'external_ids': [self.staff.id]}, api_key=api_key)
            self.assertEqual(response.status_code, 401)
            self.assertEqual(response.json(), {'error': 'Unauthorized', 'message': 'Invalid or missing API key'})

    @override_settings(INTERNAL_API_KEY='')
    def test_unconfigured_key_rejects_everyone(self):
        response = self.verify({'external_ids': [self.staff.id]}, api_key='')

        self.assertEqual(response.status_code, 401)

    def test_staff_with_app_access(self):
        self.staff.can_access_app = True
        self.staff.save()

        response = self.verify({'external_ids': ['abc', str(self.staff.id)]})

        data = response.json()
        self.assertTrue(data['has_access'])
        self.assertEqual(data['permissions'], {'can_use_app': True})
        self.assertEqual(data['staff']['email'], 'ana@metro.al')
        self.assertEqual(data['staff']['client_id'], self.tenant.id)

    def test_staff_without_app_access(self):
        response = self.verify({'external_ids': [self.staff.id]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'has_access': False, 'message': 'Staff member not found or inactive'})

    def test_external_ids_must_be_list(self):
        response = self.verify({'external_ids': self.staff.id})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['has_access'])
