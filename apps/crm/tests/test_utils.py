"""
CRM Helpers Tests
=================

Test Coverage:
1. list_params / extract_items / pagination_context
2. request_data / as_bool
3. Template filters (crm_tags)
"""

import json

from django.test import SimpleTestCase, RequestFactory, override_settings
from apps.crm.templatetags.crm_tags import gateway_date, gateway_id, get_item, page_url
from apps.crm.utils import as_bool, extract_items, list_params, pagination_context, request_data


class ListParamsTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    @override_settings(PAGINATION_SIZE=10)
    def test_defaults(self):
        self.assertEqual(list_params(self.factory.get('/')), (1, 10, None))

    def test_values_and_bad_input(self):
        self.assertEqual(list_params(self.factory.get('/', {'page': 3, 'limit': 50, 'search': ' spa '})),
                         (3, 50, 'spa'))
        self.assertEqual(list_params(self.factory.get('/', {'page': 'x', 'limit': '0'}), default_limit=20),
                         (1, 1, None))
        self.assertEqual(list_params(self.factory.get('/', {'page': '-4', 'limit': 'all'}), default_limit=20),
                         (1, 20, None))


class ExtractItemsTest(SimpleTestCase):

    def test_shapes(self):
        rows = [{'_id': 'a'}]

        self.assertEqual(extract_items(None), [])
        self.assertEqual(extract_items(rows), rows)
        self.assertEqual(extract_items({'tickets': rows}, 'tickets'), rows)
        self.assertEqual(extract_items({'data': rows}), rows)
        self.assertEqual(extract_items({'items': rows, 'data': {'nested': True}}), rows)
        self.assertEqual(extract_items({'message': 'ok'}), [])


class PaginationContextTest(SimpleTestCase):

    def test_total_from_response(self):
        context = pagination_context({'total': 31}, [], page=2, limit=10)

        self.assertEqual(context['total_pages'], 4)
        self.assertTrue(context['has_previous'])
        self.assertTrue(context['has_next'])
        self.assertEqual(context['next_page'], 3)

    def test_total_from_nested_pagination(self):
        context = pagination_context({'pagination': {'total': 5}}, [], page=1, limit=10)

        self.assertEqual(context['total'], 5)
        self.assertEqual(context['total_pages'], 1)
        self.assertFalse(context['has_next'])

    def test_string_total_from_gateway(self):
        self.assertEqual(pagination_context({'total': '25'}, [], page=1, limit=10)['total_pages'], 3)

    def test_non_numeric_total_falls_back_to_item_count(self):
        context = pagination_context({'total': 'many'}, [1, 2, 3], page=1, limit=10)

        self.assertEqual(context['total'], 3)
        self.assertEqual(context['total_pages'], 1)

    def test_bare_list(self):
        context = pagination_context([1, 2], [1, 2], page=1, limit=10)

        self.assertEqual(context['total'], 2)
        self.assertEqual(context['total_pages'], 1)


class RequestDataTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_json_body(self):
        request = self.factory.post('/', data=json.dumps({'reason': 'late'}), content_type='application/json')

        self.assertEqual(request_data(request), {'reason': 'late'})

    def test_invalid_or_non_object_json(self):
        broken = self.factory.post('/', data='{oops', content_type='application/json')
        listed = self.factory.post('/', data='[1, 2]', content_type='application/json')

        self.assertEqual(request_data(broken), {})
        self.assertEqual(request_data(listed), {})

    def test_form_body(self):
        request = self.factory.post('/', {'email': 'a@b.com'})

        self.assertEqual(request_data(request), {'email': 'a@b.com'})

    def test_as_bool(self):
        self.assertTrue(as_bool('true'))
        self.assertTrue(as_bool('on'))
        self.assertFalse(as_bool('0'))
        self.assertFalse(as_bool(False, default=True))
        self.assertTrue(as_bool(None, default=True))


class CrmTagsTest(SimpleTestCase):

    def test_filters(self):
        self.assertEqual(gateway_id({'_id': 'abc'}), 'abc')
        self.assertEqual(gateway_id({'id': 7}), 7)
        self.assertEqual(gateway_id(None), '')
        self.assertEqual(get_item({'open': 3}, 'open'), 3)
        self.assertIsNone(get_item(None, 'open'))
        self.assertEqual(gateway_date('2024-05-01T10:30:00.000Z').year, 2024)
        self.assertIsNone(gateway_date(''))

    def test_page_url_keeps_filters(self):
        request = RequestFactory().get('/', {'status': 'open', 'page': 1})

        self.assertEqual(page_url({'request': request}, 3), '?status=open&page=3')
