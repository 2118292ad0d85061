# apps/core/tests.py

import json
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError
from django.test import RequestFactory, SimpleTestCase

from apps.hostels.models import Hostel, Room
from .api import api_endpoint, api_success, parse_json_body, validate_form
from .exceptions import ConflictError, NotFoundError, ValidationError
from .filters import FilterCriteria
from .forms import DateRangeFilterForm, FilterChoiceField


class StatusSearchForm(DateRangeFilterForm):
    status = FilterChoiceField(choices=[('open', 'Open'), ('closed', 'Closed')])


@dataclass
class RoomCriteria(FilterCriteria):
    floor: Optional[int] = None
    room_number: Optional[str] = None

    lookups = {'floor': 'floor', 'room_number': 'room_number'}


class ApiHelpersTestCase(SimpleTestCase):
    """Test cases for the JSON envelope helpers"""

    def setUp(self):
        self.factory = RequestFactory()

    def test_success_envelope(self):
        response = api_success({'id': 1}, message='Saved', status=201)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(json.loads(response.content), {'success': True, 'data': {'id': 1}, 'message': 'Saved'})

    def test_parse_json_body(self):
        request = self.factory.post('/', data='{"a": 1}', content_type='application/json')
        self.assertEqual(parse_json_body(request), {'a': 1})

    def test_parse_rejects_malformed_json(self):
        request = self.factory.post('/', data='{not json', content_type='application/json')
        with self.assertRaises(ValidationError):
            parse_json_body(request)

    def test_parse_rejects_non_object(self):
        request = self.factory.post('/', data='[1, 2]', content_type='application/json')
        with self.assertRaises(ValidationError):
            parse_json_body(request)

    def test_validate_form_prefixes_field_name(self):
        with self.assertRaises(ValidationError) as cm:
            validate_form(StatusSearchForm, {'status': 'bogus'})
        self.assertTrue(cm.exception.message.startswith('status: '))
        self.assertIn('status', cm.exception.errors)

    def test_endpoint_maps_service_errors(self):
        @api_endpoint
        def missing(request):
            raise NotFoundError('Room not found')

        @api_endpoint
        def conflicting(request):
            raise ConflictError('Room is not available')

        request = self.factory.get('/')
        response = missing(request)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(json.loads(response.content), {'success': False, 'message': 'Room not found'})
        self.assertEqual(conflicting(request).status_code, 400)

    def test_endpoint_hides_database_errors(self):
        @api_endpoint
        def broken(request):
            raise DatabaseError('connection reset')

        with self.assertLogs('apps.core.api', level='ERROR'):
            response = broken(self.factory.get('/'))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(json.loads(response.content)['message'], 'Server error')


class FilterTestCase(SimpleTestCase):
    """Test cases for search forms and filter criteria"""

    def test_all_means_no_filter(self):
        form = StatusSearchForm({'status': 'all'})
        self.assertTrue(form.is_valid())
        self.assertIsNone(form.cleaned_data['status'])

    def test_inverted_range_invalid(self):
        form = StatusSearchForm({'from_date': '2025-02-01', 'to_date': '2025-01-01'})
        self.assertFalse(form.is_valid())

    def test_criteria_skip_unset_fields(self):
        criteria = RoomCriteria.from_cleaned_data({'floor': 2})
        self.assertFalse(criteria.is_empty)
        self.assertTrue(RoomCriteria().is_empty)

        queryset = criteria.apply(Room.objects.all())
        self.assertEqual(len(queryset.query.where.children), 1)
        self.assertEqual(len(RoomCriteria().apply(Room.objects.all()).query.where.children), 0)


class ContactDetailsTestCase(SimpleTestCase):

    def test_full_address_skips_blank_parts(self):
        hostel = Hostel(name='North Hall', code='NH', address_line_1='12 Ring Road', city='Pune', country='India')
        self.assertEqual(hostel.full_address, '12 Ring Road, Pune, India')
