# apps/hostels/tests.py

from datetime import date
from io import StringIO
from unittest.mock import patch

from django.contrib.admin.sites import site
from django.core.management import call_command
from django.db import DatabaseError
from django.test import RequestFactory, TestCase
from django.urls import reverse

from apps.core.exceptions import ConflictError, NotFoundError, StorageError
from apps.users.context import ActingContext
from apps.users.models import User
from .models import Hostel, RoomType, Room, RoomAllotment, Holiday
from .services import AllotmentService, RoomService


class HostelTestMixin:
    """Shared fixtures: two hostels, a warden, students and rooms."""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')
        self.single = RoomType.objects.create(name='Single', capacity=1)

        self.admin = User.objects.create_user(
            username='admin', password='testpass123', role=User.Role.ADMIN
        )
        self.warden = User.objects.create_user(
            username='warden', password='testpass123',
            role=User.Role.WARDEN, hostel=self.hostel
        )
        self.student = User.objects.create_user(
            username='student1', password='testpass123',
            role=User.Role.STUDENT, hostel=self.hostel
        )
        self.student2 = User.objects.create_user(
            username='student2', password='testpass123',
            role=User.Role.STUDENT, hostel=self.hostel
        )
        self.outsider = User.objects.create_user(
            username='outsider', password='testpass123',
            role=User.Role.STUDENT, hostel=self.other_hostel
        )

        self.room1 = Room.objects.create(hostel=self.hostel, room_type=self.single, room_number='101')
        self.room2 = Room.objects.create(hostel=self.hostel, room_type=self.single, room_number='102')
        self.foreign_room = Room.objects.create(
            hostel=self.other_hostel, room_type=self.single, room_number='101'
        )

        self.ctx = ActingContext.from_user(self.warden)

    def assertOccupancyConsistent(self):
        for room in Room.objects.all():
            has_active = RoomAllotment.objects.filter(room=room, is_active=True).exists()
            self.assertEqual(room.is_occupied, has_active, f'Room {room.pk} is inconsistent')


class AllotmentServiceTestCase(HostelTestMixin, TestCase):
    """Test cases for AllotmentService"""

    def test_allot_room_marks_room_occupied(self):
        """Allotting creates an active allotment and occupies the room"""
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx, remarks='First year')

        self.assertTrue(allotment.is_active)
        self.assertEqual(allotment.allotted_by, self.warden)
        self.assertEqual(allotment.remarks, 'First year')
        self.room1.refresh_from_db()
        self.assertTrue(self.room1.is_occupied)
        self.assertOccupancyConsistent()

    def test_allot_occupied_room_conflicts(self):
        AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        with self.assertRaises(ConflictError) as cm:
            AllotmentService.allot_room(self.student2.pk, self.room1.pk, self.ctx)

        self.assertEqual(cm.exception.message, 'Room is not available')
        self.assertFalse(RoomAllotment.objects.filter(student=self.student2).exists())
        self.assertOccupancyConsistent()

    def test_allot_already_assigned_student_conflicts(self):
        AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        with self.assertRaises(ConflictError) as cm:
            AllotmentService.allot_room(self.student.pk, self.room2.pk, self.ctx)

        self.assertEqual(cm.exception.message, 'Student already has a room assigned')
        self.room2.refresh_from_db()
        self.assertFalse(self.room2.is_occupied)
        self.assertEqual(RoomAllotment.objects.filter(student=self.student, is_active=True).count(), 1)

    def test_student_checked_before_room(self):
        """An assigned student is reported even when the room is also taken"""
        AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        with self.assertRaises(ConflictError) as cm:
            AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        self.assertEqual(cm.exception.message, 'Student already has a room assigned')

    def test_room_of_other_hostel_not_found(self):
        """Foreign rooms are not found whether or not they are occupied"""
        with self.assertRaises(NotFoundError) as cm:
            AllotmentService.allot_room(self.student.pk, self.foreign_room.pk, self.ctx)
        self.assertEqual(cm.exception.message, 'Room not found in this hostel')

        self.foreign_room.is_occupied = True
        self.foreign_room.save()
        with self.assertRaises(NotFoundError):
            AllotmentService.allot_room(self.student.pk, self.foreign_room.pk, self.ctx)

    def test_inactive_room_not_found(self):
        self.room1.is_active = False
        self.room1.save()

        with self.assertRaises(NotFoundError):
            AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

    def test_student_of_other_hostel_not_found(self):
        with self.assertRaises(NotFoundError) as cm:
            AllotmentService.allot_room(self.outsider.pk, self.room1.pk, self.ctx)
        self.assertEqual(cm.exception.message, 'Student not found in this hostel')

    def test_non_student_and_inactive_student_not_found(self):
        with self.assertRaises(NotFoundError):
            AllotmentService.allot_room(self.warden.pk, self.room1.pk, self.ctx)

        self.student.is_active = False
        self.student.save()
        with self.assertRaises(NotFoundError):
            AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        self.room1.refresh_from_db()
        self.assertFalse(self.room1.is_occupied)

    def test_constraint_violation_is_rolled_back_as_conflict(self):
        """A writer losing to a concurrent allotment gets a conflict and changes nothing"""
        # Simulate a concurrent writer that inserted its allotment after our checks
        RoomAllotment.objects.create(student=self.student2, room=self.room1, is_active=True)

        with self.assertRaises(ConflictError) as cm:
            AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        self.assertEqual(cm.exception.message, 'Room is not available')
        self.assertEqual(RoomAllotment.objects.filter(room=self.room1, is_active=True).count(), 1)
        self.assertFalse(RoomAllotment.objects.filter(student=self.student).exists())
        self.room1.refresh_from_db()
        self.assertFalse(self.room1.is_occupied)

    def test_vacate_room_frees_room(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        vacated = AllotmentService.vacate_room(allotment.pk, self.ctx)

        self.assertFalse(vacated.is_active)
        self.assertIsNotNone(vacated.vacated_date)
        self.room1.refresh_from_db()
        self.assertFalse(self.room1.is_occupied)
        self.assertOccupancyConsistent()

        # The room can be allotted again
        AllotmentService.allot_room(self.student2.pk, self.room1.pk, self.ctx)
        self.assertOccupancyConsistent()

    def test_vacate_twice_conflicts(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        AllotmentService.vacate_room(allotment.pk, self.ctx)

        with self.assertRaises(ConflictError) as cm:
            AllotmentService.vacate_room(allotment.pk, self.ctx)
        self.assertEqual(cm.exception.message, 'Allotment is already vacated')

    def test_vacate_other_hostel_allotment_not_found(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        other_warden = User.objects.create_user(
            username='warden2', password='testpass123',
            role=User.Role.WARDEN, hostel=self.other_hostel
        )

        with self.assertRaises(NotFoundError):
            AllotmentService.vacate_room(allotment.pk, ActingContext.from_user(other_warden))

        self.room1.refresh_from_db()
        self.assertTrue(self.room1.is_occupied)

    def test_transfer_room_moves_student(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        new_allotment = AllotmentService.transfer_room(allotment.pk, self.room2.pk, self.ctx)

        self.assertEqual(new_allotment.room, self.room2)
        self.assertTrue(new_allotment.is_active)
        self.room1.refresh_from_db()
        self.room2.refresh_from_db()
        self.assertFalse(self.room1.is_occupied)
        self.assertTrue(self.room2.is_occupied)
        self.assertEqual(RoomAllotment.objects.filter(student=self.student, is_active=True).count(), 1)
        self.assertOccupancyConsistent()

    def test_failed_transfer_keeps_original_allotment(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        AllotmentService.allot_room(self.student2.pk, self.room2.pk, self.ctx)

        with self.assertRaises(ConflictError):
            AllotmentService.transfer_room(allotment.pk, self.room2.pk, self.ctx)

        allotment.refresh_from_db()
        self.assertTrue(allotment.is_active)
        self.room1.refresh_from_db()
        self.assertTrue(self.room1.is_occupied)
        self.assertOccupancyConsistent()

    def test_transfer_to_same_room_conflicts(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        with self.assertRaises(ConflictError):
            AllotmentService.transfer_room(allotment.pk, self.room1.pk, self.ctx)

        allotment.refresh_from_db()
        self.assertTrue(allotment.is_active)
        self.assertOccupancyConsistent()

    def test_list_available_rooms_scoped_and_ordered(self):
        Room.objects.create(hostel=self.hostel, room_type=self.single, room_number='100')
        AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        numbers = [room.room_number for room in AllotmentService.list_available_rooms(self.ctx)]

        self.assertEqual(numbers, ['100', '102'])

    def test_storage_failure_rolls_back_allotment(self):
        with patch.object(Room, 'save', side_effect=DatabaseError('disk full')):
            with self.assertLogs('apps.hostels.services', level='ERROR'):
                with self.assertRaises(StorageError):
                    AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        self.assertFalse(RoomAllotment.objects.exists())
        self.room1.refresh_from_db()
        self.assertFalse(self.room1.is_occupied)

    def test_storage_failure_rolls_back_vacate(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        with patch.object(Room, 'save', side_effect=DatabaseError('disk full')):
            with self.assertLogs('apps.hostels.services', level='ERROR'):
                with self.assertRaises(StorageError):
                    AllotmentService.vacate_room(allotment.pk, self.ctx)

        allotment.refresh_from_db()
        self.assertTrue(allotment.is_active)
        self.assertIsNone(allotment.vacated_date)
        self.assertOccupancyConsistent()

    def test_storage_failure_midway_through_transfer_rolls_back(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        original_save = Room.save

        def fail_when_occupying(room, *args, **kwargs):
            if room.is_occupied:
                raise DatabaseError('disk full')
            return original_save(room, *args, **kwargs)

        # The vacate of room 101 is written before the new room fails
        with patch.object(Room, 'save', autospec=True, side_effect=fail_when_occupying):
            with self.assertLogs('apps.hostels.services', level='ERROR'):
                with self.assertRaises(StorageError):
                    AllotmentService.transfer_room(allotment.pk, self.room2.pk, self.ctx)

        allotment.refresh_from_db()
        self.assertTrue(allotment.is_active)
        self.assertEqual(RoomAllotment.objects.count(), 1)
        self.room1.refresh_from_db()
        self.room2.refresh_from_db()
        self.assertTrue(self.room1.is_occupied)
        self.assertFalse(self.room2.is_occupied)

    def test_transfer_losing_constraint_race_conflicts(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        # Simulate a concurrent writer that took room 102 after our checks
        RoomAllotment.objects.create(student=self.student2, room=self.room2, is_active=True)

        with self.assertRaises(ConflictError) as cm:
            AllotmentService.transfer_room(allotment.pk, self.room2.pk, self.ctx)

        self.assertEqual(cm.exception.message, 'Room is not available')
        allotment.refresh_from_db()
        self.assertTrue(allotment.is_active)
        self.room1.refresh_from_db()
        self.assertTrue(self.room1.is_occupied)
        self.assertEqual(RoomAllotment.objects.filter(student=self.student).count(), 1)


class RoomServiceTestCase(HostelTestMixin, TestCase):
    """Test cases for RoomService"""

    def test_warden_creates_room_in_own_hostel(self):
        room = RoomService.create_room(self.ctx, room_number='201', room_type_id=self.single.pk, floor=2)

        self.assertEqual(room.hostel, self.hostel)
        self.assertFalse(room.is_occupied)

    def test_warden_cannot_target_other_hostel(self):
        with self.assertRaises(NotFoundError):
            RoomService.create_room(
                self.ctx, room_number='201', room_type_id=self.single.pk,
                hostel_id=self.other_hostel.pk
            )

    def test_admin_creates_room_in_any_hostel(self):
        ctx = ActingContext.from_user(self.admin)
        room = RoomService.create_room(
            ctx, room_number='301', room_type_id=self.single.pk, hostel_id=self.other_hostel.pk
        )
        self.assertEqual(room.hostel, self.other_hostel)

    def test_duplicate_room_number_conflicts(self):
        with self.assertRaises(ConflictError):
            RoomService.create_room(self.ctx, room_number='101', room_type_id=self.single.pk)


class HostelViewsTestCase(HostelTestMixin, TestCase):
    """Test cases for hostel API views"""

    def setUp(self):
        super().setUp()
        self.client.force_login(self.warden)

    def test_allotment_scenario(self):
        """Second allotment for the same student is rejected and leaves the room free"""
        url = reverse('hostels:allotment_list')

        response = self.client.post(
            url, {'student_id': self.student.pk, 'room_id': self.room1.pk},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['data']['student']['username'], 'student1')
        self.assertEqual(data['data']['room']['room_number'], '101')
        self.assertEqual(data['data']['room']['room_type']['capacity'], 1)

        response = self.client.post(
            url, {'student_id': self.student.pk, 'room_id': self.room2.pk},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])
        self.assertEqual(response.json()['message'], 'Student already has a room assigned')

        self.room2.refresh_from_db()
        self.assertFalse(self.room2.is_occupied)

    def test_storage_failure_returns_generic_500(self):
        with patch.object(Room, 'save', side_effect=DatabaseError('relation "hostels_room" is locked')):
            with self.assertLogs('apps', level='ERROR'):
                response = self.client.post(
                    reverse('hostels:allotment_list'),
                    {'student_id': self.student.pk, 'room_id': self.room1.pk},
                    content_type='application/json'
                )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'success': False, 'message': 'Server error'})
        self.assertFalse(RoomAllotment.objects.exists())

    def test_allotment_requires_fields(self):
        response = self.client.post(
            reverse('hostels:allotment_list'), {'room_id': self.room1.pk},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('student_id', response.json()['errors'])

    def test_malformed_json_is_rejected(self):
        response = self.client.post(
            reverse('hostels:allotment_list'), '{not json',
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Malformed JSON body')

    def test_foreign_room_returns_404(self):
        response = self.client.post(
            reverse('hostels:allotment_list'),
            {'student_id': self.student.pk, 'room_id': self.foreign_room.pk},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Room not found in this hostel')

    def test_available_rooms(self):
        AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        for url in [reverse('hostels:room_list') + '?available=true', reverse('hostels:available_rooms')]:
            response = self.client.get(url)
            self.assertEqual(response.status_code, 200)
            numbers = [room['room_number'] for room in response.json()['data']]
            self.assertEqual(numbers, ['102'])

    def test_room_list_without_filter_returns_all_hostel_rooms(self):
        response = self.client.get(reverse('hostels:room_list') + '?available=all')
        numbers = [room['room_number'] for room in response.json()['data']]
        self.assertEqual(numbers, ['101', '102'])

    def test_vacate_and_transfer_endpoints(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)

        response = self.client.post(
            reverse('hostels:transfer_allotment', args=[allotment.pk]),
            {'room_id': self.room2.pk}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        new_id = response.json()['data']['id']

        response = self.client.post(reverse('hostels:vacate_allotment', args=[new_id]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()['data']['is_active'])

        response = self.client.post(reverse('hostels:vacate_allotment', args=[new_id]))
        self.assertEqual(response.status_code, 400)
        self.assertOccupancyConsistent()

    def test_allotment_list_filters(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        AllotmentService.vacate_room(allotment.pk, self.ctx)
        AllotmentService.allot_room(self.student2.pk, self.room1.pk, self.ctx)

        response = self.client.get(reverse('hostels:allotment_list') + '?active=true')
        data = response.json()['data']
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['student']['username'], 'student2')

        response = self.client.get(reverse('hostels:allotment_list') + f'?student_id={self.student.pk}')
        self.assertEqual(len(response.json()['data']), 1)

    def test_unauthenticated_returns_401(self):
        self.client.logout()
        response = self.client.get(reverse('hostels:available_rooms'))
        self.assertEqual(response.status_code, 401)

    def test_student_cannot_allot(self):
        self.client.force_login(self.student)
        response = self.client.post(
            reverse('hostels:allotment_list'),
            {'student_id': self.student.pk, 'room_id': self.room1.pk},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 403)

    def test_warden_without_hostel_is_forbidden(self):
        self.warden.hostel = None
        self.warden.save()
        response = self.client.get(reverse('hostels:available_rooms'))
        self.assertEqual(response.status_code, 403)


class AdministrationViewsTestCase(HostelTestMixin, TestCase):
    """Test cases for hostel, room type and room creation"""

    def test_admin_creates_hostel(self):
        self.client.force_login(self.admin)
        response = self.client.post(
            reverse('hostels:hostel_list'), {'name': 'East Hall', 'code': 'eh'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertTrue(Hostel.objects.filter(code='EH').exists())

    def test_warden_cannot_list_hostels(self):
        self.client.force_login(self.warden)
        response = self.client.get(reverse('hostels:hostel_list'))
        self.assertEqual(response.status_code, 403)

    def test_room_type_capacity_must_be_positive(self):
        self.client.force_login(self.admin)
        response = self.client.post(
            reverse('hostels:room_type_list'), {'name': 'Broken', 'capacity': 0},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)

    def test_warden_can_list_but_not_create_room_types(self):
        self.client.force_login(self.warden)
        self.assertEqual(self.client.get(reverse('hostels:room_type_list')).status_code, 200)
        response = self.client.post(
            reverse('hostels:room_type_list'), {'name': 'Double', 'capacity': 2},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 403)

    def test_warden_creates_room(self):
        self.client.force_login(self.warden)
        response = self.client.post(
            reverse('hostels:room_list'),
            {'room_number': '201', 'room_type_id': self.single.pk, 'floor': 2},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['hostel'], self.hostel.pk)


class HolidayViewsTestCase(HostelTestMixin, TestCase):
    """Test cases for holiday views"""

    def setUp(self):
        super().setUp()
        self.client.force_login(self.warden)

    def test_holiday_crud(self):
        response = self.client.post(
            reverse('hostels:holiday_list'),
            {'name': 'Founders Day', 'date': '2025-03-01', 'type': 'hostel'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        holiday_id = response.json()['data']['id']

        response = self.client.post(
            reverse('hostels:holiday_update', args=[holiday_id]),
            {'name': 'Founders Day', 'date': '2025-03-02', 'type': 'religious'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['type'], 'religious')

        response = self.client.post(reverse('hostels:holiday_delete', args=[holiday_id]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Holiday.objects.filter(pk=holiday_id).exists())

    def test_other_hostel_holiday_not_found(self):
        holiday = Holiday.objects.create(hostel=self.other_hostel, name='Other', date=date(2025, 1, 1))
        response = self.client.post(reverse('hostels:holiday_delete', args=[holiday.pk]))
        self.assertEqual(response.status_code, 404)

    def test_holiday_date_range_filter(self):
        Holiday.objects.create(hostel=self.hostel, name='Early', date=date(2025, 1, 1))
        Holiday.objects.create(hostel=self.hostel, name='Late', date=date(2025, 6, 1))

        response = self.client.get(reverse('hostels:holiday_list') + '?from_date=2025-03-01')
        names = [holiday['name'] for holiday in response.json()['data']]
        self.assertEqual(names, ['Late'])


class RoomAllotmentAdminTestCase(HostelTestMixin, TestCase):
    """Test cases for the allotment admin"""

    def test_vacate_action_frees_rooms(self):
        allotment = AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        superuser = User.objects.create_superuser('root', 'root@example.com', 'testpass123')
        self.client.force_login(superuser)

        response = self.client.post(
            reverse('admin:hostels_roomallotment_changelist'),
            {'action': 'vacate_selected', '_selected_action': [allotment.pk]}
        )

        self.assertEqual(response.status_code, 302)
        allotment.refresh_from_db()
        self.assertFalse(allotment.is_active)
        self.assertOccupancyConsistent()

    def test_hostel_pinned_on_occupied_room(self):
        AllotmentService.allot_room(self.student.pk, self.room1.pk, self.ctx)
        request = RequestFactory().get('/')
        request.user = User.objects.create_superuser('root2', 'root2@example.com', 'testpass123')
        model_admin = site._registry[Room]

        self.assertIn('hostel', model_admin.get_readonly_fields(request, self.room1))
        self.assertNotIn('hostel', model_admin.get_readonly_fields(request, self.room2))


class CheckRoomOccupancyCommandTestCase(HostelTestMixin, TestCase):
    """Test cases for the check_room_occupancy command"""

    def test_reports_and_fixes_mismatched_rooms(self):
        self.room1.is_occupied = True
        self.room1.save()

        out = StringIO()
        call_command('check_room_occupancy', stdout=out)
        self.assertIn('1 inconsistent rooms found', out.getvalue())
        self.room1.refresh_from_db()
        self.assertTrue(self.room1.is_occupied)

        call_command('check_room_occupancy', '--fix', stdout=StringIO())
        self.room1.refresh_from_db()
        self.assertFalse(self.room1.is_occupied)
        self.assertOccupancyConsistent()


class CreateHostelCommandTestCase(TestCase):

    def test_creates_hostel_and_warden(self):
        call_command(
            'create_hostel', 'West Hall', 'wh',
            '--warden-username', 'westwarden', '--warden-password', 'secret123',
            stdout=StringIO()
        )
        hostel = Hostel.objects.get(code='WH')
        warden = User.objects.get(username='westwarden')
        self.assertEqual(warden.hostel, hostel)
        self.assertEqual(warden.role, User.Role.WARDEN)
        self.assertTrue(warden.check_password('secret123'))
