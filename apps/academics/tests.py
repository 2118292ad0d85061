# apps/academics/tests.py

from datetime import date

from django.test import TestCase, override_settings
from django.urls import reverse

from apps.hostels.models import Hostel, RoomType, Room, RoomAllotment
from apps.hostels.services import AllotmentService
from apps.users.context import ActingContext
from apps.users.models import User
from .models import AcademicSession, Enrollment, Suspension


class AcademicsTestCase(TestCase):
    """Base fixtures for academics tests"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')
        self.admin = User.objects.create_user('admin', password='testpass123', role=User.Role.ADMIN)
        self.warden = User.objects.create_user(
            'warden', password='testpass123', role=User.Role.WARDEN, hostel=self.hostel
        )
        self.session = AcademicSession.objects.create(
            name='2024/2025', start_date=date(2024, 9, 1), end_date=date(2025, 6, 30)
        )
        self.client.force_login(self.warden)


class EnrollmentViewsTestCase(AcademicsTestCase):
    """Test cases for student enrollment and listing"""

    @override_settings(HOSTEL_DEFAULT_EMAIL_DOMAIN='hostel.com')
    def test_enroll_student(self):
        response = self.client.post(
            reverse('academics:student_list'),
            {'username': 'alice', 'password': 'secret123', 'session_id': self.session.pk},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertNotIn('password', data['student'])
        self.assertEqual(data['student']['email'], 'alice@hostel.com')

        student = User.objects.get(username='alice')
        self.assertEqual(student.role, User.Role.STUDENT)
        self.assertEqual(student.hostel, self.hostel)
        self.assertTrue(student.check_password('secret123'))
        self.assertNotEqual(student.password, 'secret123')
        self.assertTrue(Enrollment.objects.filter(student=student, session=self.session).exists())

    def test_duplicate_username_rejected(self):
        User.objects.create_user('alice', role=User.Role.STUDENT, hostel=self.other_hostel)

        response = self.client.post(
            reverse('academics:student_list'),
            {'username': 'alice', 'password': 'secret123'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Username already exists')
        self.assertEqual(User.objects.filter(username='alice').count(), 1)

    def test_unknown_session_not_found(self):
        response = self.client.post(
            reverse('academics:student_list'),
            {'username': 'bob', 'password': 'secret123', 'session_id': 999},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)
        self.assertFalse(User.objects.filter(username='bob').exists())

    def test_student_list_includes_room(self):
        room_type = RoomType.objects.create(name='Single', capacity=1)
        room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='101')
        bob = User.objects.create_user('bob', role=User.Role.STUDENT, hostel=self.hostel)
        User.objects.create_user('amy', role=User.Role.STUDENT, hostel=self.hostel)
        User.objects.create_user('zed', role=User.Role.STUDENT, hostel=self.other_hostel)
        AllotmentService.allot_room(bob.pk, room.pk, ActingContext.from_user(self.warden))

        response = self.client.get(reverse('academics:student_list'))

        data = response.json()['data']
        self.assertEqual([s['username'] for s in data], ['amy', 'bob'])
        self.assertIsNone(data[0]['room'])
        self.assertEqual(data[1]['room']['room_number'], '101')


class DeactivateStudentTestCase(AcademicsTestCase):
    """Test cases for student deactivation"""

    def test_deactivation_vacates_room(self):
        room_type = RoomType.objects.create(name='Single', capacity=1)
        room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='101')
        student = User.objects.create_user('bob', role=User.Role.STUDENT, hostel=self.hostel)
        allotment = AllotmentService.allot_room(student.pk, room.pk, ActingContext.from_user(self.warden))

        response = self.client.post(reverse('academics:student_deactivate', args=[student.pk]))

        self.assertEqual(response.status_code, 200)
        student.refresh_from_db()
        room.refresh_from_db()
        allotment.refresh_from_db()
        self.assertFalse(student.is_active)
        self.assertFalse(room.is_occupied)
        self.assertFalse(allotment.is_active)
        self.assertFalse(RoomAllotment.objects.filter(room=room, is_active=True).exists())

    def test_other_hostel_student_not_found(self):
        student = User.objects.create_user('zed', role=User.Role.STUDENT, hostel=self.other_hostel)

        response = self.client.post(reverse('academics:student_deactivate', args=[student.pk]))

        self.assertEqual(response.status_code, 404)
        student.refresh_from_db()
        self.assertTrue(student.is_active)


class SessionViewsTestCase(AcademicsTestCase):
    """Test cases for academic sessions"""

    def test_lists_only_active_sessions(self):
        AcademicSession.objects.create(
            name='2023/2024', start_date=date(2023, 9, 1), end_date=date(2024, 6, 30), is_active=False
        )
        response = self.client.get(reverse('academics:session_list'))
        self.assertEqual([s['name'] for s in response.json()['data']], ['2024/2025'])

    def test_only_admin_creates_sessions(self):
        payload = {'name': '2025/2026', 'start_date': '2025-09-01', 'end_date': '2026-06-30'}

        response = self.client.post(reverse('academics:session_list'), payload, content_type='application/json')
        self.assertEqual(response.status_code, 403)

        self.client.force_login(self.admin)
        response = self.client.post(reverse('academics:session_list'), payload, content_type='application/json')
        self.assertEqual(response.status_code, 201)

    def test_session_end_must_follow_start(self):
        self.client.force_login(self.admin)
        response = self.client.post(
            reverse('academics:session_list'),
            {'name': 'Broken', 'start_date': '2025-09-01', 'end_date': '2025-01-01'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)


class SuspensionViewsTestCase(AcademicsTestCase):
    """Test cases for suspensions"""

    def setUp(self):
        super().setUp()
        self.student = User.objects.create_user('bob', role=User.Role.STUDENT, hostel=self.hostel)

    def test_create_and_update_suspension(self):
        response = self.client.post(
            reverse('academics:suspension_list'),
            {'student_id': self.student.pk, 'reason': 'Curfew violation', 'start_date': '2025-02-01'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        suspension_id = response.json()['data']['id']
        self.assertEqual(response.json()['data']['issued_by']['username'], 'warden')

        response = self.client.post(
            reverse('academics:suspension_update', args=[suspension_id]),
            {'status': 'revoked', 'remarks': 'Appeal accepted'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Suspension.objects.get(pk=suspension_id).status, Suspension.Status.REVOKED)

    def test_suspension_for_other_hostel_student_not_found(self):
        outsider = User.objects.create_user('zed', role=User.Role.STUDENT, hostel=self.other_hostel)
        response = self.client.post(
            reverse('academics:suspension_list'),
            {'student_id': outsider.pk, 'reason': 'Noise', 'start_date': '2025-02-01'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)

    def test_update_out_of_scope_suspension_not_found(self):
        outsider = User.objects.create_user('zed', role=User.Role.STUDENT, hostel=self.other_hostel)
        suspension = Suspension.objects.create(student=outsider, reason='Noise', start_date=date(2025, 2, 1))

        response = self.client.post(
            reverse('academics:suspension_update', args=[suspension.pk]),
            {'status': 'completed'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)

    def test_list_filters_by_status(self):
        Suspension.objects.create(student=self.student, reason='A', start_date=date(2025, 1, 1))
        Suspension.objects.create(
            student=self.student, reason='B', start_date=date(2025, 2, 1), status=Suspension.Status.COMPLETED
        )

        response = self.client.get(reverse('academics:suspension_list') + '?status=completed')
        self.assertEqual([s['reason'] for s in response.json()['data']], ['B'])

        response = self.client.get(reverse('academics:suspension_list') + '?status=all')
        self.assertEqual(len(response.json()['data']), 2)
