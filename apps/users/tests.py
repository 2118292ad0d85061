# apps/users/tests.py

from django.contrib.auth import authenticate
from django.contrib.admin.sites import site
from django.test import RequestFactory, TestCase
from django.urls import reverse

from apps.hostels.models import Hostel, RoomType, Room, RoomAllotment
from apps.hostels.services import AllotmentService
from .context import ActingContext
from .models import User


class UserModelTestCase(TestCase):
    """Test cases for the User model and manager"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')

    def test_superuser_defaults_to_admin_role(self):
        user = User.objects.create_superuser('root', 'root@example.com', 'testpass123')
        self.assertEqual(user.role, User.Role.ADMIN)
        self.assertTrue(ActingContext.from_user(user).is_admin)

    def test_students_in_hostel_excludes_inactive_and_staff(self):
        active = User.objects.create_user('s1', role=User.Role.STUDENT, hostel=self.hostel)
        User.objects.create_user('s2', role=User.Role.STUDENT, hostel=self.hostel, is_active=False)
        User.objects.create_user('w1', role=User.Role.WARDEN, hostel=self.hostel)

        self.assertEqual(list(User.objects.students_in_hostel(self.hostel.pk)), [active])

    def test_authenticate_with_username_or_email(self):
        user = User.objects.create_user('s1', email='s1@hostel.com', password='testpass123')

        self.assertEqual(authenticate(username='s1', password='testpass123'), user)
        self.assertEqual(authenticate(username='s1@hostel.com', password='testpass123'), user)
        self.assertIsNone(authenticate(username='s1', password='wrong'))


class ProfileViewTestCase(TestCase):
    """Test cases for the profile endpoint"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.warden = User.objects.create_user(
            'warden', password='testpass123', role=User.Role.WARDEN, hostel=self.hostel
        )
        self.student = User.objects.create_user(
            'student', password='testpass123', role=User.Role.STUDENT, hostel=self.hostel
        )
        room_type = RoomType.objects.create(name='Single', capacity=1)
        self.room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='101')

    def test_requires_authentication(self):
        response = self.client.get(reverse('users:profile'))
        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()['success'])

    def test_student_profile_includes_room(self):
        AllotmentService.allot_room(self.student.pk, self.room.pk, ActingContext.from_user(self.warden))
        self.client.force_login(self.student)

        response = self.client.get(reverse('users:profile'))

        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(data['username'], 'student')
        self.assertNotIn('password', data)
        self.assertEqual(data['room_allotment']['room']['room_number'], '101')

    def test_warden_profile_has_no_room(self):
        self.client.force_login(self.warden)

        data = self.client.get(reverse('users:profile')).json()['data']

        self.assertEqual(data['role'], 'warden')
        self.assertNotIn('room_allotment', data)


class UserAdminTestCase(TestCase):
    """Test cases for the user admin"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.superuser = User.objects.create_superuser('root', 'root@example.com', 'testpass123')
        self.warden = User.objects.create_user('warden', role=User.Role.WARDEN, hostel=self.hostel)
        self.student = User.objects.create_user('student', role=User.Role.STUDENT, hostel=self.hostel)
        room_type = RoomType.objects.create(name='Single', capacity=1)
        self.room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='101')
        AllotmentService.allot_room(self.student.pk, self.room.pk, ActingContext.from_user(self.warden))
        self.client.force_login(self.superuser)

    def test_deactivate_action_vacates_student_room(self):
        response = self.client.post(
            reverse('admin:users_user_changelist'),
            {'action': 'deactivate_users', '_selected_action': [self.student.pk, self.warden.pk]}
        )

        self.assertEqual(response.status_code, 302)
        self.student.refresh_from_db()
        self.warden.refresh_from_db()
        self.room.refresh_from_db()
        self.assertFalse(self.student.is_active)
        self.assertFalse(self.warden.is_active)
        self.assertFalse(self.room.is_occupied)
        self.assertFalse(RoomAllotment.objects.filter(student=self.student, is_active=True).exists())

    def test_hostel_pinned_while_student_holds_room(self):
        model_admin = site._registry[User]
        request = RequestFactory().get('/')
        request.user = self.superuser

        self.assertIn('hostel', model_admin.get_readonly_fields(request, self.student))
        self.assertNotIn('hostel', model_admin.get_readonly_fields(request, self.warden))
