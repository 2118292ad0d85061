# apps/analytics/tests.py

from datetime import date, timedelta

from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from apps.attendance.models import Leave
from apps.hostels.models import Hostel, RoomType, Room
from apps.hostels.services import AllotmentService
from apps.support.models import Complaint
from apps.users.context import ActingContext
from apps.users.models import User


@override_settings(HOSTEL_RECENT_ACTIVITY_DAYS=7)
class DashboardTestCase(TestCase):
    """Test cases for dashboard statistics"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')
        self.admin = User.objects.create_user('admin', password='testpass123', role=User.Role.ADMIN)
        self.warden = User.objects.create_user(
            'warden', password='testpass123', role=User.Role.WARDEN, hostel=self.hostel
        )
        self.student = User.objects.create_user('student', role=User.Role.STUDENT, hostel=self.hostel)
        User.objects.create_user('second', role=User.Role.STUDENT, hostel=self.hostel)
        self.outsider = User.objects.create_user('outsider', role=User.Role.STUDENT, hostel=self.other_hostel)

        room_type = RoomType.objects.create(name='Single', capacity=1)
        room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='101')
        Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='102')
        Room.objects.create(hostel=self.other_hostel, room_type=room_type, room_number='101')
        AllotmentService.allot_room(self.student.pk, room.pk, ActingContext.from_user(self.warden))

    def _leave(self, student, status=Leave.LeaveStatus.PENDING):
        return Leave.objects.create(
            student=student, from_date=date(2025, 3, 1), to_date=date(2025, 3, 2), reason='Visit', status=status
        )

    def _complaint(self, student, status=Complaint.Status.SUBMITTED):
        return Complaint.objects.create(
            student=student, title='Broken window', description='Glass cracked', status=status
        )

    def test_warden_dashboard_counts(self):
        self._leave(self.student)
        self._leave(self.student, status=Leave.LeaveStatus.APPROVED)
        self._leave(self.outsider)
        self._complaint(self.student)
        self._complaint(self.student, status=Complaint.Status.CLOSED)
        self._complaint(self.outsider)
        self.client.force_login(self.warden)

        response = self.client.get(reverse('analytics:warden_dashboard'))

        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(data['total_students'], 2)
        self.assertEqual(data['total_rooms'], 2)
        self.assertEqual(data['occupied_rooms'], 1)
        self.assertEqual(data['available_rooms'], 1)
        self.assertEqual(data['pending_leaves'], 1)
        self.assertEqual(data['open_complaints'], 1)
        self.assertEqual(len(data['recent_leaves']), 2)
        self.assertEqual(len(data['recent_complaints']), 2)

    def test_recent_activity_window_and_limit(self):
        stale = self._leave(self.student)
        Leave.objects.filter(pk=stale.pk).update(created_at=timezone.now() - timedelta(days=30))
        for _ in range(6):
            self._complaint(self.student)
        self.client.force_login(self.warden)

        data = self.client.get(reverse('analytics:warden_dashboard')).json()['data']

        self.assertEqual(data['pending_leaves'], 1)
        self.assertEqual(data['recent_leaves'], [])
        self.assertEqual(len(data['recent_complaints']), 5)

    def test_admin_dashboard_counts(self):
        self.client.force_login(self.admin)

        response = self.client.get(reverse('analytics:admin_dashboard'))

        data = response.json()['data']
        self.assertEqual(data['total_hostels'], 2)
        self.assertEqual(data['total_users'], 5)
        self.assertEqual(data['users_by_role'][User.Role.STUDENT], 3)
        self.assertEqual(data['total_rooms'], 3)
        self.assertEqual(data['occupied_rooms'], 1)
        self.assertEqual(data['active_allotments'], 1)

    def test_dashboards_are_role_restricted(self):
        self.client.force_login(self.warden)
        self.assertEqual(self.client.get(reverse('analytics:admin_dashboard')).status_code, 403)

        self.client.force_login(self.admin)
        self.assertEqual(self.client.get(reverse('analytics:warden_dashboard')).status_code, 403)

    def test_anonymous_rejected(self):
        self.assertEqual(self.client.get(reverse('analytics:warden_dashboard')).status_code, 401)
