# apps/attendance/tests.py

from datetime import date, timedelta

from django.test import TestCase
from django.urls import reverse

from apps.hostels.models import Hostel
from apps.users.models import User
from .models import Attendance, Leave


class AttendanceViewsTestCase(TestCase):
    """Test cases for attendance views"""

    def setUp(self):
        """Set up test data"""
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')

        self.warden = User.objects.create_user(
            username='warden',
            password='testpass123',
            role=User.Role.WARDEN,
            hostel=self.hostel
        )
        self.student = User.objects.create_user(
            username='student',
            password='testpass123',
            role=User.Role.STUDENT,
            hostel=self.hostel
        )
        self.outsider = User.objects.create_user(
            username='outsider',
            password='testpass123',
            role=User.Role.STUDENT,
            hostel=self.other_hostel
        )
        self.client.force_login(self.warden)

    def test_mark_attendance_creates_record(self):
        """Test marking attendance for a student"""
        response = self.client.post(
            reverse('attendance:attendance_records'),
            {'student_id': self.student.pk, 'date': '2025-01-10', 'status': 'present', 'check_in_time': '08:00'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['success'])
        record = Attendance.objects.get(student=self.student, date=date(2025, 1, 10))
        self.assertEqual(record.marked_by, self.warden)

    def test_marking_again_updates_existing_record(self):
        """Test that a second mark for the same day overwrites the first"""
        url = reverse('attendance:attendance_records')
        payload = {'student_id': self.student.pk, 'date': '2025-01-10', 'status': 'present'}
        self.client.post(url, payload, content_type='application/json')

        payload['status'] = 'late'
        self.client.post(url, payload, content_type='application/json')

        records = Attendance.objects.filter(student=self.student, date=date(2025, 1, 10))
        self.assertEqual(records.count(), 1)
        self.assertEqual(records.get().status, Attendance.AttendanceStatus.LATE)

    def test_cannot_mark_other_hostel_student(self):
        response = self.client.post(
            reverse('attendance:attendance_records'),
            {'student_id': self.outsider.pk, 'date': '2025-01-10', 'status': 'present'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)
        self.assertFalse(Attendance.objects.exists())

    def test_invalid_status_rejected(self):
        response = self.client.post(
            reverse('attendance:attendance_records'),
            {'student_id': self.student.pk, 'date': '2025-01-10', 'status': 'asleep'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)

    def test_attendance_list_filters(self):
        """Test filtering by date range and scoping to the hostel"""
        for offset in range(3):
            Attendance.objects.create(student=self.student, date=date(2025, 1, 1) + timedelta(days=offset))
        Attendance.objects.create(student=self.outsider, date=date(2025, 1, 1))

        response = self.client.get(reverse('attendance:attendance_records'))
        self.assertEqual(len(response.json()['data']), 3)
        self.assertEqual(response.json()['data'][0]['date'], '2025-01-03')

        response = self.client.get(
            reverse('attendance:attendance_records') + '?from_date=2025-01-02&to_date=2025-01-03'
        )
        self.assertEqual(len(response.json()['data']), 2)

        response = self.client.get(reverse('attendance:attendance_records') + '?date=2025-01-01')
        self.assertEqual(len(response.json()['data']), 1)

    def test_inverted_date_range_rejected(self):
        response = self.client.get(
            reverse('attendance:attendance_records') + '?from_date=2025-01-05&to_date=2025-01-01'
        )
        self.assertEqual(response.status_code, 400)


class LeaveViewsTestCase(TestCase):
    """Test cases for leave views"""

    def setUp(self):
        """Set up test data"""
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')
        self.warden = User.objects.create_user(
            username='warden', password='testpass123', role=User.Role.WARDEN, hostel=self.hostel
        )
        self.student = User.objects.create_user(
            username='student', password='testpass123', role=User.Role.STUDENT, hostel=self.hostel
        )
        self.outsider = User.objects.create_user(
            username='outsider', password='testpass123', role=User.Role.STUDENT, hostel=self.other_hostel
        )

    def _leave(self, student, status=Leave.LeaveStatus.PENDING):
        return Leave.objects.create(
            student=student,
            from_date=date(2025, 2, 1),
            to_date=date(2025, 2, 3),
            reason='Family visit',
            status=status
        )

    def test_student_applies_for_leave(self):
        self.client.force_login(self.student)

        response = self.client.post(
            reverse('attendance:my_leaves'),
            {'from_date': '2025-02-01', 'to_date': '2025-02-03', 'reason': 'Family visit'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['total_days'], 3)
        self.assertEqual(Leave.objects.get().status, Leave.LeaveStatus.PENDING)

        response = self.client.get(reverse('attendance:my_leaves'))
        self.assertEqual(len(response.json()['data']), 1)

    def test_leave_dates_must_be_ordered(self):
        self.client.force_login(self.student)
        response = self.client.post(
            reverse('attendance:my_leaves'),
            {'from_date': '2025-02-05', 'to_date': '2025-02-03', 'reason': 'Trip'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)

    def test_warden_cannot_use_student_endpoint(self):
        self.client.force_login(self.warden)
        self.assertEqual(self.client.get(reverse('attendance:my_leaves')).status_code, 403)

    def test_review_leave(self):
        leave = self._leave(self.student)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('attendance:review_leave', args=[leave.pk]),
            {'status': 'approved', 'remarks': 'Enjoy'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Leave request approved successfully')
        leave.refresh_from_db()
        self.assertEqual(leave.status, Leave.LeaveStatus.APPROVED)
        self.assertEqual(leave.approved_by, self.warden)
        self.assertIsNotNone(leave.approved_date)

    def test_review_rejects_invalid_status(self):
        leave = self._leave(self.student)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('attendance:review_leave', args=[leave.pk]),
            {'status': 'pending'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('Invalid status', response.json()['message'])

    def test_review_processed_leave_rejected(self):
        leave = self._leave(self.student, status=Leave.LeaveStatus.REJECTED)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('attendance:review_leave', args=[leave.pk]),
            {'status': 'approved'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Leave request has already been processed')

    def test_review_other_hostel_leave_not_found(self):
        leave = self._leave(self.outsider)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('attendance:review_leave', args=[leave.pk]),
            {'status': 'approved'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)

    def test_leave_list_puts_pending_first(self):
        approved = self._leave(self.student, status=Leave.LeaveStatus.APPROVED)
        pending = self._leave(self.student)
        self._leave(self.outsider)
        # Make the approved leave the newest
        Leave.objects.filter(pk=approved.pk).update(created_at=pending.created_at + timedelta(hours=1))
        self.client.force_login(self.warden)

        response = self.client.get(reverse('attendance:leave_list'))
        ids = [leave['id'] for leave in response.json()['data']]
        self.assertEqual(ids, [pending.pk, approved.pk])

        response = self.client.get(reverse('attendance:leave_list') + '?status=approved')
        self.assertEqual([leave['id'] for leave in response.json()['data']], [approved.pk])

        response = self.client.get(reverse('attendance:pending_leaves'))
        self.assertEqual([leave['id'] for leave in response.json()['data']], [pending.pk])
