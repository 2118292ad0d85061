# apps/support/tests.py

from datetime import timedelta

from django.test import TestCase
from django.urls import reverse

from apps.hostels.models import Hostel
from apps.users.models import User
from .models import Complaint


class ComplaintViewsTestCase(TestCase):
    """Test cases for complaint views"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')
        self.warden = User.objects.create_user(
            'warden', password='testpass123', role=User.Role.WARDEN, hostel=self.hostel
        )
        self.mess_manager = User.objects.create_user(
            'mess', password='testpass123', role=User.Role.MESS_MANAGER, hostel=self.hostel
        )
        self.student = User.objects.create_user(
            'student', password='testpass123', role=User.Role.STUDENT, hostel=self.hostel
        )
        self.outsider = User.objects.create_user(
            'outsider', password='testpass123', role=User.Role.STUDENT, hostel=self.other_hostel
        )

    def _complaint(self, student, priority=Complaint.Priority.MEDIUM, status=Complaint.Status.SUBMITTED):
        return Complaint.objects.create(
            student=student,
            title='Leaking tap',
            description='The tap in the bathroom leaks.',
            category=Complaint.Category.PLUMBING,
            priority=priority,
            status=status
        )

    def test_student_submits_complaint(self):
        self.client.force_login(self.student)

        response = self.client.post(
            reverse('support:my_complaints'),
            {'title': 'Broken fan', 'description': 'Ceiling fan does not spin.', 'category': 'electrical'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 201)
        complaint = Complaint.objects.get()
        self.assertEqual(complaint.student, self.student)
        self.assertEqual(complaint.priority, Complaint.Priority.MEDIUM)
        self.assertEqual(complaint.status, Complaint.Status.SUBMITTED)

        response = self.client.get(reverse('support:my_complaints'))
        self.assertEqual(len(response.json()['data']), 1)

    def test_short_title_rejected(self):
        self.client.force_login(self.student)
        response = self.client.post(
            reverse('support:my_complaints'),
            {'title': 'Fan', 'description': 'Broken'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)

    def test_complaint_list_urgent_first(self):
        low = self._complaint(self.student, priority=Complaint.Priority.LOW)
        urgent = self._complaint(self.student, priority=Complaint.Priority.URGENT)
        self._complaint(self.outsider, priority=Complaint.Priority.URGENT)
        Complaint.objects.filter(pk=urgent.pk).update(created_at=low.created_at - timedelta(days=1))
        self.client.force_login(self.warden)

        response = self.client.get(reverse('support:complaint_list'))
        self.assertEqual([c['id'] for c in response.json()['data']], [urgent.pk, low.pk])

        response = self.client.get(reverse('support:complaint_list') + '?priority=low&status=all')
        self.assertEqual([c['id'] for c in response.json()['data']], [low.pk])

    def test_pending_complaints_exclude_resolved(self):
        older = self._complaint(self.student)
        newer = self._complaint(self.student)
        self._complaint(self.student, status=Complaint.Status.RESOLVED)
        Complaint.objects.filter(pk=older.pk).update(created_at=newer.created_at - timedelta(hours=1))
        self.client.force_login(self.warden)

        response = self.client.get(reverse('support:pending_complaints'))

        self.assertEqual([c['id'] for c in response.json()['data']], [older.pk, newer.pk])

    def test_resolve_complaint_stamps_date(self):
        complaint = self._complaint(self.student)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('support:complaint_update', args=[complaint.pk]),
            {'status': 'resolved', 'resolution': 'Tap replaced', 'assigned_to_id': self.mess_manager.pk},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 200)
        complaint.refresh_from_db()
        self.assertEqual(complaint.status, Complaint.Status.RESOLVED)
        self.assertEqual(complaint.assigned_to, self.mess_manager)
        self.assertIsNotNone(complaint.resolved_date)

    def test_status_change_without_resolution(self):
        complaint = self._complaint(self.student)
        self.client.force_login(self.warden)

        self.client.post(
            reverse('support:complaint_update', args=[complaint.pk]),
            {'status': 'in_progress'},
            content_type='application/json'
        )

        complaint.refresh_from_db()
        self.assertEqual(complaint.status, Complaint.Status.IN_PROGRESS)
        self.assertIsNone(complaint.resolved_date)

    def test_other_hostel_complaint_not_found(self):
        complaint = self._complaint(self.outsider)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('support:complaint_update', args=[complaint.pk]),
            {'status': 'closed'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)

    def test_assignee_must_be_hostel_staff(self):
        complaint = self._complaint(self.student)
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('support:complaint_update', args=[complaint.pk]),
            {'status': 'in_progress', 'assigned_to_id': self.student.pk},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)
