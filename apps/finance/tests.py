# apps/finance/tests.py

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.hostels.models import Hostel, RoomType, Room
from apps.hostels.services import AllotmentService
from apps.users.context import ActingContext
from apps.users.models import User
from .models import AdditionalCollectionType, AdditionalCollection, MessBill, MessMenu


class FinanceTestCase(TestCase):
    """Base fixtures for finance tests"""

    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hall', code='NH')
        self.other_hostel = Hostel.objects.create(name='South Hall', code='SH')
        self.admin = User.objects.create_user('admin', password='testpass123', role=User.Role.ADMIN)
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

    def _bill(self, student, hostel, month=1, status=MessBill.Status.PENDING, due_in=10):
        return MessBill.objects.create(
            student=student,
            hostel=hostel,
            month=month,
            year=2025,
            amount=Decimal('1500.00'),
            status=status,
            due_date=timezone.localdate() + timedelta(days=due_in)
        )


class MessBillTestCase(FinanceTestCase):
    """Test cases for mess bill generation and settlement"""

    def setUp(self):
        super().setUp()
        room_type = RoomType.objects.create(name='Double', capacity=2)
        ctx = ActingContext.from_user(self.warden)
        self.room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='101')
        self.second_room = Room.objects.create(hostel=self.hostel, room_type=room_type, room_number='102')
        self.roommate = User.objects.create_user('roommate', role=User.Role.STUDENT, hostel=self.hostel)
        AllotmentService.allot_room(self.student.pk, self.room.pk, ctx)
        AllotmentService.allot_room(self.roommate.pk, self.second_room.pk, ctx)

    def test_generate_bills_for_allotted_students(self):
        self.client.force_login(self.mess_manager)
        payload = {'month': 3, 'year': 2025, 'amount_per_student': '1200.50'}

        response = self.client.post(reverse('finance:generate_mess_bills'), payload, content_type='application/json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data'], {'created': 2, 'skipped': 0})
        bills = MessBill.objects.filter(month=3, year=2025)
        self.assertEqual(bills.count(), 2)
        self.assertTrue(all(bill.hostel_id == self.hostel.pk for bill in bills))
        self.assertTrue(all(bill.amount == Decimal('1200.50') for bill in bills))

        response = self.client.post(reverse('finance:generate_mess_bills'), payload, content_type='application/json')
        self.assertEqual(response.json()['data'], {'created': 0, 'skipped': 2})
        self.assertEqual(MessBill.objects.filter(month=3, year=2025).count(), 2)

    def test_invalid_month_rejected(self):
        self.client.force_login(self.warden)
        response = self.client.post(
            reverse('finance:generate_mess_bills'),
            {'month': 13, 'year': 2025, 'amount_per_student': '100'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(MessBill.objects.exists())

    def test_student_cannot_generate_bills(self):
        self.client.force_login(self.student)
        response = self.client.post(
            reverse('finance:generate_mess_bills'),
            {'month': 3, 'year': 2025, 'amount_per_student': '100'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 403)

    def test_listing_flags_overdue_bills(self):
        overdue = self._bill(self.student, self.hostel, month=1, due_in=-1)
        current = self._bill(self.student, self.hostel, month=2)
        self._bill(self.outsider, self.other_hostel, month=1, due_in=-1)
        self.client.force_login(self.mess_manager)

        response = self.client.get(reverse('finance:mess_bill_list'))

        self.assertEqual(len(response.json()['data']), 2)
        overdue.refresh_from_db()
        current.refresh_from_db()
        self.assertEqual(overdue.status, MessBill.Status.OVERDUE)
        self.assertEqual(current.status, MessBill.Status.PENDING)
        self.assertEqual(MessBill.objects.get(student=self.outsider).status, MessBill.Status.PENDING)

        response = self.client.get(reverse('finance:mess_bill_list') + '?status=overdue')
        self.assertEqual([b['id'] for b in response.json()['data']], [overdue.pk])

    def test_pay_bill(self):
        bill = self._bill(self.student, self.hostel)
        self.client.force_login(self.warden)

        response = self.client.post(reverse('finance:pay_mess_bill', args=[bill.pk]))

        self.assertEqual(response.status_code, 200)
        bill.refresh_from_db()
        self.assertTrue(bill.is_paid)
        self.assertIsNotNone(bill.paid_date)

        response = self.client.post(reverse('finance:pay_mess_bill', args=[bill.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Mess bill is already paid')

    def test_pay_other_hostel_bill_not_found(self):
        bill = self._bill(self.outsider, self.other_hostel)
        self.client.force_login(self.warden)

        response = self.client.post(reverse('finance:pay_mess_bill', args=[bill.pk]))

        self.assertEqual(response.status_code, 404)
        bill.refresh_from_db()
        self.assertFalse(bill.is_paid)

    def test_student_sees_own_bills(self):
        mine = self._bill(self.student, self.hostel)
        self._bill(self.roommate, self.hostel)
        self.client.force_login(self.student)

        response = self.client.get(reverse('finance:my_mess_bills'))

        self.assertEqual([b['id'] for b in response.json()['data']], [mine.pk])


class CollectionTestCase(FinanceTestCase):
    """Test cases for additional collections"""

    def setUp(self):
        super().setUp()
        self.fine = AdditionalCollectionType.objects.create(name='Late fine', default_amount=Decimal('50.00'))
        self.repair = AdditionalCollectionType.objects.create(name='Repair')

    def test_only_admin_creates_collection_types(self):
        payload = {'name': 'Laundry', 'default_amount': '30.00'}

        self.client.force_login(self.warden)
        response = self.client.post(reverse('finance:collection_type_list'), payload, content_type='application/json')
        self.assertEqual(response.status_code, 403)

        self.client.force_login(self.admin)
        response = self.client.post(reverse('finance:collection_type_list'), payload, content_type='application/json')
        self.assertEqual(response.status_code, 201)
        self.assertTrue(AdditionalCollectionType.objects.filter(name='Laundry').exists())

    def test_collection_uses_default_amount(self):
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('finance:collection_list'),
            {'student_id': self.student.pk, 'collection_type_id': self.fine.pk, 'reason': 'Back after curfew'},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 201)
        collection = AdditionalCollection.objects.get()
        self.assertEqual(collection.amount, Decimal('50.00'))
        self.assertEqual(collection.collected_by, self.warden)
        self.assertEqual(response.json()['data']['collection_type']['name'], 'Late fine')

    def test_amount_required_without_default(self):
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('finance:collection_list'),
            {'student_id': self.student.pk, 'collection_type_id': self.repair.pk},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(AdditionalCollection.objects.exists())

    def test_collection_from_other_hostel_student_not_found(self):
        self.client.force_login(self.warden)

        response = self.client.post(
            reverse('finance:collection_list'),
            {'student_id': self.outsider.pk, 'collection_type_id': self.fine.pk},
            content_type='application/json'
        )

        self.assertEqual(response.status_code, 404)

    def test_collection_list_scoped_to_hostel(self):
        AdditionalCollection.objects.create(student=self.student, collection_type=self.fine, amount=Decimal('50'))
        AdditionalCollection.objects.create(student=self.outsider, collection_type=self.fine, amount=Decimal('50'))
        self.client.force_login(self.warden)

        response = self.client.get(reverse('finance:collection_list'))

        self.assertEqual(len(response.json()['data']), 1)


class MessMenuTestCase(FinanceTestCase):
    """Test cases for the weekly mess menu"""

    def test_save_replaces_existing_entry(self):
        self.client.force_login(self.mess_manager)
        url = reverse('finance:mess_menu_list')

        response = self.client.post(
            url, {'day_of_week': 0, 'meal_type': 'breakfast', 'items': 'Idli, chutney'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['day'], 'Monday')

        response = self.client.post(
            url, {'day_of_week': 0, 'meal_type': 'breakfast', 'items': 'Poha'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(MessMenu.objects.get().items, 'Poha')

    def test_student_reads_but_cannot_edit(self):
        MessMenu.objects.create(hostel=self.hostel, day_of_week=2, meal_type='lunch', items='Rice')
        MessMenu.objects.create(hostel=self.other_hostel, day_of_week=2, meal_type='lunch', items='Pasta')
        self.client.force_login(self.student)

        response = self.client.get(reverse('finance:mess_menu_list'))
        self.assertEqual([m['items'] for m in response.json()['data']], ['Rice'])

        response = self.client.post(
            reverse('finance:mess_menu_list'),
            {'day_of_week': 2, 'meal_type': 'lunch', 'items': 'Cake'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 403)

    def test_invalid_day_rejected(self):
        self.client.force_login(self.warden)
        response = self.client.post(
            reverse('finance:mess_menu_list'),
            {'day_of_week': 9, 'meal_type': 'lunch', 'items': 'Rice'},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
