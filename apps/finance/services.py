# apps/finance/services.py
"""
Mess billing and fee collection services.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction, DatabaseError, IntegrityError
from django.utils import timezone

from apps.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from apps.hostels.models import RoomAllotment
from .models import MessBill, AdditionalCollection, AdditionalCollectionType

logger = logging.getLogger(__name__)


class MessBillService:
    """
    Service class for generating and settling monthly mess bills.
    """

    @staticmethod
    def generate_bills(ctx, month, year, amount_per_student):
        """
        Create one pending bill per student holding an active allotment in the
        caller's hostel. Students already billed for the month are skipped.

        Returns a ``(created, skipped)`` tuple of counts.
        """
        student_ids = list(
            RoomAllotment.objects.active().for_hostel(ctx.hostel_id).filter(
                student__is_active=True
            ).values_list('student_id', flat=True)
        )
        already_billed = set(
            MessBill.objects.filter(
                student_id__in=student_ids, month=month, year=year
            ).values_list('student_id', flat=True)
        )

        due_date = timezone.localdate() + timedelta(days=settings.HOSTEL_MESS_BILL_DUE_DAYS)
        bills = [
            MessBill(
                student_id=student_id,
                hostel_id=ctx.hostel_id,
                month=month,
                year=year,
                amount=amount_per_student,
                due_date=due_date,
                generated_by_id=ctx.user_id
            )
            for student_id in student_ids
            if student_id not in already_billed
        ]

        try:
            with transaction.atomic():
                MessBill.objects.bulk_create(bills)
        except IntegrityError:
            logger.warning(f"Concurrent mess bill generation for {month:02d}/{year} in hostel {ctx.hostel_id}")
            raise ConflictError('Mess bills for this month changed during generation, please retry')
        except DatabaseError as e:
            logger.exception(f"Failed to generate mess bills for {month:02d}/{year} in hostel {ctx.hostel_id}")
            raise StorageError() from e

        logger.info(
            f"Generated {len(bills)} mess bills for {month:02d}/{year} in hostel {ctx.hostel_id} "
            f"({len(already_billed)} skipped)"
        )
        return len(bills), len(already_billed)

    @staticmethod
    def mark_paid(ctx, bill_id):
        with transaction.atomic():
            bill = MessBill.objects.for_hostel(ctx.hostel_id).select_for_update().filter(pk=bill_id).first()
            if bill is None:
                raise NotFoundError('Mess bill not found')

            if bill.is_paid:
                raise ConflictError('Mess bill is already paid')

            bill.status = MessBill.Status.PAID
            bill.paid_date = timezone.now()
            bill.save(update_fields=['status', 'paid_date', 'updated_at'])

        logger.info(f"Mess bill {bill.pk} marked paid by user {ctx.user_id}")
        return bill

    @staticmethod
    def mark_overdue(queryset):
        """
        Flag pending bills in ``queryset`` whose due date has passed.
        """
        updated = queryset.past_due().update(status=MessBill.Status.OVERDUE, updated_at=timezone.now())
        if updated:
            logger.info(f"{updated} mess bills marked overdue")
        return updated


class CollectionService:
    """
    Service class for additional (non-mess) collections.
    """

    @staticmethod
    def record_collection(ctx, student, collection_type_id, amount, reason=''):
        collection_type = AdditionalCollectionType.objects.filter(pk=collection_type_id, is_active=True).first()
        if collection_type is None:
            raise NotFoundError('Collection type not found')

        if amount is None:
            if collection_type.default_amount is None:
                raise ValidationError('amount: This field is required.')
            amount = collection_type.default_amount

        collection = AdditionalCollection.objects.create(
            student=student,
            collection_type=collection_type,
            amount=amount,
            reason=reason or '',
            collected_by_id=ctx.user_id
        )
        logger.info(
            f"Collected {collection.amount} ({collection_type.name}) from student {student.pk} "
            f"by user {ctx.user_id}"
        )
        return collection
