# apps/academics/services.py

import logging

from django.conf import settings
from django.db import transaction, DatabaseError, IntegrityError
from django.db.models import Prefetch

from apps.core.exceptions import NotFoundError, StorageError, ValidationError
from apps.hostels.models import RoomAllotment
from apps.hostels.services import AllotmentService
from apps.users.models import User
from .models import AcademicSession, Enrollment

logger = logging.getLogger(__name__)


class StudentService:
    """
    Service class for the student directory of a hostel.
    """

    @staticmethod
    def get_student(ctx, student_id):
        """
        Active student of the caller's hostel, or NotFoundError.
        """
        student = User.objects.students_in_hostel(ctx.hostel_id).filter(pk=student_id).first()
        if student is None:
            raise NotFoundError('Student not found in this hostel')
        return student

    @staticmethod
    def list_students(ctx):
        """
        Active students ordered by username. Each carries ``active_allotments``
        with at most one entry.
        """
        return User.objects.students_in_hostel(ctx.hostel_id).prefetch_related(
            Prefetch(
                'room_allotments',
                queryset=RoomAllotment.objects.active().select_related('room__room_type'),
                to_attr='active_allotments'
            )
        ).order_by('username')

    @staticmethod
    def enroll_student(ctx, username, password, email=None, session_id=None,
                       first_name='', last_name='', phone=''):
        """
        Create a student account in the caller's hostel together with its
        enrollment record.
        """
        if User.objects.filter(username=username).exists():
            raise ValidationError('Username already exists')

        session = None
        if session_id is not None:
            session = AcademicSession.objects.filter(pk=session_id, is_active=True).first()
            if session is None:
                raise NotFoundError('Academic session not found')

        if not email:
            email = f"{username}@{settings.HOSTEL_DEFAULT_EMAIL_DOMAIN}"

        try:
            with transaction.atomic():
                student = User.objects.create_user(
                    username=username,
                    email=email,
                    password=password,
                    first_name=first_name or '',
                    last_name=last_name or '',
                    phone=phone or '',
                    role=User.Role.STUDENT,
                    hostel_id=ctx.hostel_id
                )
                enrollment = Enrollment.objects.create(
                    student=student,
                    hostel_id=ctx.hostel_id,
                    session=session
                )
        except IntegrityError:
            raise ValidationError('Username already exists')
        except DatabaseError as e:
            logger.exception(f"Failed to enroll student {username}")
            raise StorageError() from e

        logger.info(f"Student {student.username} enrolled in hostel {ctx.hostel_id} by user {ctx.user_id}")
        return student, enrollment

    @staticmethod
    def deactivate_student(ctx, student_id):
        """
        Vacate the student's room, if any, and deactivate the account and its
        enrollments in one transaction.
        """
        try:
            with transaction.atomic():
                student = User.objects.select_for_update().filter(
                    pk=student_id,
                    role=User.Role.STUDENT,
                    hostel_id=ctx.hostel_id,
                    is_active=True
                ).first()
                if student is None:
                    raise NotFoundError('Student not found in this hostel')

                vacated = AllotmentService.release_student(student.pk, ctx)

                student.is_active = False
                student.save(update_fields=['is_active'])
                Enrollment.objects.filter(student=student, is_active=True).update(is_active=False)
        except DatabaseError as e:
            logger.exception(f"Failed to deactivate student {student_id}")
            raise StorageError() from e

        if vacated is not None:
            logger.info(f"Room {vacated.room_id} vacated on deactivation of student {student_id}")
        logger.info(f"Student {student_id} deactivated by user {ctx.user_id}")
        return student
