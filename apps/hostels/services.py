# apps/hostels/services.py
"""
Room allotment services.

Every write that touches ``Room.is_occupied`` goes through AllotmentService so
the flag and the allotment ledger change together inside one transaction.
"""

import logging

from django.db import transaction, DatabaseError, IntegrityError
from django.utils import timezone

from apps.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from apps.users.models import User
from .models import Hostel, Room, RoomAllotment, RoomType

logger = logging.getLogger(__name__)


class AllotmentService:
    """
    Service class for allotting, vacating and transferring rooms.

    Public methods take the caller's ActingContext and only ever see rows in
    ``ctx.hostel_id``.
    """

    STUDENT_NOT_FOUND = 'Student not found in this hostel'
    STUDENT_ALREADY_ALLOTTED = 'Student already has a room assigned'
    ROOM_NOT_FOUND = 'Room not found in this hostel'
    ROOM_NOT_AVAILABLE = 'Room is not available'
    ALLOTMENT_NOT_FOUND = 'Allotment not found in this hostel'
    ALLOTMENT_VACATED = 'Allotment is already vacated'

    @staticmethod
    def allot_room(student_id, room_id, ctx, remarks=''):
        """
        Allot ``room_id`` to ``student_id`` and mark the room occupied.

        Returns the new allotment with student, room and room type loaded.
        """
        try:
            with transaction.atomic():
                allotment = AllotmentService._allot(student_id, room_id, ctx, remarks)
        except IntegrityError:
            # Lost a race against a concurrent allotment; the constraint held
            if RoomAllotment.objects.active().filter(student_id=student_id).exists():
                message = AllotmentService.STUDENT_ALREADY_ALLOTTED
            else:
                message = AllotmentService.ROOM_NOT_AVAILABLE
            logger.warning(f"Concurrent allotment rejected for student {student_id}, room {room_id}: {message}")
            raise ConflictError(message)
        except DatabaseError as e:
            logger.exception(f"Failed to allot room {room_id} to student {student_id}")
            raise StorageError() from e

        logger.info(
            f"Room {room_id} allotted to student {student_id} by user {ctx.user_id} "
            f"(allotment {allotment.pk})"
        )
        return AllotmentService.get_allotment(allotment.pk)

    @staticmethod
    def vacate_room(allotment_id, ctx):
        """
        Close an active allotment and free its room.
        """
        try:
            with transaction.atomic():
                allotment = AllotmentService._vacate(allotment_id, ctx)
        except DatabaseError as e:
            logger.exception(f"Failed to vacate allotment {allotment_id}")
            raise StorageError() from e

        logger.info(f"Allotment {allotment_id} vacated by user {ctx.user_id}, room {allotment.room_id} freed")
        return AllotmentService.get_allotment(allotment.pk)

    @staticmethod
    def transfer_room(allotment_id, new_room_id, ctx, remarks=''):
        """
        Move a student to ``new_room_id``. The vacate and the new allotment
        commit together or not at all.
        """
        try:
            with transaction.atomic():
                previous = AllotmentService._vacate(allotment_id, ctx)
                if previous.room_id == new_room_id:
                    raise ConflictError('Student is already allotted to this room')
                allotment = AllotmentService._allot(previous.student_id, new_room_id, ctx, remarks)
        except IntegrityError:
            logger.warning(f"Concurrent allotment rejected while transferring allotment {allotment_id}")
            raise ConflictError(AllotmentService.ROOM_NOT_AVAILABLE)
        except DatabaseError as e:
            logger.exception(f"Failed to transfer allotment {allotment_id} to room {new_room_id}")
            raise StorageError() from e

        logger.info(
            f"Student {previous.student_id} transferred from room {previous.room_id} "
            f"to room {new_room_id} by user {ctx.user_id}"
        )
        return AllotmentService.get_allotment(allotment.pk)

    @staticmethod
    def release_student(student_id, ctx):
        """
        Vacate the student's active allotment, if any.

        Must be called inside the caller's transaction. Returns the vacated
        allotment or None.
        """
        allotment = RoomAllotment.objects.active().for_hostel(ctx.hostel_id).filter(
            student_id=student_id
        ).first()
        if allotment is None:
            return None
        return AllotmentService._vacate(allotment.pk, ctx)

    @staticmethod
    def get_allotment(allotment_id):
        return RoomAllotment.objects.select_related(
            'student', 'allotted_by', 'room__room_type'
        ).get(pk=allotment_id)

    @staticmethod
    def list_available_rooms(ctx):
        return Room.objects.for_hostel(ctx.hostel_id).available().select_related(
            'room_type'
        ).order_by('room_number')

    @staticmethod
    def list_rooms(ctx, criteria):
        queryset = Room.objects.for_hostel(ctx.hostel_id).select_related('room_type')
        return criteria.apply(queryset).order_by('room_number')

    @staticmethod
    def list_allotments(ctx, criteria):
        queryset = RoomAllotment.objects.for_hostel(ctx.hostel_id).select_related(
            'student', 'allotted_by', 'room__room_type'
        )
        return criteria.apply(queryset)

    @staticmethod
    def _allot(student_id, room_id, ctx, remarks):
        student = User.objects.select_for_update().filter(
            pk=student_id,
            role=User.Role.STUDENT,
            hostel_id=ctx.hostel_id,
            is_active=True
        ).first()
        if student is None:
            raise NotFoundError(AllotmentService.STUDENT_NOT_FOUND)

        if RoomAllotment.objects.active().filter(student_id=student.pk).exists():
            logger.warning(f"Student {student.pk} already holds an active allotment")
            raise ConflictError(AllotmentService.STUDENT_ALREADY_ALLOTTED)

        room = Room.objects.select_for_update().filter(
            pk=room_id,
            hostel_id=ctx.hostel_id,
            is_active=True
        ).first()
        if room is None:
            raise NotFoundError(AllotmentService.ROOM_NOT_FOUND)

        if room.is_occupied:
            logger.warning(f"Room {room.pk} is already occupied")
            raise ConflictError(AllotmentService.ROOM_NOT_AVAILABLE)

        allotment = RoomAllotment.objects.create(
            student=student,
            room=room,
            allotted_by_id=ctx.user_id,
            allotment_date=timezone.now(),
            remarks=remarks or '',
            is_active=True
        )

        room.is_occupied = True
        room.save(update_fields=['is_occupied', 'updated_at'])
        return allotment

    @staticmethod
    def _vacate(allotment_id, ctx):
        allotment = RoomAllotment.objects.select_for_update().filter(
            pk=allotment_id,
            room__hostel_id=ctx.hostel_id
        ).first()
        if allotment is None:
            raise NotFoundError(AllotmentService.ALLOTMENT_NOT_FOUND)

        if not allotment.is_active:
            raise ConflictError(AllotmentService.ALLOTMENT_VACATED)

        room = Room.objects.select_for_update().get(pk=allotment.room_id)

        allotment.is_active = False
        allotment.vacated_date = timezone.now()
        allotment.save(update_fields=['is_active', 'vacated_date', 'updated_at'])

        room.is_occupied = False
        room.save(update_fields=['is_occupied', 'updated_at'])
        return allotment


class RoomService:
    """
    Service class for creating rooms.
    """

    @staticmethod
    def create_room(ctx, room_number, room_type_id, floor=None, hostel_id=None):
        """
        Create a room. Admins may target any hostel; everyone else is confined
        to their own.
        """
        if ctx.is_admin:
            if hostel_id is None:
                raise ValidationError('hostel_id: This field is required.')
            target_hostel_id = hostel_id
        else:
            if hostel_id is not None and hostel_id != ctx.hostel_id:
                raise NotFoundError('Hostel not found')
            target_hostel_id = ctx.hostel_id

        hostel = Hostel.objects.filter(pk=target_hostel_id, is_active=True).first()
        if hostel is None:
            raise NotFoundError('Hostel not found')

        room_type = RoomType.objects.filter(pk=room_type_id).first()
        if room_type is None:
            raise NotFoundError('Room type not found')

        if Room.objects.filter(hostel=hostel, room_number=room_number).exists():
            raise ConflictError('Room number already exists in this hostel')

        try:
            with transaction.atomic():
                room = Room.objects.create(
                    hostel=hostel,
                    room_type=room_type,
                    room_number=room_number,
                    floor=floor or 0
                )
        except IntegrityError:
            raise ConflictError('Room number already exists in this hostel')
        except DatabaseError as e:
            logger.exception(f"Failed to create room {room_number} in hostel {hostel.pk}")
            raise StorageError() from e

        logger.info(f"Room {room.room_number} created in hostel {hostel.code} by user {ctx.user_id}")
        return room
