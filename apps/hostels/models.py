# apps/hostels/models.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel, ContactDetailsModel


class Hostel(TimeStampedModel, ContactDetailsModel):
    """
    A hostel building. Every room, student and record is scoped to one hostel.
    """
    name = models.CharField(_('hostel name'), max_length=200)
    code = models.CharField(_('hostel code'), max_length=20, unique=True)
    description = models.TextField(_('description'), blank=True)
    is_active = models.BooleanField(_('is active'), default=True)

    class Meta:
        verbose_name = _('Hostel')
        verbose_name_plural = _('Hostels')
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.code})"

    @property
    def total_rooms(self):
        return self.rooms.filter(is_active=True).count()

    @property
    def occupied_rooms(self):
        return self.rooms.filter(is_active=True, is_occupied=True).count()


class RoomType(TimeStampedModel):
    """
    Room category with its bed capacity (single, double, dormitory, ...).
    """
    name = models.CharField(_('name'), max_length=100, unique=True)
    capacity = models.PositiveIntegerField(
        _('capacity'),
        default=1,
        validators=[MinValueValidator(1)]
    )
    description = models.TextField(_('description'), blank=True)

    class Meta:
        verbose_name = _('Room Type')
        verbose_name_plural = _('Room Types')
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.capacity})"

    def clean(self):
        if self.capacity is not None and self.capacity < 1:
            raise ValidationError(_('Room capacity must be at least 1.'))


class RoomQuerySet(models.QuerySet):

    def for_hostel(self, hostel_id):
        return self.filter(hostel_id=hostel_id)

    def active(self):
        return self.filter(is_active=True)

    def available(self):
        return self.filter(is_active=True, is_occupied=False)

    def occupied(self):
        return self.filter(is_active=True, is_occupied=True)


class Room(TimeStampedModel):
    """
    A room within a hostel.

    ``is_occupied`` mirrors the allotment ledger: it is true exactly when an
    active RoomAllotment references the room. Only AllotmentService writes it.
    """
    hostel = models.ForeignKey(
        Hostel,
        on_delete=models.CASCADE,
        related_name='rooms',
        verbose_name=_('hostel')
    )
    room_type = models.ForeignKey(
        RoomType,
        on_delete=models.PROTECT,
        related_name='rooms',
        verbose_name=_('room type')
    )
    room_number = models.CharField(_('room number'), max_length=20)
    floor = models.PositiveIntegerField(_('floor number'), default=0)
    is_occupied = models.BooleanField(_('is occupied'), default=False)
    is_active = models.BooleanField(_('is active'), default=True)

    objects = RoomQuerySet.as_manager()

    class Meta:
        verbose_name = _('Room')
        verbose_name_plural = _('Rooms')
        ordering = ['hostel', 'room_number']
        unique_together = ['hostel', 'room_number']
        indexes = [
            models.Index(fields=['hostel', 'is_occupied', 'is_active'], name='room_hostel_occupancy_idx'),
        ]

    def __str__(self):
        return f"{self.hostel.name} - Room {self.room_number}"

    @property
    def capacity(self):
        return self.room_type.capacity

    def get_active_allotment(self):
        """Get the active allotment for this room, if any."""
        return self.allotments.filter(is_active=True).first()


class RoomAllotmentQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)

    def for_hostel(self, hostel_id):
        return self.filter(room__hostel_id=hostel_id)


class RoomAllotment(TimeStampedModel):
    """
    Ledger entry assigning a student to a room.

    Rows are never deleted; vacating a room deactivates the allotment. The
    partial unique constraints keep at most one active allotment per room and
    per student even under concurrent writers.
    """
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='room_allotments',
        verbose_name=_('student')
    )
    room = models.ForeignKey(
        Room,
        on_delete=models.PROTECT,
        related_name='allotments',
        verbose_name=_('room')
    )
    allotted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='allotments_made',
        verbose_name=_('allotted by')
    )
    allotment_date = models.DateTimeField(_('allotment date'), default=timezone.now)
    vacated_date = models.DateTimeField(_('vacated date'), null=True, blank=True)
    is_active = models.BooleanField(_('is active'), default=True)
    remarks = models.TextField(_('remarks'), blank=True)

    objects = RoomAllotmentQuerySet.as_manager()

    class Meta:
        verbose_name = _('Room Allotment')
        verbose_name_plural = _('Room Allotments')
        ordering = ['-allotment_date']
        constraints = [
            models.UniqueConstraint(
                fields=['room'],
                condition=Q(is_active=True),
                name='unique_active_allotment_per_room'
            ),
            models.UniqueConstraint(
                fields=['student'],
                condition=Q(is_active=True),
                name='unique_active_allotment_per_student'
            ),
        ]
        indexes = [
            models.Index(fields=['student', 'is_active'], name='allotment_student_active_idx'),
            models.Index(fields=['room', 'is_active'], name='allotment_room_active_idx'),
        ]

    def __str__(self):
        state = 'active' if self.is_active else 'vacated'
        return f"{self.student} - Room {self.room.room_number} ({state})"

    @property
    def duration_days(self):
        """Days the room has been (or was) held."""
        end = self.vacated_date or timezone.now()
        return (end - self.allotment_date).days


class Holiday(TimeStampedModel):
    """
    Hostel holiday calendar entry.
    """
    class HolidayType(models.TextChoices):
        NATIONAL = 'national', _('National')
        RELIGIOUS = 'religious', _('Religious')
        HOSTEL = 'hostel', _('Hostel')
        OTHER = 'other', _('Other')

    hostel = models.ForeignKey(
        Hostel,
        on_delete=models.CASCADE,
        related_name='holidays',
        verbose_name=_('hostel')
    )
    name = models.CharField(_('name'), max_length=200)
    date = models.DateField(_('date'))
    holiday_type = models.CharField(
        _('holiday type'),
        max_length=20,
        choices=HolidayType.choices,
        default=HolidayType.HOSTEL
    )
    description = models.TextField(_('description'), blank=True)

    class Meta:
        verbose_name = _('Holiday')
        verbose_name_plural = _('Holidays')
        ordering = ['date']
        indexes = [
            models.Index(fields=['hostel', 'date'], name='holiday_hostel_date_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.date})"
