# apps/academics/models.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel


class AcademicSession(TimeStampedModel):
    """
    Model for managing academic sessions/years.
    """
    name = models.CharField(_('session name'), max_length=100, unique=True)
    start_date = models.DateField(_('start date'))
    end_date = models.DateField(_('end date'))
    is_active = models.BooleanField(_('is active'), default=True)

    class Meta:
        verbose_name = _('Academic Session')
        verbose_name_plural = _('Academic Sessions')
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def clean(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError(_('End date must be after start date.'))

    def progress_percentage(self):
        """Calculate session progress percentage."""
        today = timezone.now().date()

        if today < self.start_date:
            return 0
        elif today > self.end_date:
            return 100

        total_days = (self.end_date - self.start_date).days
        days_passed = (today - self.start_date).days

        if total_days > 0:
            return min(100, int((days_passed / total_days) * 100))
        return 0


class Enrollment(TimeStampedModel):
    """
    Registration of a student in a hostel, optionally for an academic session.
    """
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='enrollments',
        verbose_name=_('student')
    )
    hostel = models.ForeignKey(
        'hostels.Hostel',
        on_delete=models.PROTECT,
        related_name='enrollments',
        verbose_name=_('hostel')
    )
    session = models.ForeignKey(
        AcademicSession,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='enrollments',
        verbose_name=_('academic session')
    )
    enrollment_date = models.DateField(_('enrollment date'), default=timezone.localdate)
    is_active = models.BooleanField(_('is active'), default=True)

    class Meta:
        verbose_name = _('Enrollment')
        verbose_name_plural = _('Enrollments')
        ordering = ['-enrollment_date']

    def __str__(self):
        return f"{self.student} - {self.hostel.code}"


class Suspension(TimeStampedModel):
    """
    Disciplinary suspension of a student issued by a warden.
    """
    class Status(models.TextChoices):
        ACTIVE = 'active', _('Active')
        REVOKED = 'revoked', _('Revoked')
        COMPLETED = 'completed', _('Completed')

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='suspensions',
        verbose_name=_('student')
    )
    reason = models.TextField(_('reason'))
    start_date = models.DateField(_('start date'))
    end_date = models.DateField(_('end date'), null=True, blank=True)
    status = models.CharField(
        _('status'),
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True
    )
    issued_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='suspensions_issued',
        verbose_name=_('issued by')
    )
    remarks = models.TextField(_('remarks'), blank=True)

    class Meta:
        verbose_name = _('Suspension')
        verbose_name_plural = _('Suspensions')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.student} - {self.get_status_display()} ({self.start_date})"
