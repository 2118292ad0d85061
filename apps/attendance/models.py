# apps/attendance/models.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel


class Attendance(TimeStampedModel):
    """
    Daily attendance of a student. One record per student per day; marking
    again overwrites it.
    """
    class AttendanceStatus(models.TextChoices):
        PRESENT = 'present', _('Present')
        ABSENT = 'absent', _('Absent')
        LATE = 'late', _('Late')
        LEAVE = 'leave', _('On Leave')

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='attendances',
        verbose_name=_('student')
    )
    date = models.DateField(_('date'), db_index=True)
    status = models.CharField(
        _('attendance status'),
        max_length=20,
        choices=AttendanceStatus.choices,
        default=AttendanceStatus.PRESENT
    )
    check_in_time = models.TimeField(_('check in time'), null=True, blank=True)
    check_out_time = models.TimeField(_('check out time'), null=True, blank=True)
    marked_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendances_marked',
        verbose_name=_('marked by')
    )
    remarks = models.TextField(_('remarks'), blank=True)

    class Meta:
        verbose_name = _('Attendance')
        verbose_name_plural = _('Attendance')
        ordering = ['-date', '-created_at']
        unique_together = ['student', 'date']

    def __str__(self):
        return f"{self.student} - {self.date} ({self.get_status_display()})"


class Leave(TimeStampedModel):
    """
    Leave request raised by a student and reviewed by the hostel warden.
    """
    class LeaveStatus(models.TextChoices):
        PENDING = 'pending', _('Pending')
        APPROVED = 'approved', _('Approved')
        REJECTED = 'rejected', _('Rejected')

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='leaves',
        verbose_name=_('student')
    )
    from_date = models.DateField(_('from date'))
    to_date = models.DateField(_('to date'))
    reason = models.TextField(_('reason for leave'))
    status = models.CharField(
        _('leave status'),
        max_length=20,
        choices=LeaveStatus.choices,
        default=LeaveStatus.PENDING,
        db_index=True
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='leaves_reviewed',
        verbose_name=_('approved by')
    )
    approved_date = models.DateTimeField(_('approved date'), null=True, blank=True)
    remarks = models.TextField(_('remarks'), blank=True)

    class Meta:
        verbose_name = _('Leave')
        verbose_name_plural = _('Leaves')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.student} - {self.from_date} to {self.to_date}"

    def clean(self):
        if self.from_date and self.to_date and self.to_date < self.from_date:
            raise ValidationError(_('End date cannot be before start date.'))

    @property
    def total_days(self):
        return (self.to_date - self.from_date).days + 1

    @property
    def is_pending(self):
        return self.status == self.LeaveStatus.PENDING
