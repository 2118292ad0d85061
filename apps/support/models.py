# apps/support/models.py

from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models
from django.db.models import Case, When, IntegerField
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel


class ComplaintQuerySet(models.QuerySet):

    def for_hostel(self, hostel_id):
        return self.filter(student__hostel_id=hostel_id)

    def open(self):
        return self.filter(status__in=[Complaint.Status.SUBMITTED, Complaint.Status.IN_PROGRESS])

    def with_priority_rank(self):
        """Annotate ``priority_rank``: 0 for urgent up to 3 for low."""
        return self.annotate(
            priority_rank=Case(
                When(priority=Complaint.Priority.URGENT, then=0),
                When(priority=Complaint.Priority.HIGH, then=1),
                When(priority=Complaint.Priority.MEDIUM, then=2),
                default=3,
                output_field=IntegerField()
            )
        )


class Complaint(TimeStampedModel):
    """
    Complaint raised by a student and handled by the hostel staff.
    """
    class Category(models.TextChoices):
        MAINTENANCE = 'maintenance', _('Maintenance')
        ELECTRICAL = 'electrical', _('Electrical')
        PLUMBING = 'plumbing', _('Plumbing')
        CLEANLINESS = 'cleanliness', _('Cleanliness')
        FOOD = 'food', _('Food')
        SECURITY = 'security', _('Security')
        OTHER = 'other', _('Other')

    class Priority(models.TextChoices):
        LOW = 'low', _('Low')
        MEDIUM = 'medium', _('Medium')
        HIGH = 'high', _('High')
        URGENT = 'urgent', _('Urgent')

    class Status(models.TextChoices):
        SUBMITTED = 'submitted', _('Submitted')
        IN_PROGRESS = 'in_progress', _('In Progress')
        RESOLVED = 'resolved', _('Resolved')
        CLOSED = 'closed', _('Closed')

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='complaints',
        verbose_name=_('student')
    )
    title = models.CharField(
        _('title'),
        max_length=200,
        validators=[MinLengthValidator(5)]
    )
    description = models.TextField(_('description'))
    category = models.CharField(
        _('category'),
        max_length=20,
        choices=Category.choices,
        default=Category.OTHER
    )
    priority = models.CharField(
        _('priority'),
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM
    )
    status = models.CharField(
        _('status'),
        max_length=15,
        choices=Status.choices,
        default=Status.SUBMITTED,
        db_index=True
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_complaints',
        verbose_name=_('assigned to')
    )
    resolution = models.TextField(_('resolution'), blank=True)
    resolved_date = models.DateTimeField(_('resolved date'), null=True, blank=True)

    objects = ComplaintQuerySet.as_manager()

    class Meta:
        verbose_name = _('Complaint')
        verbose_name_plural = _('Complaints')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def is_open(self):
        return self.status in (self.Status.SUBMITTED, self.Status.IN_PROGRESS)

    def resolve(self, resolution):
        self.status = self.Status.RESOLVED
        self.resolution = resolution
        self.resolved_date = timezone.now()
