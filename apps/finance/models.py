# apps/finance/models.py

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel


class AdditionalCollectionType(TimeStampedModel):
    """
    Kind of one-off charge collected from students (fines, damages, events).
    """
    name = models.CharField(_('name'), max_length=100, unique=True)
    description = models.TextField(_('description'), blank=True)
    default_amount = models.DecimalField(
        _('default amount'),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_active = models.BooleanField(_('is active'), default=True)

    class Meta:
        verbose_name = _('Additional Collection Type')
        verbose_name_plural = _('Additional Collection Types')
        ordering = ['name']

    def __str__(self):
        return self.name


class AdditionalCollection(TimeStampedModel):
    """
    Amount collected from a student outside the mess bill.
    """
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='additional_collections',
        verbose_name=_('student')
    )
    collection_type = models.ForeignKey(
        AdditionalCollectionType,
        on_delete=models.PROTECT,
        related_name='collections',
        verbose_name=_('collection type')
    )
    amount = models.DecimalField(
        _('amount'),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    reason = models.TextField(_('reason'), blank=True)
    collection_date = models.DateTimeField(_('collection date'), default=timezone.now)
    collected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='collections_made',
        verbose_name=_('collected by')
    )

    class Meta:
        verbose_name = _('Additional Collection')
        verbose_name_plural = _('Additional Collections')
        ordering = ['-collection_date']

    def __str__(self):
        return f"{self.student} - {self.collection_type} ({self.amount})"


class MessBillQuerySet(models.QuerySet):

    def for_hostel(self, hostel_id):
        return self.filter(hostel_id=hostel_id)

    def pending(self):
        return self.filter(status=MessBill.Status.PENDING)

    def past_due(self, today=None):
        today = today or timezone.localdate()
        return self.pending().filter(due_date__lt=today)


class MessBill(TimeStampedModel):
    """
    Monthly mess charge for a student. One bill per student per month.
    """
    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        PAID = 'paid', _('Paid')
        OVERDUE = 'overdue', _('Overdue')

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='mess_bills',
        verbose_name=_('student')
    )
    hostel = models.ForeignKey(
        'hostels.Hostel',
        on_delete=models.PROTECT,
        related_name='mess_bills',
        verbose_name=_('hostel')
    )
    month = models.PositiveSmallIntegerField(
        _('month'),
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    year = models.PositiveSmallIntegerField(_('year'), validators=[MinValueValidator(2000)])
    amount = models.DecimalField(
        _('amount'),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        _('status'),
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    due_date = models.DateField(_('due date'))
    paid_date = models.DateTimeField(_('paid date'), null=True, blank=True)
    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mess_bills_generated',
        verbose_name=_('generated by')
    )

    objects = MessBillQuerySet.as_manager()

    class Meta:
        verbose_name = _('Mess Bill')
        verbose_name_plural = _('Mess Bills')
        ordering = ['-year', '-month', 'student__username']
        unique_together = ['student', 'month', 'year']
        indexes = [
            models.Index(fields=['hostel', 'year', 'month'], name='messbill_hostel_period_idx'),
        ]

    def __str__(self):
        return f"{self.student} - {self.month:02d}/{self.year} ({self.get_status_display()})"

    @property
    def is_paid(self):
        return self.status == self.Status.PAID


class MessMenu(TimeStampedModel):
    """
    Weekly mess menu entry: what is served at one meal on one weekday.
    """
    class DayOfWeek(models.IntegerChoices):
        MONDAY = 0, _('Monday')
        TUESDAY = 1, _('Tuesday')
        WEDNESDAY = 2, _('Wednesday')
        THURSDAY = 3, _('Thursday')
        FRIDAY = 4, _('Friday')
        SATURDAY = 5, _('Saturday')
        SUNDAY = 6, _('Sunday')

    class MealType(models.TextChoices):
        BREAKFAST = 'breakfast', _('Breakfast')
        LUNCH = 'lunch', _('Lunch')
        SNACKS = 'snacks', _('Snacks')
        DINNER = 'dinner', _('Dinner')

    hostel = models.ForeignKey(
        'hostels.Hostel',
        on_delete=models.CASCADE,
        related_name='mess_menus',
        verbose_name=_('hostel')
    )
    day_of_week = models.PositiveSmallIntegerField(_('day of week'), choices=DayOfWeek.choices)
    meal_type = models.CharField(_('meal type'), max_length=20, choices=MealType.choices)
    items = models.TextField(_('items'))
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mess_menus_created',
        verbose_name=_('created by')
    )

    class Meta:
        verbose_name = _('Mess Menu')
        verbose_name_plural = _('Mess Menus')
        ordering = ['day_of_week', 'meal_type']
        unique_together = ['hostel', 'day_of_week', 'meal_type']

    def __str__(self):
        return f"{self.get_day_of_week_display()} {self.get_meal_type_display()}"
