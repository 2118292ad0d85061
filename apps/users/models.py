from django.db import models
from django.contrib.auth.models import AbstractUser, UserManager as BaseUserManager
from django.utils.translation import gettext_lazy as _


class UserManager(BaseUserManager):
    """
    Custom user manager with hostel-scoped lookups.
    """

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        """
        Create and return a superuser; superusers act as platform admins.
        """
        extra_fields.setdefault('role', User.Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)

    def students_in_hostel(self, hostel_id):
        """Active student accounts belonging to a hostel."""
        return self.filter(
            role=User.Role.STUDENT,
            hostel_id=hostel_id,
            is_active=True
        )


class User(AbstractUser):
    """
    Account for every person using the system. ``role`` decides which API
    endpoints are reachable and ``hostel`` is the tenant scope for all of them
    (admins have no hostel).
    """
    class Role(models.TextChoices):
        ADMIN = 'admin', _('Administrator')
        WARDEN = 'warden', _('Warden')
        MESS_MANAGER = 'mess_manager', _('Mess Manager')
        STUDENT = 'student', _('Student')

    role = models.CharField(
        _('role'),
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
        db_index=True
    )
    hostel = models.ForeignKey(
        'hostels.Hostel',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='members',
        verbose_name=_('hostel')
    )
    phone = models.CharField(_('phone number'), max_length=20, blank=True)

    objects = UserManager()

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        ordering = ['username']
        indexes = [
            models.Index(fields=['role', 'hostel', 'is_active'], name='user_role_hostel_active_idx'),
        ]

    def __str__(self):
        return self.username

    @property
    def is_student(self):
        return self.role == self.Role.STUDENT

    @property
    def is_warden(self):
        return self.role == self.Role.WARDEN
