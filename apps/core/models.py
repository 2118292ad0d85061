# apps/core/models.py
"""
Abstract bases shared by the hostel models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(_('created at'), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        abstract = True


class ContactDetailsModel(models.Model):
    """
    Postal address and front-desk contact of a site. Every field is optional.
    """
    ADDRESS_FIELDS = ('address_line_1', 'address_line_2', 'city', 'state', 'postal_code', 'country')

    address_line_1 = models.CharField(_('address line 1'), max_length=255, blank=True)
    address_line_2 = models.CharField(_('address line 2'), max_length=255, blank=True)
    city = models.CharField(_('city'), max_length=100, blank=True)
    state = models.CharField(_('state/province'), max_length=100, blank=True)
    postal_code = models.CharField(_('postal code'), max_length=20, blank=True)
    country = models.CharField(_('country'), max_length=100, blank=True)
    phone = models.CharField(_('phone number'), max_length=20, blank=True)
    email = models.EmailField(_('email address'), blank=True)

    class Meta:
        abstract = True

    @property
    def full_address(self):
        """Non-empty address parts joined with commas."""
        return ', '.join(part for part in (getattr(self, name) for name in self.ADDRESS_FIELDS) if part)
