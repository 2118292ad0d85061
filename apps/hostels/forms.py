# apps/hostels/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.core.forms import DateRangeFilterForm
from .models import Hostel, RoomType, Holiday


class AllotmentForm(forms.Form):
    """Payload for allotting a room to a student."""

    student_id = forms.IntegerField(min_value=1, label=_('Student'))
    room_id = forms.IntegerField(min_value=1, label=_('Room'))
    remarks = forms.CharField(required=False, max_length=1000)


class TransferForm(forms.Form):
    """Payload for moving an active allotment to another room."""

    room_id = forms.IntegerField(min_value=1, label=_('New Room'))
    remarks = forms.CharField(required=False, max_length=1000)


class RoomSearchForm(forms.Form):
    """Form for searching and filtering rooms."""

    available = forms.NullBooleanField(required=False, label=_('Available'))
    room_type_id = forms.IntegerField(required=False, min_value=1, label=_('Room Type'))
    floor = forms.IntegerField(required=False, min_value=0, label=_('Floor'))


class AllotmentSearchForm(forms.Form):
    """Form for searching and filtering room allotments."""

    active = forms.NullBooleanField(required=False, label=_('Active'))
    student_id = forms.IntegerField(required=False, min_value=1, label=_('Student'))
    room_id = forms.IntegerField(required=False, min_value=1, label=_('Room'))


class HolidaySearchForm(DateRangeFilterForm):
    pass


class HostelForm(forms.ModelForm):
    class Meta:
        model = Hostel
        fields = [
            'name', 'code', 'description', 'address_line_1', 'address_line_2',
            'city', 'state', 'postal_code', 'country', 'phone', 'email'
        ]

    def clean_code(self):
        return self.cleaned_data['code'].strip().upper()


class RoomTypeForm(forms.ModelForm):
    class Meta:
        model = RoomType
        fields = ['name', 'capacity', 'description']


class RoomForm(forms.Form):
    """
    Payload for creating a room. ``hostel_id`` is only honoured for admins;
    wardens always create rooms in their own hostel.
    """

    hostel_id = forms.IntegerField(required=False, min_value=1, label=_('Hostel'))
    room_number = forms.CharField(max_length=20, label=_('Room Number'))
    room_type_id = forms.IntegerField(min_value=1, label=_('Room Type'))
    floor = forms.IntegerField(required=False, min_value=0, label=_('Floor'))

    def clean_room_number(self):
        room_number = self.cleaned_data['room_number'].strip()
        if not room_number:
            raise forms.ValidationError(_('Room number cannot be blank.'))
        return room_number


class HolidayForm(forms.Form):
    """Payload for creating or updating a holiday."""

    name = forms.CharField(max_length=200)
    date = forms.DateField()
    type = forms.ChoiceField(
        choices=Holiday.HolidayType.choices,
        required=False,
        label=_('Holiday Type')
    )
    description = forms.CharField(required=False)

    def clean_type(self):
        return self.cleaned_data.get('type') or Holiday.HolidayType.HOSTEL
