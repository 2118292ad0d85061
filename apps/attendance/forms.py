# apps/attendance/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.core.forms import DateRangeFilterForm, FilterChoiceField
from .models import Attendance, Leave


class AttendanceForm(forms.Form):
    """Payload for marking a student's attendance for a day."""

    student_id = forms.IntegerField(min_value=1, label=_('Student'))
    date = forms.DateField()
    status = forms.ChoiceField(choices=Attendance.AttendanceStatus.choices)
    check_in_time = forms.TimeField(required=False)
    check_out_time = forms.TimeField(required=False)
    remarks = forms.CharField(required=False)

    def clean(self):
        cleaned_data = super().clean()
        check_in = cleaned_data.get('check_in_time')
        check_out = cleaned_data.get('check_out_time')

        if check_in and check_out and check_out < check_in:
            raise forms.ValidationError(_('Check out time cannot be before check in time.'))

        return cleaned_data


class AttendanceSearchForm(DateRangeFilterForm):
    date = forms.DateField(required=False)
    student_id = forms.IntegerField(required=False, min_value=1)


class LeaveSearchForm(DateRangeFilterForm):
    status = FilterChoiceField(choices=Leave.LeaveStatus.choices)


class LeaveReviewForm(forms.Form):
    status = forms.ChoiceField(
        choices=[
            (Leave.LeaveStatus.APPROVED, _('Approved')),
            (Leave.LeaveStatus.REJECTED, _('Rejected')),
        ],
        error_messages={
            'required': _('Invalid status. Must be approved or rejected'),
            'invalid_choice': _('Invalid status. Must be approved or rejected'),
        }
    )
    remarks = forms.CharField(required=False)


class LeaveApplicationForm(forms.Form):
    from_date = forms.DateField()
    to_date = forms.DateField()
    reason = forms.CharField()

    def clean(self):
        cleaned_data = super().clean()
        from_date = cleaned_data.get('from_date')
        to_date = cleaned_data.get('to_date')

        if from_date and to_date and to_date < from_date:
            raise forms.ValidationError(_('End date cannot be before start date.'))

        return cleaned_data
