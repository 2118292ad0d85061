# apps/academics/forms.py

from django import forms
from django.contrib.auth.validators import UnicodeUsernameValidator
from django.utils.translation import gettext_lazy as _

from apps.core.forms import FilterChoiceField
from .models import AcademicSession, Suspension


class AcademicSessionForm(forms.ModelForm):
    class Meta:
        model = AcademicSession
        fields = ['name', 'start_date', 'end_date']


class EnrollStudentForm(forms.Form):
    """
    Payload for enrolling a new student into the warden's hostel.
    """
    username = forms.CharField(max_length=150, validators=[UnicodeUsernameValidator()])
    password = forms.CharField(min_length=6, strip=False)
    email = forms.EmailField(required=False)
    first_name = forms.CharField(max_length=150, required=False)
    last_name = forms.CharField(max_length=150, required=False)
    phone = forms.CharField(max_length=20, required=False)
    session_id = forms.IntegerField(required=False, min_value=1, label=_('Academic Session'))


class SuspensionForm(forms.Form):
    student_id = forms.IntegerField(min_value=1, label=_('Student'))
    reason = forms.CharField()
    start_date = forms.DateField()
    end_date = forms.DateField(required=False)
    remarks = forms.CharField(required=False)

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')

        if start_date and end_date and end_date < start_date:
            raise forms.ValidationError(_('End date cannot be before start date.'))

        return cleaned_data


class SuspensionUpdateForm(forms.Form):
    status = forms.ChoiceField(choices=Suspension.Status.choices)
    remarks = forms.CharField(required=False)


class SuspensionSearchForm(forms.Form):
    status = FilterChoiceField(choices=Suspension.Status.choices)
    student_id = forms.IntegerField(required=False, min_value=1)
