# apps/support/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.core.forms import DateRangeFilterForm, FilterChoiceField
from .models import Complaint


class ComplaintForm(forms.ModelForm):
    """Form a student uses to raise a complaint."""

    class Meta:
        model = Complaint
        fields = ['title', 'description', 'category', 'priority']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['category'].required = False
        self.fields['priority'].required = False

    def clean_category(self):
        return self.cleaned_data.get('category') or Complaint.Category.OTHER

    def clean_priority(self):
        return self.cleaned_data.get('priority') or Complaint.Priority.MEDIUM


class ComplaintUpdateForm(forms.Form):
    status = forms.ChoiceField(choices=Complaint.Status.choices)
    assigned_to_id = forms.IntegerField(required=False, min_value=1, label=_('Assigned To'))
    resolution = forms.CharField(required=False)


class ComplaintSearchForm(DateRangeFilterForm):
    status = FilterChoiceField(choices=Complaint.Status.choices)
    category = FilterChoiceField(choices=Complaint.Category.choices)
    priority = FilterChoiceField(choices=Complaint.Priority.choices)
