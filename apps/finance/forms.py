# apps/finance/forms.py

from decimal import Decimal

from django import forms
from django.utils.translation import gettext_lazy as _

from apps.core.forms import FilterChoiceField
from .models import AdditionalCollectionType, MessBill, MessMenu


class CollectionTypeForm(forms.ModelForm):
    class Meta:
        model = AdditionalCollectionType
        fields = ['name', 'description', 'default_amount']


class CollectionForm(forms.Form):
    """Payload for recording an additional collection from a student."""

    student_id = forms.IntegerField(min_value=1, label=_('Student'))
    collection_type_id = forms.IntegerField(min_value=1, label=_('Collection Type'))
    amount = forms.DecimalField(
        required=False,
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    reason = forms.CharField(required=False)


class GenerateMessBillsForm(forms.Form):
    month = forms.IntegerField(min_value=1, max_value=12)
    year = forms.IntegerField(min_value=2000, max_value=2100)
    amount_per_student = forms.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))


class MessBillSearchForm(forms.Form):
    month = forms.IntegerField(required=False, min_value=1, max_value=12)
    year = forms.IntegerField(required=False, min_value=2000, max_value=2100)
    status = FilterChoiceField(choices=MessBill.Status.choices)


class MessMenuForm(forms.Form):
    day_of_week = forms.TypedChoiceField(choices=MessMenu.DayOfWeek.choices, coerce=int)
    meal_type = forms.ChoiceField(choices=MessMenu.MealType.choices)
    items = forms.CharField()
