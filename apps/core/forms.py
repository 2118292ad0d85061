# apps/core/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _


class FilterChoiceField(forms.ChoiceField):
    """Optional choice field where blank or ``all`` means "do not filter"."""

    ALL = 'all'

    def __init__(self, *, choices=(), **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(choices=[(self.ALL, _('All'))] + list(choices), **kwargs)

    def clean(self, value):
        value = super().clean(value)
        if value in ('', self.ALL):
            return None
        return value


class DateRangeFilterForm(forms.Form):
    """Base search form with an optional ``from_date``/``to_date`` range."""

    from_date = forms.DateField(required=False)
    to_date = forms.DateField(required=False)

    def clean(self):
        cleaned_data = super().clean()
        from_date = cleaned_data.get('from_date')
        to_date = cleaned_data.get('to_date')

        if from_date and to_date and from_date > to_date:
            raise forms.ValidationError(_('from_date must be on or before to_date.'))

        return cleaned_data
