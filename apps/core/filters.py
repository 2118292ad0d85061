# apps/core/filters.py

from dataclasses import dataclass, fields
from typing import ClassVar, Dict


@dataclass
class FilterCriteria:
    """
    Typed list filter.

    Subclasses declare optional fields and map each one to an ORM lookup in
    ``lookups``. Fields left as ``None`` are skipped when the criteria are
    applied, so an empty criteria object leaves the queryset untouched.
    """

    lookups: ClassVar[Dict[str, str]] = {}

    @classmethod
    def from_cleaned_data(cls, cleaned_data):
        return cls(**{f.name: cleaned_data.get(f.name) for f in fields(cls)})

    def apply(self, queryset):
        for field_name, lookup in self.lookups.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            queryset = queryset.filter(**{lookup: value})
        return queryset

    @property
    def is_empty(self):
        return all(getattr(self, f.name) is None for f in fields(self))
