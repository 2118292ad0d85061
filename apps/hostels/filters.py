# apps/hostels/filters.py

from dataclasses import dataclass
from datetime import date
from typing import Optional

from apps.core.filters import FilterCriteria


@dataclass
class RoomFilter(FilterCriteria):
    available: Optional[bool] = None
    room_type_id: Optional[int] = None
    floor: Optional[int] = None

    lookups = {
        'room_type_id': 'room_type_id',
        'floor': 'floor',
    }

    def apply(self, queryset):
        queryset = super().apply(queryset)
        if self.available is True:
            queryset = queryset.available()
        elif self.available is False:
            queryset = queryset.occupied()
        return queryset


@dataclass
class AllotmentFilter(FilterCriteria):
    active: Optional[bool] = None
    student_id: Optional[int] = None
    room_id: Optional[int] = None

    lookups = {
        'active': 'is_active',
        'student_id': 'student_id',
        'room_id': 'room_id',
    }


@dataclass
class HolidayFilter(FilterCriteria):
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    lookups = {
        'from_date': 'date__gte',
        'to_date': 'date__lte',
    }
