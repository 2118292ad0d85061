# apps/attendance/filters.py

import datetime
from dataclasses import dataclass
from typing import Optional

from apps.core.filters import FilterCriteria


@dataclass
class AttendanceFilter(FilterCriteria):
    date: Optional[datetime.date] = None
    student_id: Optional[int] = None
    from_date: Optional[datetime.date] = None
    to_date: Optional[datetime.date] = None

    lookups = {
        'date': 'date',
        'student_id': 'student_id',
        'from_date': 'date__gte',
        'to_date': 'date__lte',
    }


@dataclass
class LeaveFilter(FilterCriteria):
    status: Optional[str] = None
    from_date: Optional[datetime.date] = None
    to_date: Optional[datetime.date] = None

    lookups = {
        'status': 'status',
        'from_date': 'created_at__date__gte',
        'to_date': 'created_at__date__lte',
    }
