# apps/academics/filters.py

from dataclasses import dataclass
from typing import Optional

from apps.core.filters import FilterCriteria


@dataclass
class SuspensionFilter(FilterCriteria):
    status: Optional[str] = None
    student_id: Optional[int] = None

    lookups = {
        'status': 'status',
        'student_id': 'student_id',
    }
