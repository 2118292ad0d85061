# apps/support/filters.py

from dataclasses import dataclass
from datetime import date
from typing import Optional

from apps.core.filters import FilterCriteria


@dataclass
class ComplaintFilter(FilterCriteria):
    status: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    lookups = {
        'status': 'status',
        'category': 'category',
        'priority': 'priority',
        'from_date': 'created_at__date__gte',
        'to_date': 'created_at__date__lte',
    }
