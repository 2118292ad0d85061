# apps/finance/filters.py

from dataclasses import dataclass
from typing import Optional

from apps.core.filters import FilterCriteria


@dataclass
class MessBillFilter(FilterCriteria):
    month: Optional[int] = None
    year: Optional[int] = None
    status: Optional[str] = None

    lookups = {
        'month': 'month',
        'year': 'year',
        'status': 'status',
    }
