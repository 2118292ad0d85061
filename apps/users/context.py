# apps/users/context.py

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ActingContext:
    """
    Who is performing a request: passed explicitly into every service call
    instead of being read from request-global state.
    """
    user_id: int
    hostel_id: Optional[int]
    role: str

    @classmethod
    def from_user(cls, user):
        return cls(user_id=user.pk, hostel_id=user.hostel_id, role=user.role)

    @property
    def is_admin(self):
        from .models import User
        return self.role == User.Role.ADMIN
