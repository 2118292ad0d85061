# apps/analytics/services.py
"""
Aggregate counts for the warden and administrator dashboards.
"""

from datetime import timedelta

from django.conf import settings
from django.db.models import Count, Q
from django.utils import timezone

from apps.attendance.models import Leave
from apps.attendance.serializers import LeaveSerializer
from apps.hostels.models import Hostel, Room, RoomAllotment
from apps.support.models import Complaint
from apps.support.serializers import ComplaintSerializer
from apps.users.models import User

RECENT_ACTIVITY_LIMIT = 5


def _room_counts(rooms):
    counts = rooms.aggregate(
        total=Count('id'),
        occupied=Count('id', filter=Q(is_occupied=True))
    )
    counts['available'] = counts['total'] - counts['occupied']
    return counts


def warden_dashboard_stats(ctx):
    """
    Occupancy and pending work of the caller's hostel, plus the latest leave
    requests and complaints raised within the recent-activity window.
    """
    since = timezone.now() - timedelta(days=settings.HOSTEL_RECENT_ACTIVITY_DAYS)
    rooms = _room_counts(Room.objects.active().for_hostel(ctx.hostel_id))

    leaves = Leave.objects.filter(student__hostel_id=ctx.hostel_id)
    complaints = Complaint.objects.for_hostel(ctx.hostel_id)

    recent_leaves = leaves.filter(created_at__gte=since).select_related(
        'student', 'approved_by'
    ).order_by('-created_at')[:RECENT_ACTIVITY_LIMIT]
    recent_complaints = complaints.filter(created_at__gte=since).select_related(
        'student', 'assigned_to'
    ).order_by('-created_at')[:RECENT_ACTIVITY_LIMIT]

    return {
        'total_students': User.objects.students_in_hostel(ctx.hostel_id).count(),
        'total_rooms': rooms['total'],
        'occupied_rooms': rooms['occupied'],
        'available_rooms': rooms['available'],
        'pending_leaves': leaves.filter(status=Leave.LeaveStatus.PENDING).count(),
        'open_complaints': complaints.open().count(),
        'recent_leaves': LeaveSerializer(recent_leaves, many=True).data,
        'recent_complaints': ComplaintSerializer(recent_complaints, many=True).data,
    }


def admin_dashboard_stats():
    """System-wide counts across every hostel."""
    rooms = _room_counts(Room.objects.active())
    users = User.objects.filter(is_active=True).values('role').annotate(count=Count('id'))

    return {
        'total_hostels': Hostel.objects.filter(is_active=True).count(),
        'total_users': sum(row['count'] for row in users),
        'users_by_role': {row['role']: row['count'] for row in users},
        'total_rooms': rooms['total'],
        'occupied_rooms': rooms['occupied'],
        'available_rooms': rooms['available'],
        'active_allotments': RoomAllotment.objects.active().count(),
    }
