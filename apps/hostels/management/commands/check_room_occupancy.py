"""
Report rooms whose occupancy flag disagrees with the allotment ledger.
"""

import logging

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Exists, OuterRef

from apps.hostels.models import Room, RoomAllotment

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Check that every room is occupied exactly when it has an active allotment'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Reset the occupancy flag of inconsistent rooms from the ledger'
        )
        parser.add_argument(
            '--hostel',
            type=str,
            help='Only check rooms of the hostel with this code'
        )

    def handle(self, *args, **options):
        rooms = Room.objects.annotate(
            has_active_allotment=Exists(
                RoomAllotment.objects.filter(room=OuterRef('pk'), is_active=True)
            )
        ).select_related('hostel')

        if options.get('hostel'):
            rooms = rooms.filter(hostel__code__iexact=options['hostel'])

        mismatched = [room for room in rooms if room.is_occupied != room.has_active_allotment]

        if not mismatched:
            self.stdout.write(self.style.SUCCESS('All rooms are consistent with the allotment ledger'))
            return

        for room in mismatched:
            self.stdout.write(
                self.style.WARNING(
                    f'{room}: is_occupied={room.is_occupied}, active allotment={room.has_active_allotment}'
                )
            )

        if not options['fix']:
            self.stdout.write(self.style.ERROR(f'{len(mismatched)} inconsistent rooms found'))
            return

        with transaction.atomic():
            for room in mismatched:
                room.is_occupied = room.has_active_allotment
                room.save(update_fields=['is_occupied', 'updated_at'])
                logger.warning(f"Occupancy flag of room {room.pk} reset to {room.is_occupied}")

        self.stdout.write(self.style.SUCCESS(f'Fixed {len(mismatched)} rooms'))
