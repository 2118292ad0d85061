#!/usr/bin/env python
"""
Management command to create a hostel and, optionally, its warden account.
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils.crypto import get_random_string
from django.utils.translation import gettext_lazy as _

from apps.hostels.models import Hostel
from apps.users.models import User


class Command(BaseCommand):
    help = 'Create a new hostel with an optional warden account'

    def add_arguments(self, parser):
        parser.add_argument(
            'name',
            type=str,
            help='Name of the hostel'
        )
        parser.add_argument(
            'code',
            type=str,
            help='Unique code for the hostel'
        )
        parser.add_argument(
            '--city',
            type=str,
            default='',
            help='City of the hostel'
        )
        parser.add_argument(
            '--phone',
            type=str,
            default='',
            help='Phone number of the hostel'
        )
        parser.add_argument(
            '--warden-username',
            type=str,
            help='Username for the hostel warden (skipped when omitted)'
        )
        parser.add_argument(
            '--warden-password',
            type=str,
            help='Password for the warden (a random one is generated when omitted)'
        )

    def handle(self, *args, **options):
        name = options['name'].strip()
        code = options['code'].strip().upper()
        warden_username = options.get('warden_username')

        if not code.replace('_', '').replace('-', '').isalnum():
            raise CommandError(_('Hostel code can only contain letters, numbers, underscores, and hyphens'))

        if Hostel.objects.filter(code__iexact=code).exists():
            raise CommandError(_('Hostel with code "%s" already exists') % code)

        if warden_username and User.objects.filter(username=warden_username).exists():
            raise CommandError(_('User "%s" already exists') % warden_username)

        with transaction.atomic():
            hostel = Hostel.objects.create(
                name=name,
                code=code,
                city=options['city'],
                phone=options['phone'],
                is_active=True
            )
            self.stdout.write(
                self.style.SUCCESS(_('Successfully created hostel "%s" (%s)') % (hostel.name, hostel.code))
            )

            if warden_username:
                password = options.get('warden_password')
                if not password:
                    password = get_random_string(12)
                    self.stdout.write(
                        self.style.WARNING(_('Temporary password generated for warden: %s') % password)
                    )

                User.objects.create_user(
                    username=warden_username,
                    password=password,
                    role=User.Role.WARDEN,
                    hostel=hostel
                )
                self.stdout.write(
                    self.style.SUCCESS(_('Created warden "%s"') % warden_username)
                )
