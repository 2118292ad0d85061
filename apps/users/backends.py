"""
Authentication backend accepting either a username or an email address.
"""

import logging

from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)

User = get_user_model()


class EmailOrUsernameBackend(ModelBackend):
    """
    Authenticate with a username or email plus password.

    Enrollment generates ``<username>@<domain>`` emails, so either credential
    identifies a student.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        login_credential = username or kwargs.get('email')
        if not login_credential or password is None:
            return None

        user = User.objects.filter(username=login_credential).first()
        if user is None:
            # Emails are not unique; only an unambiguous match may log in
            matches = list(User.objects.filter(email__iexact=login_credential)[:2])
            user = matches[0] if len(matches) == 1 else None

        if user is None:
            # Run the default password hasher once to reduce timing
            # differences between an existing and non-existing user
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        logger.info(f"Failed login attempt for {login_credential}")
        return None
