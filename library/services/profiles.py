"""Service helpers for creating profiles and changing their visibility."""

import logging

from django.db import IntegrityError, transaction

from library.config import AccessPolicy
from library.errors import (
    InvalidVisibility,
    NotAuthenticated,
    NotOwner,
    ProfileNotFound,
    Taken,
)
from library.repos.profile_repo import ProfileRepo
from library.services.usernames import UsernameLifecycleManager

logger = logging.getLogger(__name__)


class ProfileService:
    """Account-creation hook and owner-only profile settings."""

    def __init__(self, policy=None, profiles=None, usernames=None):
        self.policy = policy or AccessPolicy.from_settings()
        self.profiles = profiles or ProfileRepo()
        self.usernames = usernames or UsernameLifecycleManager(policy=self.policy, profiles=self.profiles)

    def provision(self, user_id, username=None, display_name=None):
        """Return the profile for user_id, creating it on first sign-in."""
        existing = self.profiles.get_by_id(user_id)
        if existing is not None:
            return existing

        candidate = self.usernames.normalize(username)
        if not candidate or not self.usernames.check_availability(candidate):
            candidate = self.usernames.default_username(user_id)

        try:
            with transaction.atomic():
                profile = self.profiles.create(
                    id=user_id,
                    username=candidate,
                    display_name=(display_name or "").strip() or candidate,
                )
        except IntegrityError:
            existing = self.profiles.get_by_id(user_id)
            if existing is not None:
                return existing
            logger.warning("Provisioning %s lost the race for %r", user_id, candidate)
            raise Taken()

        logger.info("Provisioned profile %s as %r", user_id, candidate)
        return profile

    def set_visibility(self, acting_user_id, profile_id, visibility):
        """Change a profile's visibility; only its owner may do this."""
        if acting_user_id is None:
            raise NotAuthenticated()
        if acting_user_id != profile_id:
            raise NotOwner()
        if visibility not in self.policy.profile_visibilities:
            raise InvalidVisibility()
        if not self.profiles.set_visibility(profile_id, visibility):
            raise ProfileNotFound()
        logger.info("Profile %s visibility set to %s", profile_id, visibility)
        return self.profiles.get_by_id(profile_id)
