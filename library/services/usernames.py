"""Username validation, availability, rename and redirect resolution.

A username maps to exactly one profile. Once a name has been held it is never
handed to anyone else: it stays in the alias table and redirects to whatever
its last holder is called now.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from django.db import IntegrityError, transaction

from library.config import USERNAME_CHARSET, AccessPolicy
from library.errors import (
    InvalidFormat,
    NotAuthenticated,
    ProfileNotFound,
    Reserved,
    Taken,
    UsernameNotFound,
)
from library.repos.alias_repo import AliasRepo
from library.repos.profile_repo import ProfileRepo
from library.utils.uuid import as_uuid

logger = logging.getLogger(__name__)

_USERNAME_CHARS = re.compile(USERNAME_CHARSET)


@dataclass(frozen=True)
class RenameResult:
    old: str
    new: str
    changed: bool

    def to_dict(self):
        return {"ok": True, "old": self.old, "new": self.new, "changed": self.changed}


@dataclass(frozen=True)
class RedirectResolution:
    """Outcome of looking up a requested username.

    `canonical` means a profile holds the name now. Otherwise `redirect_to`
    is the name the caller should permanently redirect to.
    """
    username: str
    canonical: bool
    redirect_to: Optional[str] = None

    @property
    def is_redirect(self):
        return not self.canonical


class UsernameLifecycleManager:
    """Keep the username -> profile mapping unique and every old name redirecting."""

    def __init__(self, policy=None, profiles=None, aliases=None):
        self.policy = policy or AccessPolicy.from_settings()
        self.profiles = profiles or ProfileRepo()
        self.aliases = aliases or AliasRepo()

    @staticmethod
    def normalize(raw):
        if raw is None:
            return ""
        return str(raw).strip().lower()

    def is_valid(self, normalized):
        if not (self.policy.username_min_length <= len(normalized) <= self.policy.username_max_length):
            return False
        if not _USERNAME_CHARS.fullmatch(normalized):
            return False
        return not (normalized.startswith("_") or normalized.endswith("_"))

    def validate(self, normalized):
        if not self.is_valid(normalized):
            raise InvalidFormat(
                f"Username must be {self.policy.username_min_length}-"
                f"{self.policy.username_max_length} characters of a-z, 0-9 or _, "
                "and cannot start or end with _."
            )

    def is_reserved(self, normalized):
        return normalized in self.policy.reserved_usernames

    def _is_unclaimed(self, normalized):
        return not (
            self.profiles.username_in_use(normalized)
            or self.aliases.is_old_username(normalized)
        )

    def check_availability(self, raw):
        """Advisory, read-only check for live-typing feedback."""
        normalized = self.normalize(raw)
        if not self.is_valid(normalized) or self.is_reserved(normalized):
            return False
        return self._is_unclaimed(normalized)

    def default_username(self, user_id):
        """Generated handle given to new accounts, e.g. ``user_1a2b3c4d``."""
        return f"{self.policy.default_username_prefix}{as_uuid(user_id).hex[:8]}"

    def rename(self, acting_user_id, raw):
        """
        Change the acting user's username in one transaction.

        The availability check is repeated under the row lock, and the unique
        index on profile.username is the final arbiter: of two renames racing
        for one name, the one whose UPDATE hits the constraint gets Taken.
        """
        if acting_user_id is None:
            raise NotAuthenticated()

        normalized = self.normalize(raw)
        self.validate(normalized)
        if self.is_reserved(normalized):
            raise Reserved()

        try:
            with transaction.atomic():
                profile = self.profiles.lock_by_id(acting_user_id)
                if profile is None:
                    raise ProfileNotFound()
                previous = profile.username
                if normalized == previous:
                    return RenameResult(old=previous, new=normalized, changed=False)

                if not self._is_unclaimed(normalized):
                    raise Taken()

                self.profiles.set_username(acting_user_id, normalized)
                self.aliases.repoint_user(acting_user_id, normalized)
                self.aliases.upsert(
                    old_username=previous,
                    current_username=normalized,
                    user_id=acting_user_id,
                )
                # Someone may have renamed away from this name and committed
                # while we waited on the unique index.
                if self.aliases.is_old_username(normalized):
                    raise Taken()
        except IntegrityError:
            logger.warning("Rename of %s to %r lost the race for the name", acting_user_id, normalized)
            raise Taken()

        logger.info("Renamed %s: %r -> %r", acting_user_id, previous, normalized)
        return RenameResult(old=previous, new=normalized, changed=True)

    def resolve_redirect(self, requested):
        """Canonical, permanent redirect, or UsernameNotFound."""
        normalized = self.normalize(requested)
        if normalized and self.profiles.username_in_use(normalized):
            return RedirectResolution(username=normalized, canonical=True)
        alias = self.aliases.get_by_old_username(normalized) if normalized else None
        if alias is not None:
            return RedirectResolution(
                username=normalized,
                canonical=False,
                redirect_to=alias.current_username,
            )
        raise UsernameNotFound()

    def aliases_for(self, user_id):
        """Usernames user_id has held before, oldest first."""
        return self.aliases.for_user(user_id)
