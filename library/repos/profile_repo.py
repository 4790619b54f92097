"""Repository helpers for profile lookups."""

from typing import Optional

from django.utils import timezone

from library.db_accessor import DB_Accessor
from library.models import Profile


class ProfileRepo(DB_Accessor):
    """Repository for profile queries."""
    def __init__(self) -> None:
        """Initialise with the Profile model."""
        super().__init__(Profile)

    def get_by_id(self, profile_id) -> Optional[Profile]:
        """Return a profile by id, or None."""
        return self.first(id=profile_id)

    def get_by_username(self, username: str) -> Optional[Profile]:
        """Return the profile currently holding username, or None."""
        return self.first(username=username)

    def lock_by_id(self, profile_id) -> Optional[Profile]:
        """Return the profile row locked for update; call inside an atomic block."""
        return self.model.objects.select_for_update().filter(id=profile_id).first()

    def username_in_use(self, username: str) -> bool:
        """Return True if some profile currently holds username."""
        return self.exists(username=username)

    def visibility_of(self, profile_id) -> Optional[str]:
        """Return the stored visibility flag for a profile, or None if missing."""
        return self.query(id=profile_id).values_list("visibility", flat=True).first()

    def set_username(self, profile_id, username: str) -> int:
        """Store a new username; raises IntegrityError when someone else holds it."""
        return self.update({"id": profile_id}, username=username, updated_at=timezone.now())

    def set_visibility(self, profile_id, visibility: str) -> int:
        """Store a new visibility flag."""
        return self.update({"id": profile_id}, visibility=visibility, updated_at=timezone.now())
