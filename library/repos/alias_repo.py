"""Repository helpers for username aliases."""

from typing import List, Optional

from library.db_accessor import DB_Accessor
from library.models import UsernameAlias


class AliasRepo(DB_Accessor):
    """Repository for historical usernames."""
    def __init__(self) -> None:
        """Initialise with the UsernameAlias model."""
        super().__init__(UsernameAlias)

    def get_by_old_username(self, old_username: str) -> Optional[UsernameAlias]:
        """Return the alias row for old_username, or None."""
        return self.first(old_username=old_username)

    def is_old_username(self, username: str) -> bool:
        """Return True if username was ever held and renamed away from."""
        return self.exists(old_username=username)

    def repoint_user(self, user_id, current_username: str) -> int:
        """Point every alias owned by user_id at current_username."""
        return self.update({"user_id": user_id}, current_username=current_username)

    def upsert(self, *, old_username: str, current_username: str, user_id) -> UsernameAlias:
        """Insert an alias, overwriting target fields when old_username already exists."""
        alias, _ = self.model.objects.update_or_create(
            old_username=old_username,
            defaults={"current_username": current_username, "user_id": user_id},
        )
        return alias

    def for_user(self, user_id) -> List[UsernameAlias]:
        """Aliases owned by user_id, oldest first."""
        return list(self.list(filters={"user_id": user_id}, order_by=("created_at", "old_username")))
