"""Historical username -> current username mapping used for redirects."""

from django.db import models


class UsernameAlias(models.Model):
    """
    A username someone used to hold.

    Every alias row of a user points at that user's newest username, so a
    redirect is a single lookup no matter how many renames happened.
    """
    old_username = models.CharField(max_length=64, primary_key=True)
    current_username = models.CharField(max_length=64, db_index=True)
    user = models.ForeignKey(
        "library.Profile",
        on_delete=models.CASCADE,
        related_name="username_aliases",
        db_column="user_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "username_alias"

    def __str__(self):
        return f"{self.old_username} -> {self.current_username}"
