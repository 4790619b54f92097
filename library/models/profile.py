"""Profile model: the public identity behind a library account."""

from django.core.validators import RegexValidator
from django.db import models

from library.config import PROFILE_FOLLOWERS_ONLY, PROFILE_PUBLIC, USERNAME_CHARSET


class Profile(models.Model):
    """
    One row per account, keyed by the id the identity provider issues.

    `username` is the canonical handle used in vanity URLs. It is only changed
    through UsernameLifecycleManager.rename so the alias table stays in step.
    """
    VISIBILITY_FOLLOWERS_ONLY = PROFILE_FOLLOWERS_ONLY
    VISIBILITY_PUBLIC = PROFILE_PUBLIC

    VISIBILITY_CHOICES = [
        (VISIBILITY_FOLLOWERS_ONLY, "Followers only"),
        (VISIBILITY_PUBLIC, "Public"),
    ]

    id = models.UUIDField(primary_key=True, editable=False)
    username = models.CharField(
        max_length=64,
        unique=True,
        validators=[RegexValidator(
            regex=rf"^{USERNAME_CHARSET}\Z",
            message="Username may only contain a-z, 0-9 and _",
        )],
    )
    display_name = models.CharField(max_length=100, blank=True, default="")
    bio = models.TextField(max_length=500, blank=True, default="")
    visibility = models.CharField(
        max_length=20,
        choices=VISIBILITY_CHOICES,
        default=VISIBILITY_FOLLOWERS_ONLY,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profile"
        ordering = ["username"]

    def __str__(self):
        return f"@{self.username}"
