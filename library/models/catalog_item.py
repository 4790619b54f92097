"""A book in someone's catalog, with its own visibility setting."""

from django.db import models

from library.config import ITEM_FOLLOWERS_ONLY, ITEM_INHERIT, ITEM_PUBLIC
from library.utils.uuid import uuid7_or_4


class CatalogItem(models.Model):
    """
    Catalog entry owned by a profile.

    `inherit` means "whatever the owner's profile visibility is right now";
    it is resolved at read time, never copied onto the row.
    """
    VISIBILITY_INHERIT = ITEM_INHERIT
    VISIBILITY_FOLLOWERS_ONLY = ITEM_FOLLOWERS_ONLY
    VISIBILITY_PUBLIC = ITEM_PUBLIC

    VISIBILITY_CHOICES = [
        (VISIBILITY_INHERIT, "Same as profile"),
        (VISIBILITY_FOLLOWERS_ONLY, "Followers only"),
        (VISIBILITY_PUBLIC, "Public"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)
    owner = models.ForeignKey(
        "library.Profile",
        on_delete=models.CASCADE,
        related_name="catalog_items",
        db_column="owner_id",
    )
    title = models.CharField(max_length=255, blank=True, default="")
    visibility = models.CharField(
        max_length=20,
        choices=VISIBILITY_CHOICES,
        default=VISIBILITY_INHERIT,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "catalog_item"
        indexes = [
            models.Index(fields=["owner", "visibility"], name="catalog_item_owner_vis_idx"),
        ]

    def __str__(self):
        return self.title or str(self.id)
