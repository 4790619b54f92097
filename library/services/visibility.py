"""Read-only visibility decisions for profiles and catalog items."""

from django.db.models import Q

from library.config import (
    AccessPolicy,
    ITEM_FOLLOWERS_ONLY,
    ITEM_INHERIT,
    ITEM_PUBLIC,
    PROFILE_FOLLOWERS_ONLY,
    PROFILE_PUBLIC,
)
from library.repos.catalog_item_repo import CatalogItemRepo
from library.repos.follow_edge_repo import FollowEdgeRepo
from library.repos.profile_repo import ProfileRepo


class VisibilityResolver:
    """
    Decide whether a viewer may see a profile or a catalog item.

    Nothing here writes or caches; every answer comes from the rows as they are
    now. `viewer_id` is None for anonymous viewers.
    """

    def __init__(self, policy=None, follow_edges=None, profiles=None, items=None):
        self.policy = policy or AccessPolicy.from_settings()
        self.follow_edges = follow_edges or FollowEdgeRepo()
        self.profiles = profiles or ProfileRepo()
        self.items = items or CatalogItemRepo()

    def is_approved_follower(self, viewer_id, target_id):
        if viewer_id is None or target_id is None:
            return False
        return self.follow_edges.is_approved(follower_id=viewer_id, followee_id=target_id)

    def profile_visibility(self, value):
        """Stored profile visibility, with anything unrecognised read as followers-only."""
        if value in self.policy.profile_visibilities:
            return value
        return PROFILE_FOLLOWERS_ONLY

    def item_visibility(self, value):
        """Stored item visibility, or None when the value is unrecognised."""
        if value in self.policy.item_visibilities:
            return value
        return None

    def raw_profile_is_public(self, owner_id):
        """Only the profile's own flag; public items do not count here."""
        return self.profile_visibility(self.profiles.visibility_of(owner_id)) == PROFILE_PUBLIC

    def can_view_profile(self, viewer_id, target):
        if target is None:
            return False
        if viewer_id is not None and viewer_id == target.id:
            return True
        if self.profile_visibility(target.visibility) == PROFILE_PUBLIC:
            return True
        if self.is_approved_follower(viewer_id, target.id):
            return True
        # A single public item makes its owner's profile minimally viewable.
        # An inherit item is only effectively public when the profile already
        # is, so checking explicit public items is enough.
        return self.items.owner_has_public_items(target.id)

    def can_view_catalog_item(self, viewer_id, item):
        if item is None:
            return False
        owner_id = item.owner_id
        if viewer_id is not None and viewer_id == owner_id:
            return True

        visibility = self.item_visibility(item.visibility)
        if visibility == ITEM_PUBLIC:
            return True
        if visibility == ITEM_FOLLOWERS_ONLY:
            return self.is_approved_follower(viewer_id, owner_id)
        if visibility == ITEM_INHERIT and self.raw_profile_is_public(owner_id):
            return True
        # inherit on a non-public profile, or an unknown value
        return self.is_approved_follower(viewer_id, owner_id)

    def filter_visible_items(self, queryset, viewer_id):
        """Restrict a CatalogItem queryset to what can_view_catalog_item allows."""
        allowed = Q(visibility=ITEM_PUBLIC) | Q(
            visibility=ITEM_INHERIT, owner__visibility=PROFILE_PUBLIC
        )
        if viewer_id is None:
            return queryset.filter(allowed)

        # An approved follower passes every non-public branch, so one
        # subquery covers followers_only, inherit and unknown values.
        followed = Q(owner_id__in=self.follow_edges.approved_followee_ids(viewer_id))
        return queryset.filter(allowed | Q(owner_id=viewer_id) | followed)
