import uuid

from library.models import CatalogItem, FollowEdge, Profile, UsernameAlias


def make_profile(**kwargs):
    """Create a profile; username and id default to something unique."""
    profile_id = kwargs.pop("id", None) or uuid.uuid4()
    username = kwargs.pop("username", None) or f"user_{profile_id.hex[:8]}"
    return Profile.objects.create(
        id=profile_id,
        username=username,
        display_name=kwargs.pop("display_name", username),
        visibility=kwargs.pop("visibility", Profile.VISIBILITY_FOLLOWERS_ONLY),
        **kwargs,
    )


def make_item(owner, *, visibility=CatalogItem.VISIBILITY_INHERIT, title="Dune", **extra):
    """Create a catalog item for owner."""
    return CatalogItem.objects.create(owner=owner, title=title, visibility=visibility, **extra)


def make_edge(follower, followee, status=FollowEdge.STATUS_PENDING):
    """Create a follow edge directly, bypassing the follow service."""
    return FollowEdge.objects.create(follower=follower, followee=followee, status=status)


def approve(follower, followee):
    return make_edge(follower, followee, status=FollowEdge.STATUS_APPROVED)


def make_alias(user, old_username, current_username=None):
    return UsernameAlias.objects.create(
        old_username=old_username,
        current_username=current_username or user.username,
        user=user,
    )
