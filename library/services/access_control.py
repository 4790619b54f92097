"""The single entry point callers use for visibility checks, follows and usernames.

Profile and catalog read paths ask this facade before returning a record, and
treat a False answer exactly like a missing record. Follow edges and username
aliases are only ever read through the services composed here.
"""

from library.config import AccessPolicy
from library.errors import ProfileNotFound
from library.models import CatalogItem, Profile
from library.repos.alias_repo import AliasRepo
from library.repos.catalog_item_repo import CatalogItemRepo
from library.repos.follow_edge_repo import FollowEdgeRepo
from library.repos.profile_repo import ProfileRepo
from library.services.follow_graph import FollowGraphManager
from library.services.profiles import ProfileService
from library.services.usernames import UsernameLifecycleManager
from library.services.visibility import VisibilityResolver
from library.utils.uuid import as_uuid


def _record_id(value):
    """Accept a model instance or a bare id."""
    if isinstance(value, (Profile, CatalogItem)):
        return value.pk
    return as_uuid(value)


class AccessControlFacade:
    """Compose the resolver, follow graph and username manager behind one API."""

    def __init__(self, policy=None):
        self.policy = policy or AccessPolicy.from_settings()
        profiles = ProfileRepo()
        edges = FollowEdgeRepo()
        items = CatalogItemRepo()
        aliases = AliasRepo()

        self._profiles = profiles
        self._items = items
        self.resolver = VisibilityResolver(
            policy=self.policy, follow_edges=edges, profiles=profiles, items=items
        )
        self.follows = FollowGraphManager(edges=edges, profiles=profiles)
        self.usernames = UsernameLifecycleManager(
            policy=self.policy, profiles=profiles, aliases=aliases
        )
        self.profile_service = ProfileService(
            policy=self.policy, profiles=profiles, usernames=self.usernames
        )

    # -- visibility ---------------------------------------------------------

    def can_view_profile(self, viewer_id, target):
        """True if viewer_id (None for anonymous) may see the target profile."""
        # Always re-read the row: a caller's instance may be stale.
        profile = self._profiles.get_by_id(_record_id(target))
        return self.resolver.can_view_profile(as_uuid(viewer_id), profile)

    def can_view_catalog_item(self, viewer_id, item):
        """True if viewer_id (None for anonymous) may see the catalog item."""
        current = self._items.get_by_id(_record_id(item))
        return self.resolver.can_view_catalog_item(as_uuid(viewer_id), current)

    def visible_profile(self, viewer_id, username):
        """Profile holding username, or ProfileNotFound if missing or hidden."""
        profile = self._profiles.get_by_username(self.usernames.normalize(username))
        if not self.resolver.can_view_profile(as_uuid(viewer_id), profile):
            raise ProfileNotFound()
        return profile

    def visible_catalog_items(self, viewer_id, owner=None):
        """Queryset of catalog items the viewer may see, optionally for one owner."""
        qs = self._items.query() if owner is None else self._items.query(owner_id=_record_id(owner))
        return self.resolver.filter_visible_items(qs.select_related("owner"), as_uuid(viewer_id))

    # -- usernames ----------------------------------------------------------

    def resolve_redirect(self, requested_username):
        return self.usernames.resolve_redirect(requested_username)

    def rename(self, acting_user_id, new_username):
        return self.usernames.rename(as_uuid(acting_user_id), new_username)

    def check_availability(self, username):
        return self.usernames.check_availability(username)

    def username_aliases(self, acting_user_id):
        """The acting user's own previous usernames, oldest first."""
        return self.usernames.aliases_for(as_uuid(acting_user_id))

    # -- follow graph -------------------------------------------------------

    def request_follow(self, acting_user_id, followee_id):
        return self.follows.request_follow(as_uuid(acting_user_id), _record_id(followee_id))

    def respond_follow(self, acting_user_id, follower_id, decision):
        return self.follows.respond_follow(as_uuid(acting_user_id), _record_id(follower_id), decision)

    def remove_edge(self, acting_user_id, follower_id, followee_id):
        return self.follows.remove_edge(
            as_uuid(acting_user_id), _record_id(follower_id), _record_id(followee_id)
        )

    def follow_status(self, acting_user_id, follower_id, followee_id):
        return self.follows.edge_status(
            as_uuid(acting_user_id), _record_id(follower_id), _record_id(followee_id)
        )

    def pending_follow_requests(self, acting_user_id):
        return self.follows.pending_requests(as_uuid(acting_user_id))

    # -- profiles -----------------------------------------------------------

    def provision_profile(self, user_id, username=None, display_name=None):
        return self.profile_service.provision(as_uuid(user_id), username=username, display_name=display_name)

    def set_profile_visibility(self, acting_user_id, profile_id, visibility):
        return self.profile_service.set_visibility(
            as_uuid(acting_user_id), _record_id(profile_id), visibility
        )
