from .profile import Profile
from .follow_edge import FollowEdge
from .catalog_item import CatalogItem
from .username_alias import UsernameAlias

__all__ = [
    "Profile",
    "FollowEdge",
    "CatalogItem",
    "UsernameAlias",
]
