from .visibility import VisibilityResolver
from .follow_graph import FollowGraphManager, DECISION_APPROVE, DECISION_REJECT
from .usernames import UsernameLifecycleManager, RenameResult, RedirectResolution
from .profiles import ProfileService
from .access_control import AccessControlFacade

__all__ = [
    "VisibilityResolver",
    "FollowGraphManager",
    "DECISION_APPROVE",
    "DECISION_REJECT",
    "UsernameLifecycleManager",
    "RenameResult",
    "RedirectResolution",
    "ProfileService",
    "AccessControlFacade",
]
