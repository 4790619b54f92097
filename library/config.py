"""Immutable policy configuration for the access-control services.

Services take an ``AccessPolicy`` at construction time so tests can swap the
reserved-word list or the visibility vocabularies without touching settings.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet

from django.conf import settings

DEFAULT_RESERVED_USERNAMES = frozenset({
    # app routes / common paths
    "app", "api", "u", "b", "books", "setup", "settings",
    # auth
    "auth", "login", "logout", "signup", "signin",
    # infra
    "www", "admin", "root", "support", "help",
})

PROFILE_FOLLOWERS_ONLY = "followers_only"
PROFILE_PUBLIC = "public"

ITEM_INHERIT = "inherit"
ITEM_FOLLOWERS_ONLY = "followers_only"
ITEM_PUBLIC = "public"

# Allowed username characters; length and underscore placement are checked
# by UsernameLifecycleManager.
USERNAME_CHARSET = r"[a-z0-9_]+"


@dataclass(frozen=True)
class AccessPolicy:
    """Reserved usernames, username bounds and the visibility vocabularies."""

    reserved_usernames: FrozenSet[str] = DEFAULT_RESERVED_USERNAMES
    username_min_length: int = 3
    username_max_length: int = 24
    default_username_prefix: str = "user_"
    profile_visibilities: FrozenSet[str] = field(
        default_factory=lambda: frozenset({PROFILE_FOLLOWERS_ONLY, PROFILE_PUBLIC})
    )
    item_visibilities: FrozenSet[str] = field(
        default_factory=lambda: frozenset({ITEM_INHERIT, ITEM_FOLLOWERS_ONLY, ITEM_PUBLIC})
    )

    _SETTINGS_KEYS = {
        "RESERVED_USERNAMES": "reserved_usernames",
        "USERNAME_MIN_LENGTH": "username_min_length",
        "USERNAME_MAX_LENGTH": "username_max_length",
        "DEFAULT_USERNAME_PREFIX": "default_username_prefix",
    }

    def __post_init__(self):
        # Accept any iterable of words but always store a normalised
        # frozenset. A bare string would be split into characters.
        if isinstance(self.reserved_usernames, str):
            raise ValueError("reserved_usernames must be a collection of words, not a string")
        reserved = frozenset(w.strip().lower() for w in self.reserved_usernames)
        object.__setattr__(self, "reserved_usernames", reserved)
        if self.username_min_length < 1 or self.username_max_length < self.username_min_length:
            raise ValueError(
                f"Invalid username bounds {self.username_min_length}-{self.username_max_length}"
            )

    @classmethod
    def from_settings(cls):
        """Build a policy from ``settings.LIBRARY_ACCESS_POLICY`` overrides."""
        overrides = getattr(settings, "LIBRARY_ACCESS_POLICY", None) or {}
        unknown = set(overrides) - set(cls._SETTINGS_KEYS)
        if unknown:
            raise ValueError(f"Unknown LIBRARY_ACCESS_POLICY keys: {sorted(unknown)}")
        kwargs = {cls._SETTINGS_KEYS[key]: value for key, value in overrides.items()}
        return cls(**kwargs)

    def with_reserved(self, *words):
        """Return a copy of this policy with extra reserved usernames."""
        return replace(self, reserved_usernames=self.reserved_usernames | frozenset(words))
