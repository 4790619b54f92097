"""Typed errors raised by the access-control services.

Every error carries a stable machine ``code`` that callers can surface to the
user. Validation and conflict errors describe what to correct; authorization
and not-found errors never say whether the addressed record exists.
"""


class AccessControlError(Exception):
    """Base class for every error raised by the library services."""

    code = "access_error"
    default_message = "Request could not be completed."

    def __init__(self, message=None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def to_dict(self):
        """Return a serialisable ``{"code", "message"}`` payload."""
        return {"code": self.code, "message": self.message}


class ValidationError(AccessControlError):
    code = "validation_error"
    default_message = "Invalid input."


class ConflictError(AccessControlError):
    code = "conflict"
    default_message = "Request conflicts with the current state."


class AuthorizationError(AccessControlError):
    code = "not_authorized"
    default_message = "Not allowed."


class NotFoundError(AccessControlError):
    code = "not_found"
    default_message = "Not found."


class InvalidFormat(ValidationError):
    code = "invalid_username"
    default_message = "Username is invalid."


class Reserved(ValidationError):
    code = "reserved_username"
    default_message = "That username is reserved."


class SelfFollow(ValidationError):
    code = "self_follow"
    default_message = "You cannot follow yourself."


class InvalidDecision(ValidationError):
    code = "invalid_decision"
    default_message = "Decision must be 'approve' or 'reject'."


class InvalidVisibility(ValidationError):
    code = "invalid_visibility"
    default_message = "Unknown visibility value."


class Taken(ConflictError):
    code = "username_taken"
    default_message = "That username is already taken (or previously used)."


class DuplicateFollowEdge(ConflictError):
    code = "duplicate_follow"
    default_message = "A follow request already exists."


class InvalidTransition(ConflictError):
    code = "invalid_transition"
    default_message = "Follow request has already been answered."


class NotAuthenticated(AuthorizationError):
    code = "not_authenticated"
    default_message = "Sign in required."


class NotOwner(AuthorizationError):
    code = "not_owner"
    default_message = "Not allowed."


class ProfileNotFound(NotFoundError):
    code = "profile_not_found"
    default_message = "Profile not found."


class EdgeNotFound(NotFoundError):
    code = "follow_not_found"
    default_message = "Follow request not found."


class UsernameNotFound(NotFoundError):
    code = "username_not_found"
    default_message = "Username not found."
