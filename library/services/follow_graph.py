"""Follow request lifecycle: request, approve/reject, remove."""

import logging

from django.db import IntegrityError, transaction

from library.errors import (
    DuplicateFollowEdge,
    EdgeNotFound,
    InvalidDecision,
    InvalidTransition,
    NotAuthenticated,
    NotOwner,
    ProfileNotFound,
    SelfFollow,
)
from library.models import FollowEdge
from library.repos.follow_edge_repo import FollowEdgeRepo
from library.repos.profile_repo import ProfileRepo

logger = logging.getLogger(__name__)

DECISION_APPROVE = "approve"
DECISION_REJECT = "reject"

_DECISION_STATUS = {
    DECISION_APPROVE: FollowEdge.STATUS_APPROVED,
    DECISION_REJECT: FollowEdge.STATUS_REJECTED,
}


class FollowGraphManager:
    """
    State machine for one directed edge per ordered pair of profiles.

        absent -> pending -> approved | rejected -> (deleted) absent

    Every transition reads the current row before writing, so a retried call
    either does nothing or raises the same error as the first attempt.
    """

    def __init__(self, edges=None, profiles=None):
        self.edges = edges or FollowEdgeRepo()
        self.profiles = profiles or ProfileRepo()

    def request_follow(self, follower_id, followee_id):
        """Create a pending edge follower -> followee."""
        if follower_id is None:
            raise NotAuthenticated()
        if follower_id == followee_id:
            raise SelfFollow()
        if not self.profiles.exists(id=follower_id) or not self.profiles.exists(id=followee_id):
            raise ProfileNotFound()
        if self.edges.find(follower_id=follower_id, followee_id=followee_id) is not None:
            raise DuplicateFollowEdge()

        try:
            with transaction.atomic():
                edge = self.edges.create_pending(follower_id=follower_id, followee_id=followee_id)
        except IntegrityError:
            logger.warning(
                "Follow request %s -> %s lost the insert race", follower_id, followee_id
            )
            raise DuplicateFollowEdge()

        logger.info("Follow requested %s -> %s", follower_id, followee_id)
        return edge

    def respond_follow(self, followee_id, follower_id, decision):
        """Approve or reject a pending request addressed to followee_id."""
        if followee_id is None:
            raise NotAuthenticated()
        key = decision.strip().lower() if isinstance(decision, str) else decision
        target_status = _DECISION_STATUS.get(key)
        if target_status is None:
            raise InvalidDecision()

        with transaction.atomic():
            edge = self.edges.lock(follower_id=follower_id, followee_id=followee_id)
            if edge is None:
                raise EdgeNotFound()
            if edge.status == target_status:
                return edge
            if edge.status != FollowEdge.STATUS_PENDING:
                raise InvalidTransition()
            self.edges.set_status(edge, target_status)

        logger.info("Follow %s -> %s marked %s", follower_id, followee_id, target_status)
        return edge

    def remove_edge(self, requester_id, follower_id, followee_id):
        """Delete the edge from any state; True if a row was removed."""
        if requester_id is None:
            raise NotAuthenticated()
        if requester_id not in (follower_id, followee_id):
            raise NotOwner()
        removed = self.edges.remove(follower_id=follower_id, followee_id=followee_id)
        if removed:
            logger.info("Follow %s -> %s removed by %s", follower_id, followee_id, requester_id)
        return bool(removed)

    def edge_status(self, viewer_id, follower_id, followee_id):
        """Status of the edge between two profiles, readable by its participants only."""
        if viewer_id is None:
            raise NotAuthenticated()
        if viewer_id not in (follower_id, followee_id):
            raise NotOwner()
        edge = self.edges.find(follower_id=follower_id, followee_id=followee_id)
        return edge.status if edge else None

    def pending_requests(self, followee_id):
        """Incoming pending requests for followee_id, oldest first."""
        if followee_id is None:
            raise NotAuthenticated()
        return list(self.edges.pending_for(followee_id))
