"""Repository helpers for follow edges."""

from typing import Optional

from django.db.models import QuerySet

from library.db_accessor import DB_Accessor
from library.models import FollowEdge


class FollowEdgeRepo(DB_Accessor):
    """Repository wrapper for follow edges keyed by (follower, followee)."""
    def __init__(self) -> None:
        """Initialise with the FollowEdge model."""
        super().__init__(FollowEdge)

    def find(self, *, follower_id, followee_id) -> Optional[FollowEdge]:
        """Return the edge for the ordered pair, or None."""
        return self.first(follower_id=follower_id, followee_id=followee_id)

    def lock(self, *, follower_id, followee_id) -> Optional[FollowEdge]:
        """Return the edge locked for update; call inside an atomic block."""
        return (
            self.model.objects.select_for_update()
            .filter(follower_id=follower_id, followee_id=followee_id)
            .first()
        )

    def is_approved(self, *, follower_id, followee_id) -> bool:
        """Return True if follower_id is an approved follower of followee_id."""
        return self.exists(
            follower_id=follower_id,
            followee_id=followee_id,
            status=FollowEdge.STATUS_APPROVED,
        )

    def approved_followee_ids(self, follower_id) -> QuerySet:
        """Subquery of profile ids that follower_id may see as an approved follower."""
        return self.query(
            follower_id=follower_id, status=FollowEdge.STATUS_APPROVED
        ).values("followee_id")

    def create_pending(self, *, follower_id, followee_id) -> FollowEdge:
        """Insert a pending edge; raises IntegrityError on a duplicate pair."""
        return self.create(
            follower_id=follower_id,
            followee_id=followee_id,
            status=FollowEdge.STATUS_PENDING,
        )

    def pending_for(self, followee_id) -> QuerySet:
        """Incoming pending requests for followee_id, oldest first."""
        return self.list(
            filters={"followee_id": followee_id, "status": FollowEdge.STATUS_PENDING},
            order_by=("created_at", "id"),
        ).select_related("follower")

    def set_status(self, edge: FollowEdge, status: str) -> FollowEdge:
        """Store a new status on a locked edge and return it."""
        edge.status = status
        edge.save(update_fields=["status", "updated_at"])
        return edge

    def remove(self, *, follower_id, followee_id) -> int:
        """Delete the edge for the ordered pair; return rows removed."""
        return self.delete(follower_id=follower_id, followee_id=followee_id)
