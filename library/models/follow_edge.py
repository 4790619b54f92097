"""Model capturing a directed follow relationship and its approval state."""

from django.db import models
from django.db.models import Q, F

from library.utils.uuid import uuid7_or_4


class FollowEdge(models.Model):
    """Follow request from `follower` to `followee`, answered by the followee."""
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)
    follower = models.ForeignKey(
        "library.Profile",
        on_delete=models.CASCADE,
        related_name="following_edges",   # profile.following_edges -> outbound
        db_column="follower_id",
    )
    followee = models.ForeignKey(
        "library.Profile",
        on_delete=models.CASCADE,
        related_name="follower_edges",    # profile.follower_edges -> inbound
        db_column="followee_id",
    )
    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """One edge per ordered pair, never self-referencing."""
        db_table = "follow_edge"
        constraints = [
            models.UniqueConstraint(
                fields=["follower", "followee"],
                name="uniq_follow_edge_follower_followee",
            ),
            models.CheckConstraint(
                condition=~Q(follower=F("followee")),
                name="chk_follow_edge_not_self",
            ),
        ]
        indexes = [
            models.Index(fields=["followee", "status"], name="follow_edge_followee_stat_idx"),
        ]

    def __str__(self) -> str:
        return f"FollowEdge({self.follower_id} -> {self.followee_id}, {self.status})"
