import uuid
from unittest.mock import patch

from django.test import TestCase

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
from library.services import DECISION_APPROVE, DECISION_REJECT, FollowGraphManager
from library.tests.helpers import make_edge, make_profile


class FollowGraphManagerTestCase(TestCase):

    def setUp(self):
        self.service = FollowGraphManager()
        self.alice = make_profile(username="alice")
        self.bob = make_profile(username="bob")
        self.cara = make_profile(username="cara")

    # ---------- request ----------

    def test_request_creates_pending_edge(self):
        edge = self.service.request_follow(self.alice.id, self.bob.id)
        self.assertEqual(edge.status, FollowEdge.STATUS_PENDING)
        self.assertTrue(FollowEdge.objects.filter(follower=self.alice, followee=self.bob).exists())

    def test_request_requires_acting_user(self):
        with self.assertRaises(NotAuthenticated):
            self.service.request_follow(None, self.bob.id)

    def test_request_self_is_rejected(self):
        with self.assertRaises(SelfFollow):
            self.service.request_follow(self.alice.id, self.alice.id)

    def test_request_unknown_followee(self):
        with self.assertRaises(ProfileNotFound):
            self.service.request_follow(self.alice.id, uuid.uuid4())

    def test_request_conflicts_with_any_existing_edge(self):
        for status in (FollowEdge.STATUS_PENDING, FollowEdge.STATUS_APPROVED, FollowEdge.STATUS_REJECTED):
            FollowEdge.objects.all().delete()
            make_edge(self.alice, self.bob, status=status)
            with self.subTest(status=status):
                with self.assertRaises(DuplicateFollowEdge):
                    self.service.request_follow(self.alice.id, self.bob.id)
                self.assertEqual(FollowEdge.objects.get().status, status)

    def test_retried_request_returns_same_conflict(self):
        self.service.request_follow(self.alice.id, self.bob.id)
        with self.assertRaises(DuplicateFollowEdge):
            self.service.request_follow(self.alice.id, self.bob.id)
        self.assertEqual(FollowEdge.objects.count(), 1)

    def test_insert_race_maps_to_conflict(self):
        make_edge(self.alice, self.bob)
        with patch.object(self.service.edges, "find", return_value=None):
            with self.assertRaises(DuplicateFollowEdge):
                self.service.request_follow(self.alice.id, self.bob.id)
        self.assertEqual(FollowEdge.objects.count(), 1)

    def test_re_request_after_removal(self):
        make_edge(self.alice, self.bob, status=FollowEdge.STATUS_REJECTED)
        self.service.remove_edge(self.alice.id, self.alice.id, self.bob.id)
        edge = self.service.request_follow(self.alice.id, self.bob.id)
        self.assertEqual(edge.status, FollowEdge.STATUS_PENDING)

    # ---------- respond ----------

    def test_approve_pending(self):
        make_edge(self.alice, self.bob)
        edge = self.service.respond_follow(self.bob.id, self.alice.id, DECISION_APPROVE)
        self.assertEqual(edge.status, FollowEdge.STATUS_APPROVED)
        self.assertEqual(FollowEdge.objects.get().status, FollowEdge.STATUS_APPROVED)

    def test_reject_pending(self):
        make_edge(self.alice, self.bob)
        self.service.respond_follow(self.bob.id, self.alice.id, DECISION_REJECT)
        self.assertEqual(FollowEdge.objects.get().status, FollowEdge.STATUS_REJECTED)

    def test_decision_is_case_insensitive(self):
        make_edge(self.alice, self.bob)
        self.service.respond_follow(self.bob.id, self.alice.id, " Approve ")
        self.assertEqual(FollowEdge.objects.get().status, FollowEdge.STATUS_APPROVED)

    def test_only_followee_can_respond(self):
        make_edge(self.alice, self.bob)
        # The follower addressing the edge from the wrong side finds nothing.
        with self.assertRaises(EdgeNotFound):
            self.service.respond_follow(self.alice.id, self.bob.id, DECISION_APPROVE)
        with self.assertRaises(EdgeNotFound):
            self.service.respond_follow(self.cara.id, self.alice.id, DECISION_APPROVE)
        self.assertEqual(FollowEdge.objects.get().status, FollowEdge.STATUS_PENDING)

    def test_respond_invalid_decision(self):
        make_edge(self.alice, self.bob)
        with self.assertRaises(InvalidDecision):
            self.service.respond_follow(self.bob.id, self.alice.id, "maybe")

    def test_respond_requires_acting_user(self):
        with self.assertRaises(NotAuthenticated):
            self.service.respond_follow(None, self.alice.id, DECISION_APPROVE)

    def test_retried_approve_is_noop(self):
        make_edge(self.alice, self.bob)
        self.service.respond_follow(self.bob.id, self.alice.id, DECISION_APPROVE)
        edge = self.service.respond_follow(self.bob.id, self.alice.id, DECISION_APPROVE)
        self.assertEqual(edge.status, FollowEdge.STATUS_APPROVED)

    def test_cannot_flip_answered_request(self):
        make_edge(self.alice, self.bob, status=FollowEdge.STATUS_REJECTED)
        with self.assertRaises(InvalidTransition):
            self.service.respond_follow(self.bob.id, self.alice.id, DECISION_APPROVE)
        self.assertEqual(FollowEdge.objects.get().status, FollowEdge.STATUS_REJECTED)

    # ---------- remove ----------

    def test_either_participant_can_remove(self):
        for requester in (self.alice, self.bob):
            make_edge(self.alice, self.bob, status=FollowEdge.STATUS_APPROVED)
            with self.subTest(requester=requester.username):
                self.assertTrue(self.service.remove_edge(requester.id, self.alice.id, self.bob.id))
                self.assertFalse(FollowEdge.objects.exists())

    def test_outsider_cannot_remove(self):
        make_edge(self.alice, self.bob)
        with self.assertRaises(NotOwner):
            self.service.remove_edge(self.cara.id, self.alice.id, self.bob.id)
        self.assertTrue(FollowEdge.objects.exists())

    def test_outsider_gets_same_error_when_edge_absent(self):
        with self.assertRaises(NotOwner):
            self.service.remove_edge(self.cara.id, self.alice.id, self.bob.id)

    def test_retried_remove_is_noop(self):
        make_edge(self.alice, self.bob)
        self.assertTrue(self.service.remove_edge(self.alice.id, self.alice.id, self.bob.id))
        self.assertFalse(self.service.remove_edge(self.alice.id, self.alice.id, self.bob.id))

    # ---------- reads ----------

    def test_edge_status_for_participants_only(self):
        self.assertIsNone(self.service.edge_status(self.alice.id, self.alice.id, self.bob.id))
        make_edge(self.alice, self.bob)
        self.assertEqual(self.service.edge_status(self.bob.id, self.alice.id, self.bob.id), "pending")
        with self.assertRaises(NotOwner):
            self.service.edge_status(self.cara.id, self.alice.id, self.bob.id)

    def test_pending_requests_lists_incoming(self):
        make_edge(self.alice, self.cara)
        make_edge(self.bob, self.cara, status=FollowEdge.STATUS_APPROVED)
        pending = self.service.pending_requests(self.cara.id)
        self.assertEqual([e.follower for e in pending], [self.alice])
