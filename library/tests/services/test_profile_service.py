import uuid
from unittest.mock import patch

from django.test import TestCase

from library.config import AccessPolicy
from library.errors import InvalidVisibility, NotAuthenticated, NotOwner, ProfileNotFound
from library.models import Profile
from library.services import ProfileService
from library.tests.helpers import make_alias, make_profile


class ProfileServiceTestCase(TestCase):

    def setUp(self):
        self.service = ProfileService(policy=AccessPolicy())
        self.user_id = uuid.UUID("abcdef12-3456-4789-8abc-def012345678")

    def test_provision_uses_default_username(self):
        profile = self.service.provision(self.user_id)
        self.assertEqual(profile.username, "user_abcdef12")
        self.assertEqual(profile.display_name, "user_abcdef12")
        self.assertEqual(profile.visibility, Profile.VISIBILITY_FOLLOWERS_ONLY)

    def test_provision_uses_requested_username_when_available(self):
        profile = self.service.provision(self.user_id, username=" Reader ", display_name="A Reader")
        self.assertEqual(profile.username, "reader")
        self.assertEqual(profile.display_name, "A Reader")

    def test_provision_falls_back_when_requested_name_unusable(self):
        holder = make_profile(username="taken_name")
        make_alias(holder, "old_name", "taken_name")
        for requested in ("taken_name", "old_name", "admin", "x"):
            Profile.objects.filter(id=self.user_id).delete()
            with self.subTest(requested=requested):
                profile = self.service.provision(self.user_id, username=requested)
                self.assertEqual(profile.username, "user_abcdef12")

    def test_provision_is_idempotent(self):
        first = self.service.provision(self.user_id, username="reader")
        second = self.service.provision(self.user_id, username="someone_else")
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(second.username, "reader")
        self.assertEqual(Profile.objects.count(), 1)

    def test_provision_race_returns_winner(self):
        winner = make_profile(id=self.user_id, username="winner")
        with patch.object(self.service.profiles, "get_by_id", side_effect=[None, winner]):
            profile = self.service.provision(self.user_id, username="loser")
        self.assertEqual(profile.username, "winner")

    def test_owner_sets_visibility(self):
        profile = self.service.provision(self.user_id)
        updated = self.service.set_visibility(self.user_id, self.user_id, Profile.VISIBILITY_PUBLIC)
        self.assertEqual(updated.visibility, Profile.VISIBILITY_PUBLIC)
        profile.refresh_from_db()
        self.assertEqual(profile.visibility, Profile.VISIBILITY_PUBLIC)

    def test_set_visibility_guards(self):
        other = make_profile(username="other")
        self.service.provision(self.user_id)
        with self.assertRaises(NotAuthenticated):
            self.service.set_visibility(None, self.user_id, "public")
        with self.assertRaises(NotOwner):
            self.service.set_visibility(other.id, self.user_id, "public")
        with self.assertRaises(InvalidVisibility):
            self.service.set_visibility(self.user_id, self.user_id, "inherit")

    def test_set_visibility_missing_profile(self):
        missing = uuid.uuid4()
        with self.assertRaises(ProfileNotFound):
            self.service.set_visibility(missing, missing, "public")
