from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase

from library.models import CatalogItem, Profile, UsernameAlias
from library.tests.helpers import make_alias, make_item, make_profile


class ProfileModelTestCase(TestCase):

    def setUp(self):
        self.profile = make_profile(username="reader")

    def test_defaults_to_followers_only(self):
        self.assertEqual(self.profile.visibility, Profile.VISIBILITY_FOLLOWERS_ONLY)

    def test_str_is_handle(self):
        self.assertEqual(str(self.profile), "@reader")

    def test_username_is_unique(self):
        with self.assertRaises(IntegrityError):
            make_profile(username="reader")

    def test_username_format_is_validated(self):
        self.profile.full_clean()
        for name in ("Reader", "read-er", "reader\n", "réader"):
            with self.subTest(name=name):
                self.profile.username = name
                with self.assertRaises(ValidationError):
                    self.profile.full_clean()

    def test_catalog_item_defaults_to_inherit(self):
        item = CatalogItem.objects.create(owner=self.profile, title="Emma")
        self.assertEqual(item.visibility, CatalogItem.VISIBILITY_INHERIT)
        self.assertEqual(str(item), "Emma")

    def test_account_deletion_cascades(self):
        make_item(self.profile)
        make_alias(self.profile, "old_reader")
        self.profile.delete()
        self.assertFalse(CatalogItem.objects.exists())
        self.assertFalse(UsernameAlias.objects.exists())
