import django.core.validators
import django.db.models.deletion
import library.utils.uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.UUIDField(editable=False, primary_key=True, serialize=False)),
                ("username", models.CharField(max_length=64, unique=True, validators=[django.core.validators.RegexValidator(message="Username may only contain a-z, 0-9 and _", regex=r"^[a-z0-9_]+\Z")])),
                ("display_name", models.CharField(blank=True, default="", max_length=100)),
                ("bio", models.TextField(blank=True, default="", max_length=500)),
                ("visibility", models.CharField(choices=[("followers_only", "Followers only"), ("public", "Public")], default="followers_only", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "profile",
                "ordering": ["username"],
            },
        ),
        migrations.CreateModel(
            name="CatalogItem",
            fields=[
                ("id", models.UUIDField(default=library.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(blank=True, default="", max_length=255)),
                ("visibility", models.CharField(choices=[("inherit", "Same as profile"), ("followers_only", "Followers only"), ("public", "Public")], default="inherit", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(db_column="owner_id", on_delete=django.db.models.deletion.CASCADE, related_name="catalog_items", to="library.profile")),
            ],
            options={
                "db_table": "catalog_item",
                "indexes": [models.Index(fields=["owner", "visibility"], name="catalog_item_owner_vis_idx")],
            },
        ),
        migrations.CreateModel(
            name="FollowEdge",
            fields=[
                ("id", models.UUIDField(default=library.utils.uuid.uuid7_or_4, editable=False, primary_key=True, serialize=False)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], default="pending", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("followee", models.ForeignKey(db_column="followee_id", on_delete=django.db.models.deletion.CASCADE, related_name="follower_edges", to="library.profile")),
                ("follower", models.ForeignKey(db_column="follower_id", on_delete=django.db.models.deletion.CASCADE, related_name="following_edges", to="library.profile")),
            ],
            options={
                "db_table": "follow_edge",
                "indexes": [models.Index(fields=["followee", "status"], name="follow_edge_followee_stat_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("follower", "followee"), name="uniq_follow_edge_follower_followee"),
                    models.CheckConstraint(condition=models.Q(("follower", models.F("followee")), _negated=True), name="chk_follow_edge_not_self"),
                ],
            },
        ),
        migrations.CreateModel(
            name="UsernameAlias",
            fields=[
                ("old_username", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("current_username", models.CharField(db_index=True, max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(db_column="user_id", on_delete=django.db.models.deletion.CASCADE, related_name="username_aliases", to="library.profile")),
            ],
            options={
                "db_table": "username_alias",
            },
        ),
    ]
