import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Flag",
            fields=[
                (
                    "id",
                    models.SlugField(max_length=32, primary_key=True, serialize=False),
                ),
                ("label", models.CharField(max_length=100)),
                ("is_global", models.BooleanField(default=False)),
                ("enabled", models.BooleanField(default=True)),
                ("weight", models.IntegerField(default=0)),
                (
                    "flag_short",
                    models.CharField(default="Flag this item", max_length=255),
                ),
                (
                    "flag_long",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "flag_message",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "unflag_short",
                    models.CharField(default="Unflag this item", max_length=255),
                ),
                (
                    "unflag_long",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "unflag_message",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("link_type", models.CharField(default="reload", max_length=50)),
                ("link_type_config", models.JSONField(blank=True, default=dict)),
                (
                    "content_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
            ],
            options={
                "ordering": ("weight", "label"),
            },
        ),
        migrations.CreateModel(
            name="Flagging",
            fields=[
                (
                    "id",
                    models.AutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("object_id", models.CharField(db_index=True, max_length=255)),
                ("created", models.DateTimeField(auto_now_add=True)),
                (
                    "content_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
                (
                    "flag",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="flaggings",
                        to="flaglinks.flag",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "unique_together": {("flag", "user", "content_type", "object_id")},
            },
        ),
    ]
