import logging

from django.contrib.auth.models import Permission
from django.contrib.contenttypes.models import ContentType
from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal

from .models import ACTIONS, Flag

logger = logging.getLogger(__name__)

# flag, flagging, cache_tags
entity_flagged = Signal()
# flag, entity, user, cache_tags
entity_unflagged = Signal()


def sync_flag_permissions(sender, instance, **kwargs):
    """Makes sure the flag and unflag permissions of a flag exist"""
    if kwargs.get("raw"):
        return

    content_type = ContentType.objects.get_for_model(Flag)
    for action in ACTIONS:
        name = f"{action.capitalize()} {instance.label}"
        permission, created = Permission.objects.get_or_create(
            content_type=content_type,
            codename=instance.get_permission_codename(action),
            defaults={"name": name},
        )
        if created:
            logger.debug(f"Created permission {permission.codename}")
        elif permission.name != name:
            permission.name = name
            permission.save(update_fields=["name"])


def delete_flag_permissions(sender, instance, **kwargs):
    Permission.objects.filter(
        content_type=ContentType.objects.get_for_model(Flag),
        codename__in=[instance.get_permission_codename(action) for action in ACTIONS],
    ).delete()


def register_signals():
    post_save.connect(sync_flag_permissions, sender=Flag)
    post_delete.connect(delete_flag_permissions, sender=Flag)
