import logging

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models, transaction

from .access import AccessResult
from .cache import PERMANENT, CacheableMetadata
from .exceptions import AlreadyFlaggedException, NotFlaggedException

logger = logging.getLogger(__name__)

ACTIONS = ("flag", "unflag")


class Flag(models.Model):
    """A type of relation between users and entities, e.g. bookmarks"""

    id = models.SlugField(max_length=32, primary_key=True)
    label = models.CharField(max_length=100)
    content_type = models.ForeignKey(ContentType, on_delete=models.deletion.CASCADE)
    is_global = models.BooleanField(default=False)
    enabled = models.BooleanField(default=True)
    weight = models.IntegerField(default=0)

    flag_short = models.CharField(max_length=255, default="Flag this item")
    flag_long = models.CharField(max_length=255, blank=True, default="")
    flag_message = models.CharField(max_length=255, blank=True, default="")
    unflag_short = models.CharField(max_length=255, default="Unflag this item")
    unflag_long = models.CharField(max_length=255, blank=True, default="")
    unflag_message = models.CharField(max_length=255, blank=True, default="")

    link_type = models.CharField(max_length=50, default="reload")
    link_type_config = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ("weight", "label")

    def __str__(self):
        return self.label

    def _get_text(self, kind, action):
        if action not in ACTIONS:
            raise ValueError(f"Unknown flag action {action!r}")

        return getattr(self, f"{action}_{kind}")

    def get_short_text(self, action):
        return self._get_text("short", action)

    def get_long_text(self, action):
        return self._get_text("long", action)

    def get_message(self, action):
        return self._get_text("message", action)

    def get_permission_codename(self, action):
        if action not in ACTIONS:
            raise ValueError(f"Unknown flag action {action!r}")

        return f"{action}_{self.pk}"

    def get_permission(self, action):
        return f"{self._meta.app_label}.{self.get_permission_codename(action)}"

    def get_cache_contexts(self):
        return []

    def get_cache_tags(self):
        return [f"flaglinks_flag:{self.pk}"]

    def get_cache_max_age(self):
        return PERMANENT

    def applies_to(self, entity):
        return ContentType.objects.get_for_model(entity) == self.content_type

    def get_flaggings(self, entity, user=None):
        flaggings = self.flaggings.filter(
            content_type=ContentType.objects.get_for_model(entity),
            object_id=str(entity.pk),
        )
        if user is not None:
            flaggings = flaggings.filter(user=user)

        return flaggings

    def get_flagging_cache_tag(self, entity):
        content_type = ContentType.objects.get_for_model(entity)
        return f"flaglinks_flagging:{self.pk}:{content_type.pk}:{entity.pk}"

    def get_flagged_cacheability(self, entity):
        """
        Cacheability of is_flagged for entity.

        Non-global flags vary per user. flag_entity and unflag_entity send the
        flagging tag along with their signals as the tag to invalidate.
        """
        metadata = CacheableMetadata(cache_tags=[self.get_flagging_cache_tag(entity)])
        if not self.is_global:
            metadata.cache_per_user()

        return metadata

    def is_flagged(self, entity, user=None):
        if self.is_global:
            return self.get_flaggings(entity).exists()

        if user is None or not user.is_authenticated:
            return False

        return self.get_flaggings(entity, user=user).exists()

    def action_access(self, action, user, entity=None):
        """
        Check if the user may perform action on entity with this flag.

        The result varies by the user's permissions and the flag itself.
        """
        access = AccessResult.allowed_if_has_permission(
            user, self.get_permission(action)
        )
        if entity is not None:
            access = access.and_if(AccessResult.allowed_if(self.applies_to(entity)))

        access = AccessResult.forbidden_if(
            not self.enabled, f"The flag {self.pk} is disabled."
        ).or_if(access)

        return access.add_cacheable_dependency(self)

    @transaction.atomic
    def flag_entity(self, entity, user):
        from .signals import entity_flagged

        if not self.applies_to(entity):
            raise ValueError(f"The flag {self.pk} does not apply to {entity!r}")

        if self.is_flagged(entity, user=user):
            raise AlreadyFlaggedException(f"{entity!r} is already flagged with {self.pk}")

        flagging = Flagging.objects.create(flag=self, user=user, entity=entity)
        logger.info(f"User {user} flagged {entity!r} with {self.pk}")
        entity_flagged.send(
            sender=self.__class__,
            flag=self,
            flagging=flagging,
            cache_tags=[self.get_flagging_cache_tag(entity)],
        )

        return flagging

    @transaction.atomic
    def unflag_entity(self, entity, user):
        from .signals import entity_unflagged

        if self.is_global:
            flaggings = self.get_flaggings(entity)
        else:
            flaggings = self.get_flaggings(entity, user=user)

        flaggings = list(flaggings)
        if not flaggings:
            raise NotFlaggedException(f"{entity!r} is not flagged with {self.pk}")

        for flagging in flaggings:
            flagging.delete()

        logger.info(f"User {user} unflagged {entity!r} with {self.pk}")
        entity_unflagged.send(
            sender=self.__class__,
            flag=self,
            entity=entity,
            user=user,
            cache_tags=[self.get_flagging_cache_tag(entity)],
        )

    def get_link_type_plugin(self, current_user, request=None):
        from .plugins import ActionLinkTypePluginManager

        return ActionLinkTypePluginManager.create_instance(
            self.link_type, self.link_type_config, current_user, request=request
        )


class Flagging(models.Model):
    """A user flagging a single entity"""

    flag = models.ForeignKey(
        Flag, related_name="flaggings", on_delete=models.deletion.CASCADE
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, db_index=True, on_delete=models.deletion.CASCADE
    )
    content_type = models.ForeignKey(ContentType, on_delete=models.deletion.CASCADE)
    object_id = models.CharField(max_length=255, db_index=True)
    entity = GenericForeignKey("content_type", "object_id")
    created = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = (("flag", "user", "content_type", "object_id"),)

    def __str__(self):
        return f"{self.flag_id}:{self.content_type_id}:{self.object_id}"
