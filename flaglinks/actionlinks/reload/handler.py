import logging

from django.urls import re_path

from ...plugins import ActionLinkTypePlugin
from ...plugins.actionlink import ACTION_LINK_PATTERN
from ...url import Url
from .views import ReloadActionLinkView

logger = logging.getLogger(__name__)


class ReloadActionLinkPlugin(ActionLinkTypePlugin):
    """Performs the action and reloads the page it was clicked on"""

    plugin_name = "reload"
    label = "Normal link"
    description = "A normal non-JavaScript request will be made and the current page will be reloaded."

    url_prefix = "reload"
    view_class = ReloadActionLinkView

    @classmethod
    def get_urls(cls):
        return [
            re_path(
                rf"^{cls.url_prefix}/{ACTION_LINK_PATTERN}",
                cls.view_class.as_view(),
                name=cls.url_prefix,
            )
        ]

    def get_url(self, action, flag, entity):
        return Url.from_route(
            f"flaglinks:{self.url_prefix}",
            {"flag_id": flag.pk, "action": action, "entity_id": entity.pk},
            {"csrf_token": self.current_user},
        )
