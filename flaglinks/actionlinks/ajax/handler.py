import logging

from ...cache import BubbleableMetadata
from ..reload.handler import ReloadActionLinkPlugin
from .views import AjaxActionLinkView

logger = logging.getLogger(__name__)

AJAX_LIBRARY = "flaglinks/flag-link-ajax.js"


class AjaxActionLinkPlugin(ReloadActionLinkPlugin):
    """Toggles the flag in the background and replaces the link in place"""

    plugin_name = "ajax"
    label = "JavaScript toggle"
    description = "An AJAX request will be made and degrades to type 'Normal link' if JavaScript is not available."

    url_prefix = "ajax"
    view_class = AjaxActionLinkView

    def get_as_flag_link(self, flag, entity):
        render = super(AjaxActionLinkPlugin, self).get_as_flag_link(flag, entity)

        if render:
            render["attributes"]["class"] = ["use-ajax"]
            BubbleableMetadata.create_from_render(render).add_attachments(
                {"library": [AJAX_LIBRARY]}
            ).apply_to(render)

        return render
