import logging

from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ...views import ActionLinkViewMixin

logger = logging.getLogger(__name__)


class AjaxActionLinkView(ActionLinkViewMixin, APIView):
    permission_classes = (permissions.IsAuthenticated,)

    def get(self, request, flag_id, action, entity_id):
        flag = self.get_flag(flag_id)
        entity = self.get_flaggable(flag, entity_id)

        self.check_token(request)
        self.check_action_access(flag, action, request.user, entity)
        self.perform_action(flag, action, request.user, entity)

        plugin = flag.get_link_type_plugin(request.user, request._request)
        link = plugin.get_as_flag_link(flag, entity)

        return Response(
            {
                "action": link.get("action"),
                "message": flag.get_message(action),
                "link": link.render(request._request),
            }
        )
