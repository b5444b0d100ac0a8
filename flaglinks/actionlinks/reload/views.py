import logging

from django.contrib import messages
from django.shortcuts import redirect
from django.views import View

from ...views import ActionLinkViewMixin

logger = logging.getLogger(__name__)


class ReloadActionLinkView(ActionLinkViewMixin, View):
    def get(self, request, flag_id, action, entity_id):
        flag = self.get_flag(flag_id)
        entity = self.get_flaggable(flag, entity_id)

        self.check_token(request)
        self.check_action_access(flag, action, request.user, entity)
        self.perform_action(flag, action, request.user, entity)

        message = flag.get_message(action)
        if message:
            messages.success(request, message)

        return redirect(self.get_success_url(request))
