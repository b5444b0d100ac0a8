import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.views import View

from ...views import ActionLinkViewMixin

logger = logging.getLogger(__name__)


class ConfirmActionLinkView(ActionLinkViewMixin, View):
    template_name = "flaglinks/confirm.html"

    def get_question(self, request, flag, action):
        plugin = flag.get_link_type_plugin(request.user, request)
        if hasattr(plugin, "get_confirmation"):
            return plugin.get_confirmation(action, flag)

        return f"{flag.get_short_text(action)}?"

    def get(self, request, flag_id, action, entity_id):
        flag = self.get_flag(flag_id)
        entity = self.get_flaggable(flag, entity_id)
        self.check_action_access(flag, action, request.user, entity)

        return render(
            request,
            self.template_name,
            {
                "flag": flag,
                "flaggable": entity,
                "action": action,
                "question": self.get_question(request, flag, action),
                "submit_label": flag.get_short_text(action),
                "cancel_url": self.get_success_url(request),
            },
        )

    def post(self, request, flag_id, action, entity_id):
        flag = self.get_flag(flag_id)
        entity = self.get_flaggable(flag, entity_id)
        self.check_action_access(flag, action, request.user, entity)
        self.perform_action(flag, action, request.user, entity)

        message = flag.get_message(action)
        if message:
            messages.success(request, message)

        return redirect(self.get_success_url(request))
