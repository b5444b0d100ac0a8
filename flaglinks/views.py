import logging

from django.contrib.admin.views.decorators import staff_member_required
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.decorators import method_decorator
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View

from .exceptions import FlagException
from .forms import LinkTypeSettingsForm
from .models import Flag
from .url import TOKEN_QUERY_PARAMETER, check_url_token

logger = logging.getLogger(__name__)


class ActionLinkViewMixin:
    """Shared handling of the flag and unflag endpoints of link types"""

    def get_flag(self, flag_id):
        return get_object_or_404(Flag, pk=flag_id)

    def get_flaggable(self, flag, entity_id):
        model = flag.content_type.model_class()
        if model is None:
            raise Http404("The flag points to an unknown content type")

        try:
            return model._default_manager.get(pk=entity_id)
        except (model.DoesNotExist, ValueError, ValidationError):
            raise Http404(f"No {model._meta.verbose_name} with id {entity_id}")

    def check_token(self, request):
        if not check_url_token(
            request.GET.get(TOKEN_QUERY_PARAMETER), request.path, request.user
        ):
            logger.warning(f"Invalid flag link token for {request.user} on {request.path}")
            raise PermissionDenied("Invalid token")

    def check_action_access(self, flag, action, user, entity):
        access = flag.action_access(action, user, entity)
        if not access.is_allowed():
            raise PermissionDenied(access.get_reason())

    def perform_action(self, flag, action, user, entity):
        """
        Flag or unflag, a toggle that already happened is ignored and the
        caller shows the current state.
        """
        try:
            if action == "flag":
                flag.flag_entity(entity, user)
            else:
                flag.unflag_entity(entity, user)
        except FlagException as e:
            logger.debug(f"Ignoring repeated {action}: {e}")

    def get_success_url(self, request):
        destination = request.GET.get("destination")
        if destination and url_has_allowed_host_and_scheme(
            destination,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return destination

        return "/"


@method_decorator(staff_member_required, name="dispatch")
class FlagSettingsView(View):
    template_name = "flaglinks/settings.html"

    def get_form(self, request, flag):
        if request.method == "POST":
            return LinkTypeSettingsForm(flag, request.user, data=request.POST)
        return LinkTypeSettingsForm(flag, request.user)

    def get(self, request, flag_id):
        flag = get_object_or_404(Flag, pk=flag_id)
        return render(
            request,
            self.template_name,
            {"flag": flag, "form": self.get_form(request, flag)},
        )

    def post(self, request, flag_id):
        flag = get_object_or_404(Flag, pk=flag_id)
        form = self.get_form(request, flag)
        if form.is_valid():
            form.save()
            logger.info(f"Link type settings of {flag.pk} changed by {request.user}")
            return redirect("flaglinks:settings", flag_id=flag.pk)

        return render(request, self.template_name, {"flag": flag, "form": form})
