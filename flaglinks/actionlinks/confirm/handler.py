import logging

from django import forms
from django.urls import re_path
from marshmallow import Schema, fields, validate

from ...plugins import ActionLinkTypePlugin
from ...plugins.actionlink import ACTION_LINK_PATTERN
from ...url import Url
from .views import ConfirmActionLinkView

logger = logging.getLogger(__name__)

FORM_BEHAVIORS = (
    ("default", "New page"),
    ("dialog", "Dialog"),
    ("modal", "Modal dialog"),
)


class ConfirmSchema(Schema):
    flag_confirmation = fields.String(load_default="")
    unflag_confirmation = fields.String(load_default="")
    form_behavior = fields.String(
        load_default="default",
        validate=validate.OneOf([behavior for behavior, _ in FORM_BEHAVIORS]),
    )


class ConfirmActionLinkPlugin(ActionLinkTypePlugin):
    """Asks the user to confirm on a separate page before the action is performed"""

    plugin_name = "confirm"
    label = "Confirmation form"
    description = "Redirects the user to a confirmation form."
    config_schema = ConfirmSchema

    @classmethod
    def get_urls(cls):
        return [
            re_path(
                rf"^confirm/{ACTION_LINK_PATTERN}",
                ConfirmActionLinkView.as_view(),
                name="confirm",
            )
        ]

    def get_url(self, action, flag, entity):
        return Url.from_route(
            "flaglinks:confirm",
            {"flag_id": flag.pk, "action": action, "entity_id": entity.pk},
        )

    def get_as_flag_link(self, flag, entity):
        render = super(ConfirmActionLinkPlugin, self).get_as_flag_link(flag, entity)

        form_behavior = self.configuration["form_behavior"]
        if render and form_behavior != "default":
            render["attributes"]["class"] = ["use-dialog"]
            render["attributes"]["data-dialog-type"] = form_behavior

        return render

    def get_confirmation(self, action, flag):
        question = self.configuration.get(f"{action}_confirmation")
        if question:
            return question

        return f"{flag.get_short_text(action)}?"

    def build_configuration_form(self, form):
        form.fields["flag_confirmation"] = forms.CharField(
            label="Flag confirmation message",
            required=False,
            initial=self.configuration["flag_confirmation"],
            help_text="Message displayed when the user has clicked the flag link.",
        )
        form.fields["unflag_confirmation"] = forms.CharField(
            label="Unflag confirmation message",
            required=False,
            initial=self.configuration["unflag_confirmation"],
            help_text="Message displayed when the user has clicked the unflag link.",
        )
        form.fields["form_behavior"] = forms.ChoiceField(
            label="Form behavior",
            choices=FORM_BEHAVIORS,
            initial=self.configuration["form_behavior"],
        )
        return form

    def _get_submitted_values(self, form):
        return {
            name: form.cleaned_data[name]
            for name in self.config_schema().fields
            if name in form.cleaned_data
        }

    def validate_configuration_form(self, form):
        errors = self.config_schema().validate(self._get_submitted_values(form))
        for field, messages in errors.items():
            for message in messages:
                form.add_error(field, message)

    def submit_configuration_form(self, form):
        self.set_configuration(self._get_submitted_values(form))
