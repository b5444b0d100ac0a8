from django.apps import AppConfig as DjangoAppConfig


class AppConfig(DjangoAppConfig):
    name = "flaglinks.actionlinks.confirm"
    verbose_name = "Confirm Action Link"
    label = "actionlink_confirm"

    def ready(self):
        from .handler import ConfirmActionLinkPlugin  # NOQA
