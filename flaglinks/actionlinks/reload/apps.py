from django.apps import AppConfig as DjangoAppConfig


class AppConfig(DjangoAppConfig):
    name = "flaglinks.actionlinks.reload"
    verbose_name = "Reload Action Link"
    label = "actionlink_reload"

    def ready(self):
        from .handler import ReloadActionLinkPlugin  # NOQA
