from django.apps import AppConfig as DjangoAppConfig


class AppConfig(DjangoAppConfig):
    name = "flaglinks.actionlinks.ajax"
    verbose_name = "AJAX Action Link"
    label = "actionlink_ajax"

    def ready(self):
        from .handler import AjaxActionLinkPlugin  # NOQA
