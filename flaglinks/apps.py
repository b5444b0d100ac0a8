from django.apps import AppConfig as DjangoAppConfig


class AppConfig(DjangoAppConfig):
    name = "flaglinks"
    verbose_name = "Flag Links"
    default_auto_field = "django.db.models.AutoField"

    def ready(self):
        from .signals import register_signals

        register_signals()
