from django.urls import re_path

from .plugins import ActionLinkTypePluginManager
from .views import FlagSettingsView

app_name = "flaglinks"

urlpatterns = [
    re_path(r"^settings/(?P<flag_id>[\w-]+)/$", FlagSettingsView.as_view(), name="settings"),
] + ActionLinkTypePluginManager.get_urls()
