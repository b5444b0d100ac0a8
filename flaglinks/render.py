import logging

from django.forms.utils import flatatt
from django.template.loader import render_to_string

from .cache import CacheableMetadata

logger = logging.getLogger(__name__)

THEMES = {
    "flag": "flaglinks/flag.html",
}


def register_theme(theme, template_name):
    THEMES[theme] = template_name


class RenderFragment(dict):
    """
    Display payload for the template layer.

    The payload lives in the dict itself, ``cache`` holds the cache metadata
    and ``attached`` the attachments, e.g. ``{"library": [...]}``.
    """

    def __init__(self, *args, **kwargs):
        super(RenderFragment, self).__init__(*args, **kwargs)
        self.cache = CacheableMetadata()
        self.attached = {}

    def get_template_name(self):
        theme = self.get("theme")
        if theme not in THEMES:
            raise KeyError(f"Unknown theme {theme!r}")

        return THEMES[theme]

    def get_attributes(self):
        attributes = {}
        for key, value in self.get("attributes", {}).items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attributes[key] = value

        return attributes

    def get_context(self):
        context = dict(self)
        context["attributes"] = flatatt(self.get_attributes())
        context["libraries"] = self.attached.get("library", [])
        return context

    def render(self, request=None):
        if not self:
            return ""

        return render_to_string(self.get_template_name(), self.get_context(), request=request)
