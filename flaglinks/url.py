import logging

from django.core import signing
from django.urls import NoReverseMatch, reverse
from django.utils.crypto import constant_time_compare
from django.utils.html import format_html
from django.utils.http import urlencode

from .cache import BubbleableMetadata

logger = logging.getLogger(__name__)

TOKEN_SALT = "flaglinks.url.token"
TOKEN_QUERY_PARAMETER = "token"


def get_url_token(path, user):
    """Returns a token binding a path to a user"""
    return signing.Signer(salt=TOKEN_SALT).signature(f"{user.pk}:{path}")


def check_url_token(token, path, user):
    if not token:
        return False

    return constant_time_compare(token, get_url_token(path, user))


class GeneratedUrl(BubbleableMetadata):
    """A rendered URL together with the metadata generating it produced."""

    def __init__(self, generated_url="", *args, **kwargs):
        super(GeneratedUrl, self).__init__(*args, **kwargs)
        self.generated_url = generated_url

    def __str__(self):
        return self.generated_url

    def get_generated_url(self):
        return self.generated_url

    def set_generated_url(self, generated_url):
        self.generated_url = generated_url
        return self


class Url:
    """
    A route name with parameters and options that is turned into a string
    as late as possible.

    Supported options:

    ``query``
        mapping appended as query string.
    ``fragment``
        appended after ``#``.
    ``csrf_token``
        a user; a token binding the path to this user is added to the query
        string and the generated URL varies per user.
    """

    CURRENT_ROUTE = "<current>"

    def __init__(self, route_name, route_parameters=None, options=None):
        self.route_name = route_name
        self.route_parameters = dict(route_parameters or {})
        self.options = dict(options or {})
        self._path_parameter_names = set(self.route_parameters)
        self._path = None

    def __repr__(self):
        return f"<Url {self.route_name} {self.route_parameters!r}>"

    @classmethod
    def from_route(cls, route_name, route_parameters=None, options=None):
        return cls(route_name, route_parameters, options)

    @classmethod
    def from_request(cls, request):
        """Returns the Url of the route the request was resolved to"""
        resolver_match = getattr(request, "resolver_match", None)
        route_parameters = dict(resolver_match.kwargs) if resolver_match else {}

        url = cls(cls.CURRENT_ROUTE, route_parameters, {"query": request.GET.dict()})
        url._path = request.path
        return url

    def get_route_name(self):
        return self.route_name

    def get_route_parameters(self):
        return dict(self.route_parameters)

    def set_route_parameter(self, key, value):
        self.route_parameters[key] = value
        return self

    def get_options(self):
        return dict(self.options)

    def get_option(self, name, default=None):
        return self.options.get(name, default)

    def set_option(self, name, value):
        self.options[name] = value
        return self

    def _reverse(self):
        """
        Returns the path and the route parameters that the route did not
        consume and therefore belong in the query string.
        """
        if self._path is not None:
            return self._path, {}

        try:
            return reverse(self.route_name, kwargs=self.route_parameters), {}
        except NoReverseMatch:
            extra = {
                k: v
                for k, v in self.route_parameters.items()
                if k not in self._path_parameter_names
            }
            if not extra:
                raise

        path_parameters = {
            k: v
            for k, v in self.route_parameters.items()
            if k in self._path_parameter_names
        }
        return reverse(self.route_name, kwargs=path_parameters), extra

    def get_internal_path(self):
        path, _ = self._reverse()
        return path

    def to_string(self, collect_bubbleable_metadata=False):
        path, query = self._reverse()
        query.update(self.options.get("query") or {})

        metadata = BubbleableMetadata()
        token_user = self.options.get("csrf_token")
        if token_user is not None:
            query[TOKEN_QUERY_PARAMETER] = get_url_token(path, token_user)
            metadata.cache_per_user()

        generated_url = path
        if query:
            generated_url += "?" + urlencode(query, doseq=True)

        fragment = self.options.get("fragment")
        if fragment:
            generated_url += "#" + fragment

        if not collect_bubbleable_metadata:
            return generated_url

        return GeneratedUrl(generated_url).inherit_cacheability(metadata)


class Link:
    def __init__(self, text, url):
        self.text = text
        self.url = url

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"<Link {self.text!r} {self.url!r}>"

    @classmethod
    def from_text_and_url(cls, text, url):
        return cls(text, url)

    def get_text(self):
        return self.text

    def get_url(self):
        return self.url

    def to_string(self):
        return format_html('<a href="{}">{}</a>', self.url.to_string(), self.text)
