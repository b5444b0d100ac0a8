import logging

from django.contrib.auth.models import AnonymousUser, Group, Permission, User
from django.contrib.contenttypes.models import ContentType
from django.test import RequestFactory
from django.urls import ResolverMatch

from .models import Flag

logger = logging.getLogger(__name__)


def create_flag(flag_id="bookmark", model=Group, **kwargs):
    kwargs.setdefault("label", flag_id.capitalize())
    kwargs.setdefault("flag_short", "Bookmark this")
    kwargs.setdefault("flag_long", "Add this to your bookmarks")
    kwargs.setdefault("unflag_short", "Remove bookmark")
    kwargs.setdefault("unflag_long", "Remove this from your bookmarks")
    return Flag.objects.create(
        id=flag_id, content_type=ContentType.objects.get_for_model(model), **kwargs
    )


def create_user(username="flagger", **kwargs):
    return User.objects.create_user(username=username, password="password", **kwargs)


def grant_flag_access(user, flag, actions=("flag", "unflag")):
    """Give the user the flag permissions and return a fresh copy of the user"""
    codenames = [flag.get_permission_codename(action) for action in actions]
    user.user_permissions.add(
        *Permission.objects.filter(
            content_type__app_label="flaglinks", codename__in=codenames
        )
    )

    # permissions are cached on the instance
    return User.objects.get(pk=user.pk)


def make_request(path="/groups/", user=None, route_kwargs=None, **query):
    request = RequestFactory().get(path, query)
    request.user = user if user is not None else AnonymousUser()
    if route_kwargs is not None:
        request.resolver_match = ResolverMatch(lambda request: None, (), route_kwargs)

    return request
