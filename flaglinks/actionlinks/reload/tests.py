from django.contrib.auth.models import Group
from django.contrib.messages import get_messages
from django.test import TestCase
from django.urls import reverse
from django.utils.http import urlencode

from ...models import Flagging
from ...testutils import create_flag, create_user, grant_flag_access, make_request
from ...url import get_url_token
from .handler import ReloadActionLinkPlugin


class ReloadActionLinkPluginTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag(flag_message="Bookmarked")
        self.group = Group.objects.create(name="editors")
        self.user = grant_flag_access(create_user(), self.flag)
        self.plugin = ReloadActionLinkPlugin(
            {}, self.user, request=make_request(user=self.user)
        )
        self.path = reverse(
            "flaglinks:reload",
            kwargs={"flag_id": "bookmark", "action": "flag", "entity_id": self.group.pk},
        )

    def test_get_url(self):
        url = self.plugin.get_url("flag", self.flag, self.group)

        self.assertEqual(url.get_route_name(), "flaglinks:reload")
        self.assertEqual(
            url.get_route_parameters(),
            {"flag_id": "bookmark", "action": "flag", "entity_id": self.group.pk},
        )
        self.assertIs(url.get_option("csrf_token"), self.user)

    def test_href_carries_token_and_bubbled_metadata(self):
        fragment = self.plugin.get_as_flag_link(self.flag, self.group)
        token = get_url_token(self.path, self.user)

        self.assertEqual(
            fragment["attributes"]["href"],
            f"{self.path}?{urlencode({'destination': '/groups/', 'token': token})}",
        )
        self.assertEqual(
            fragment.cache.get_cache_contexts(), ["user", "user.permissions"]
        )
        self.assertEqual(
            fragment.cache.get_cache_tags(),
            ["flaglinks_flag:bookmark", self.flag.get_flagging_cache_tag(self.group)],
        )

    def test_get_as_link(self):
        link = self.plugin.get_as_link(self.flag, self.group)
        token = get_url_token(self.path, self.user)

        self.assertEqual(
            link.get_url().to_string(),
            f"{self.path}?{urlencode({'destination': '/groups/', 'token': token})}",
        )
        self.assertEqual(str(link), str(self.plugin.get_as_link(self.flag, self.group)))


class ReloadActionLinkViewTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag(flag_message="Bookmarked", unflag_message="Removed")
        self.group = Group.objects.create(name="editors")
        self.user = grant_flag_access(create_user(), self.flag)

    def get_url(self, action="flag", user=None, destination="/groups/"):
        path = reverse(
            "flaglinks:reload",
            kwargs={"flag_id": "bookmark", "action": action, "entity_id": self.group.pk},
        )
        token = get_url_token(path, user or self.user)
        return f"{path}?{urlencode({'destination': destination, 'token': token})}"

    def test_flag_and_unflag(self):
        self.client.force_login(self.user)

        response = self.client.get(self.get_url())
        self.assertRedirects(response, "/groups/", fetch_redirect_response=False)
        self.assertTrue(self.flag.is_flagged(self.group, user=self.user))
        self.assertEqual(
            [str(m) for m in get_messages(response.wsgi_request)], ["Bookmarked"]
        )

        response = self.client.get(self.get_url("unflag"))
        self.assertRedirects(response, "/groups/", fetch_redirect_response=False)
        self.assertFalse(self.flag.is_flagged(self.group, user=self.user))

    def test_repeated_flag_is_ignored(self):
        self.client.force_login(self.user)
        self.flag.flag_entity(self.group, self.user)

        response = self.client.get(self.get_url())

        self.assertEqual(response.status_code, 302)
        self.assertEqual(Flagging.objects.count(), 1)

    def test_invalid_token(self):
        self.client.force_login(self.user)
        other = create_user("other")

        response = self.client.get(self.get_url(user=other))

        self.assertEqual(response.status_code, 403)
        self.assertFalse(self.flag.is_flagged(self.group, user=self.user))

    def test_without_permission(self):
        user = create_user("other")
        self.client.force_login(user)

        response = self.client.get(self.get_url(user=user))

        self.assertEqual(response.status_code, 403)

    def test_unknown_entity(self):
        self.client.force_login(self.user)
        path = reverse(
            "flaglinks:reload",
            kwargs={"flag_id": "bookmark", "action": "flag", "entity_id": "9999"},
        )

        response = self.client.get(f"{path}?token={get_url_token(path, self.user)}")

        self.assertEqual(response.status_code, 404)

    def test_unknown_flag(self):
        self.client.force_login(self.user)
        path = reverse(
            "flaglinks:reload",
            kwargs={"flag_id": "nope", "action": "flag", "entity_id": self.group.pk},
        )

        self.assertEqual(self.client.get(path).status_code, 404)

    def test_unsafe_destination(self):
        self.client.force_login(self.user)

        response = self.client.get(self.get_url(destination="https://example.com/"))

        self.assertRedirects(response, "/", fetch_redirect_response=False)
