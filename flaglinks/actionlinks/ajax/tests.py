from django.contrib.auth.models import Group
from django.test import TestCase
from django.urls import reverse
from django.utils.http import urlencode

from ...testutils import create_flag, create_user, grant_flag_access, make_request
from ...url import get_url_token
from .handler import AJAX_LIBRARY, AjaxActionLinkPlugin


class AjaxActionLinkPluginTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag(link_type="ajax")
        self.group = Group.objects.create(name="editors")
        self.user = grant_flag_access(create_user(), self.flag)
        self.plugin = AjaxActionLinkPlugin(
            {}, self.user, request=make_request(user=self.user)
        )

    def test_get_as_flag_link(self):
        fragment = self.plugin.get_as_flag_link(self.flag, self.group)
        path = reverse(
            "flaglinks:ajax",
            kwargs={"flag_id": "bookmark", "action": "flag", "entity_id": self.group.pk},
        )
        token = get_url_token(path, self.user)

        self.assertEqual(
            fragment["attributes"]["href"],
            f"{path}?{urlencode({'destination': '/groups/', 'token': token})}",
        )
        self.assertEqual(fragment["attributes"]["class"], ["use-ajax"])
        self.assertEqual(fragment.attached, {"library": [AJAX_LIBRARY]})
        self.assertEqual(
            fragment.cache.get_cache_contexts(), ["user", "user.permissions"]
        )

        html = fragment.render()
        self.assertIn('class="use-ajax"', html)
        self.assertIn(f"/static/{AJAX_LIBRARY}", html)

    def test_denied_has_no_attachments(self):
        plugin = AjaxActionLinkPlugin({}, create_user("other"), request=make_request())
        fragment = plugin.get_as_flag_link(self.flag, self.group)

        self.assertEqual(fragment, {})
        self.assertEqual(fragment.attached, {})


class AjaxActionLinkViewTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag(
            link_type="ajax", flag_message="Bookmarked", unflag_message="Removed"
        )
        self.group = Group.objects.create(name="editors")
        self.user = grant_flag_access(create_user(), self.flag)

    def get_url(self, action="flag", user=None):
        path = reverse(
            "flaglinks:ajax",
            kwargs={"flag_id": "bookmark", "action": action, "entity_id": self.group.pk},
        )
        token = get_url_token(path, user or self.user)
        return f"{path}?{urlencode({'destination': '/groups/', 'token': token})}"

    def test_toggle(self):
        self.client.force_login(self.user)

        response = self.client.get(self.get_url())
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(data["action"], "unflag")
        self.assertEqual(data["message"], "Bookmarked")
        self.assertIn(">Remove bookmark</a>", data["link"])
        self.assertIn("/flags/ajax/bookmark/unflag/", data["link"])
        self.assertIn("destination=%2Fgroups%2F", data["link"])
        self.assertTrue(self.flag.is_flagged(self.group, user=self.user))

        response = self.client.get(self.get_url("unflag"))
        data = response.json()
        self.assertEqual(data["action"], "flag")
        self.assertEqual(data["message"], "Removed")
        self.assertFalse(self.flag.is_flagged(self.group, user=self.user))

    def test_anonymous(self):
        response = self.client.get(self.get_url())

        self.assertEqual(response.status_code, 403)

    def test_invalid_token(self):
        self.client.force_login(self.user)

        response = self.client.get(self.get_url(user=create_user("other")))

        self.assertEqual(response.status_code, 403)
        self.assertFalse(self.flag.is_flagged(self.group, user=self.user))

    def test_without_permission(self):
        user = create_user("other")
        self.client.force_login(user)

        response = self.client.get(self.get_url(user=user))

        self.assertEqual(response.status_code, 403)
