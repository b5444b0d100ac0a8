from django import forms
from django.contrib.auth.models import Group
from django.test import TestCase
from django.urls import reverse

from ...testutils import create_flag, create_user, grant_flag_access, make_request
from .handler import ConfirmActionLinkPlugin


class SettingsForm(forms.Form):
    pass


class ConfirmActionLinkPluginTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag(link_type="confirm")
        self.group = Group.objects.create(name="editors")
        self.user = grant_flag_access(create_user(), self.flag)

    def get_plugin(self, config=None):
        return ConfirmActionLinkPlugin(
            config or {}, self.user, request=make_request(user=self.user)
        )

    def test_default_configuration(self):
        self.assertEqual(
            self.get_plugin().get_configuration(),
            {
                "flag_confirmation": "",
                "unflag_confirmation": "",
                "form_behavior": "default",
            },
        )

    def test_get_as_flag_link(self):
        fragment = self.get_plugin().get_as_flag_link(self.flag, self.group)
        path = reverse(
            "flaglinks:confirm",
            kwargs={"flag_id": "bookmark", "action": "flag", "entity_id": self.group.pk},
        )

        self.assertEqual(fragment["attributes"]["href"], f"{path}?destination=%2Fgroups%2F")
        self.assertNotIn("class", fragment["attributes"])
        self.assertEqual(
            fragment.cache.get_cache_contexts(), ["user", "user.permissions"]
        )

    def test_fragments_of_users_with_same_permissions_differ_in_cacheability(self):
        other = grant_flag_access(create_user("other"), self.flag)
        self.flag.flag_entity(self.group, self.user)

        flagged = self.get_plugin().get_as_flag_link(self.flag, self.group)
        not_flagged = ConfirmActionLinkPlugin(
            {}, other, request=make_request(user=other)
        ).get_as_flag_link(self.flag, self.group)

        self.assertEqual(flagged["action"], "unflag")
        self.assertEqual(not_flagged["action"], "flag")
        for fragment in (flagged, not_flagged):
            self.assertIn("user", fragment.cache.get_cache_contexts())
            self.assertIn(
                self.flag.get_flagging_cache_tag(self.group),
                fragment.cache.get_cache_tags(),
            )

    def test_dialog_behavior(self):
        fragment = self.get_plugin({"form_behavior": "modal"}).get_as_flag_link(
            self.flag, self.group
        )

        self.assertEqual(fragment["attributes"]["class"], ["use-dialog"])
        self.assertEqual(fragment["attributes"]["data-dialog-type"], "modal")
        self.assertIn('class="use-dialog"', fragment.render())

    def test_dialog_behavior_without_access(self):
        plugin = ConfirmActionLinkPlugin(
            {"form_behavior": "modal"}, create_user("other"), request=make_request()
        )

        self.assertEqual(plugin.get_as_flag_link(self.flag, self.group), {})

    def test_get_confirmation(self):
        plugin = self.get_plugin({"flag_confirmation": "Really bookmark?"})

        self.assertEqual(plugin.get_confirmation("flag", self.flag), "Really bookmark?")
        self.assertEqual(plugin.get_confirmation("unflag", self.flag), "Remove bookmark?")

    def test_configuration_form(self):
        plugin = self.get_plugin({"unflag_confirmation": "Sure?"})
        form = plugin.build_configuration_form(
            SettingsForm(
                data={
                    "flag_confirmation": "Bookmark?",
                    "unflag_confirmation": "",
                    "form_behavior": "dialog",
                }
            )
        )
        self.assertEqual(form.fields["unflag_confirmation"].initial, "Sure?")
        self.assertTrue(form.is_valid())

        plugin.validate_configuration_form(form)
        self.assertFalse(form.errors)

        plugin.submit_configuration_form(form)
        self.assertEqual(
            plugin.get_configuration(),
            {
                "flag_confirmation": "Bookmark?",
                "unflag_confirmation": "",
                "form_behavior": "dialog",
            },
        )

    def test_validate_configuration_form(self):
        plugin = self.get_plugin()
        form = plugin.build_configuration_form(
            SettingsForm(data={"form_behavior": "default"})
        )
        form.is_valid()
        form.cleaned_data["form_behavior"] = "popup"

        plugin.validate_configuration_form(form)

        self.assertIn("form_behavior", form.errors)


class ConfirmActionLinkViewTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag(
            link_type="confirm",
            link_type_config={"flag_confirmation": "Bookmark the editors?"},
            flag_message="Bookmarked",
        )
        self.group = Group.objects.create(name="editors")
        self.user = grant_flag_access(create_user(), self.flag)
        self.path = reverse(
            "flaglinks:confirm",
            kwargs={"flag_id": "bookmark", "action": "flag", "entity_id": self.group.pk},
        )

    def test_get_shows_question(self):
        self.client.force_login(self.user)

        response = self.client.get(f"{self.path}?destination=/groups/")

        self.assertContains(response, "Bookmark the editors?")
        self.assertContains(response, 'href="/groups/"')
        self.assertFalse(self.flag.is_flagged(self.group, user=self.user))

    def test_post_flags(self):
        self.client.force_login(self.user)

        response = self.client.post(f"{self.path}?destination=/groups/")

        self.assertRedirects(response, "/groups/", fetch_redirect_response=False)
        self.assertTrue(self.flag.is_flagged(self.group, user=self.user))

    def test_post_requires_csrf_token(self):
        self.client.force_login(self.user)
        self.client.handler.enforce_csrf_checks = True

        response = self.client.post(self.path)

        self.assertEqual(response.status_code, 403)
        self.assertFalse(self.flag.is_flagged(self.group, user=self.user))

    def test_without_permission(self):
        self.client.force_login(create_user("other"))

        self.assertEqual(self.client.get(self.path).status_code, 403)
        self.assertEqual(self.client.post(self.path).status_code, 403)
