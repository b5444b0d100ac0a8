from django.contrib.auth.models import Group
from django.core.exceptions import ImproperlyConfigured
from django.test import TestCase
from django.urls import NoReverseMatch, reverse
from marshmallow import Schema, fields

from ..exceptions import PluginNotFoundException
from ..plugins import ActionLinkTypePlugin, ActionLinkTypePluginManager, pluginhandler
from ..render import RenderFragment
from ..testutils import create_flag, create_user, grant_flag_access, make_request
from ..url import Url


class PlainActionLinkPlugin(ActionLinkTypePlugin, register=False):
    plugin_name = "test_plain"

    def get_url(self, action, flag, entity):
        return Url.from_route(
            "flaglinks:confirm",
            {"flag_id": flag.pk, "action": action, "entity_id": entity.pk},
        )


class MissingRouteActionLinkPlugin(ActionLinkTypePlugin, register=False):
    plugin_name = "test_missing_route"

    def get_url(self, action, flag, entity):
        return Url.from_route("flaglinks:missing", {"flag_id": flag.pk})


class DisplaySchema(Schema):
    label = fields.String(load_default="Bookmarks")
    display = fields.Dict(load_default=lambda: {"icon": "star", "position": "top"})


class ConfiguredActionLinkPlugin(PlainActionLinkPlugin, register=False):
    plugin_name = "test_configured"
    config_schema = DisplaySchema


TEST_PLUGINS = (
    PlainActionLinkPlugin,
    MissingRouteActionLinkPlugin,
    ConfiguredActionLinkPlugin,
)


class ActionLinkTypePluginTestCase(TestCase):
    def setUp(self):
        self.flag = create_flag()
        self.group = Group.objects.create(name="editors")
        self.user = create_user()

    def get_plugin(self, user=None, plugin_class=PlainActionLinkPlugin, config=None, **request_kwargs):
        user = user or self.user
        request = make_request(user=user, **request_kwargs)
        return plugin_class(config or {}, user, request=request)

    def get_path(self, action="flag", route_name="flaglinks:confirm"):
        return reverse(
            route_name,
            kwargs={"flag_id": "bookmark", "action": action, "entity_id": self.group.pk},
        )

    def test_get_action(self):
        plugin = self.get_plugin()
        self.assertEqual(plugin.get_action(self.flag, self.group), "flag")

        self.flag.flag_entity(self.group, self.user)
        self.assertEqual(plugin.get_action(self.flag, self.group), "unflag")

    def test_get_action_other_user(self):
        self.flag.flag_entity(self.group, create_user("other"))

        plugin = self.get_plugin()
        self.assertEqual(plugin.get_action(self.flag, self.group), "flag")

    def test_get_as_link(self):
        link = self.get_plugin().get_as_link(self.flag, self.group)

        self.assertEqual(link.get_text(), "Bookmark this")
        self.assertEqual(
            link.get_url().to_string(), f"{self.get_path()}?destination=%2Fgroups%2F"
        )

    def test_get_as_link_unflag(self):
        self.flag.flag_entity(self.group, self.user)
        link = self.get_plugin().get_as_link(self.flag, self.group)

        self.assertEqual(link.get_text(), "Remove bookmark")
        self.assertTrue(link.get_url().to_string().startswith(self.get_path("unflag")))

    def test_get_as_link_does_not_check_access(self):
        plugin = self.get_plugin()

        self.assertFalse(self.flag.action_access("flag", self.user, self.group).is_allowed())
        self.assertEqual(plugin.get_as_link(self.flag, self.group).get_text(), "Bookmark this")

    def test_get_as_link_keeps_destination_route_parameter(self):
        plugin = self.get_plugin(
            path="/flags/confirm/", route_kwargs={"destination": "/elsewhere/"}
        )
        link = plugin.get_as_link(self.flag, self.group)

        self.assertEqual(
            link.get_url().to_string(), f"{self.get_path()}?destination=%2Felsewhere%2F"
        )

    def test_get_as_link_keeps_destination_query_parameter(self):
        plugin = self.get_plugin(path="/flags/confirm/", destination="/from-query/")
        link = plugin.get_as_link(self.flag, self.group)

        self.assertEqual(
            link.get_url().to_string(), f"{self.get_path()}?destination=%2Ffrom-query%2F"
        )

    def test_get_as_link_is_idempotent(self):
        plugin = self.get_plugin()

        first = plugin.get_as_link(self.flag, self.group)
        second = plugin.get_as_link(self.flag, self.group)

        self.assertEqual(first.get_text(), second.get_text())
        self.assertEqual(str(first), str(second))

    def test_get_as_link_missing_route(self):
        link = self.get_plugin(plugin_class=MissingRouteActionLinkPlugin).get_as_link(
            self.flag, self.group
        )

        with self.assertRaises(NoReverseMatch):
            link.get_url().to_string()

    def test_get_destination_without_request(self):
        plugin = PlainActionLinkPlugin({}, self.user)

        with self.assertRaises(ImproperlyConfigured):
            plugin.get_destination()

    def test_get_as_flag_link_denied(self):
        fragment = self.get_plugin().get_as_flag_link(self.flag, self.group)

        self.assertIsInstance(fragment, RenderFragment)
        self.assertEqual(fragment, {})
        self.assertEqual(
            fragment.cache.get_cache_contexts(), ["user", "user.permissions"]
        )
        self.assertEqual(
            fragment.cache.get_cache_tags(),
            ["flaglinks_flag:bookmark", self.flag.get_flagging_cache_tag(self.group)],
        )
        self.assertEqual(fragment.render(), "")

    def test_get_as_flag_link_denied_for_disabled_flag(self):
        self.flag.enabled = False
        self.flag.save()
        user = grant_flag_access(self.user, self.flag)

        fragment = self.get_plugin(user=user).get_as_flag_link(self.flag, self.group)

        self.assertEqual(fragment, {})
        self.assertEqual(
            fragment.cache.get_cache_tags(),
            ["flaglinks_flag:bookmark", self.flag.get_flagging_cache_tag(self.group)],
        )

    def test_get_as_flag_link_denied_for_other_entity_type(self):
        user = grant_flag_access(self.user, self.flag)

        fragment = self.get_plugin(user=user).get_as_flag_link(self.flag, user)

        self.assertEqual(fragment, {})
        self.assertEqual(
            fragment.cache.get_cache_contexts(), ["user", "user.permissions"]
        )

    def test_get_as_flag_link_allowed(self):
        user = grant_flag_access(self.user, self.flag)
        fragment = self.get_plugin(user=user).get_as_flag_link(self.flag, self.group)

        self.assertEqual(fragment["theme"], "flag")
        self.assertEqual(fragment["flag"], self.flag)
        self.assertEqual(fragment["flaggable"], self.group)
        self.assertEqual(fragment["action"], "flag")
        self.assertTrue(fragment["access"])
        self.assertEqual(fragment["title"], "Bookmark this")
        self.assertEqual(
            fragment["attributes"],
            {
                "title": "Add this to your bookmarks",
                "href": f"{self.get_path()}?destination=%2Fgroups%2F",
            },
        )
        self.assertEqual(
            fragment.cache.get_cache_contexts(), ["user", "user.permissions"]
        )
        self.assertEqual(
            fragment.cache.get_cache_tags(),
            ["flaglinks_flag:bookmark", self.flag.get_flagging_cache_tag(self.group)],
        )

    def test_get_as_flag_link_global_flag_does_not_vary_per_user(self):
        flag = create_flag("featured", is_global=True)
        user = grant_flag_access(self.user, flag)
        flag.flag_entity(self.group, create_user("other"))

        fragment = self.get_plugin(user=user).get_as_flag_link(flag, self.group)

        self.assertEqual(fragment["action"], "unflag")
        self.assertEqual(fragment.cache.get_cache_contexts(), ["user.permissions"])
        self.assertEqual(
            fragment.cache.get_cache_tags(),
            ["flaglinks_flag:featured", flag.get_flagging_cache_tag(self.group)],
        )

    def test_get_as_flag_link_unflag(self):
        user = grant_flag_access(self.user, self.flag)
        self.flag.flag_entity(self.group, user)

        fragment = self.get_plugin(user=user).get_as_flag_link(self.flag, self.group)

        self.assertEqual(fragment["action"], "unflag")
        self.assertEqual(fragment["title"], "Remove bookmark")
        self.assertTrue(fragment["attributes"]["href"].startswith(self.get_path("unflag")))

    def test_get_as_flag_link_missing_route(self):
        user = grant_flag_access(self.user, self.flag)
        plugin = self.get_plugin(user=user, plugin_class=MissingRouteActionLinkPlugin)

        with self.assertRaises(NoReverseMatch):
            plugin.get_as_flag_link(self.flag, self.group)

    def test_render(self):
        user = grant_flag_access(self.user, self.flag)
        fragment = self.get_plugin(user=user).get_as_flag_link(self.flag, self.group)

        html = fragment.render()

        self.assertIn('class="flag flag-bookmark action-flag"', html)
        self.assertIn(f'href="{self.get_path()}?destination=%2Fgroups%2F"', html)
        self.assertIn('title="Add this to your bookmarks"', html)
        self.assertIn(">Bookmark this</a>", html)

    def test_calculate_dependencies(self):
        self.assertEqual(self.get_plugin().calculate_dependencies(), [])

    def test_configuration_forms_pass_through(self):
        plugin = self.get_plugin()
        form = object()

        self.assertIs(plugin.build_configuration_form(form), form)
        self.assertIsNone(plugin.validate_configuration_form(form))
        self.assertIsNone(plugin.submit_configuration_form(form))


class ActionLinkTypeConfigurationTestCase(TestCase):
    def setUp(self):
        self.user = create_user()

    def test_default_configuration_is_empty(self):
        plugin = PlainActionLinkPlugin({}, self.user)

        self.assertEqual(plugin.default_configuration(), {})
        self.assertEqual(plugin.get_configuration(), {})

    def test_construct_fills_defaults(self):
        plugin = ConfiguredActionLinkPlugin({"label": "Likes"}, self.user)

        self.assertEqual(
            plugin.get_configuration(),
            {"label": "Likes", "display": {"icon": "star", "position": "top"}},
        )

    def test_construct_keeps_given_top_level_values(self):
        plugin = ConfiguredActionLinkPlugin({"display": {"icon": "heart"}}, self.user)

        self.assertEqual(plugin.get_configuration()["display"], {"icon": "heart"})

    def test_configuration_does_not_share_values(self):
        config = {"display": {"icon": "heart"}}
        plugin = ConfiguredActionLinkPlugin(config, self.user)

        plugin.get_configuration()["display"]["icon"] = "star"
        plugin.set_configuration(config)
        plugin.get_configuration()["display"]["position"] = "bottom"

        self.assertEqual(config, {"display": {"icon": "heart"}})

    def test_set_configuration_merges_deep(self):
        plugin = ConfiguredActionLinkPlugin({}, self.user)
        plugin.set_configuration({"display": {"icon": "heart"}, "extra": [1]})

        self.assertEqual(
            plugin.get_configuration(),
            {
                "label": "Bookmarks",
                "display": {"icon": "heart", "position": "top"},
                "extra": [1],
            },
        )

    def test_set_configuration_replaces_previous(self):
        plugin = ConfiguredActionLinkPlugin({"label": "Likes"}, self.user)
        plugin.set_configuration({})

        self.assertEqual(plugin.get_configuration()["label"], "Bookmarks")

    def test_from_request(self):
        request = make_request(user=self.user)
        plugin = ConfiguredActionLinkPlugin.from_request(request, {"label": "Likes"})

        self.assertIs(plugin.current_user, self.user)
        self.assertIs(plugin.request, request)
        self.assertEqual(plugin.get_configuration()["label"], "Likes")


class ActionLinkTypePluginManagerTestCase(TestCase):
    @classmethod
    def setUpClass(cls):
        super(ActionLinkTypePluginManagerTestCase, cls).setUpClass()
        for plugin in TEST_PLUGINS:
            pluginhandler.register(plugin)
            cls.addClassCleanup(pluginhandler.unregister, plugin)

    def test_definitions(self):
        names = [plugin.plugin_name for plugin in ActionLinkTypePluginManager.get_definitions()]

        self.assertIn("reload", names)
        self.assertIn("confirm", names)
        self.assertIn("ajax", names)
        self.assertIn("test_plain", names)
        self.assertNotIn(None, names)

    def test_choices(self):
        choices = dict(ActionLinkTypePluginManager.get_choices())

        self.assertEqual(choices["reload"], "Normal link")
        self.assertEqual(choices["test_plain"], "test_plain")

    def test_create_instance(self):
        user = create_user()
        plugin = ActionLinkTypePluginManager.create_instance("test_plain", {}, user)

        self.assertIsInstance(plugin, PlainActionLinkPlugin)
        self.assertIs(plugin.current_user, user)
        self.assertEqual(plugin.get_plugin_id(), "test_plain")

    def test_unknown_plugin(self):
        with self.assertRaises(PluginNotFoundException):
            ActionLinkTypePluginManager.create_instance("nope", {}, None)

    def test_plugin_definition(self):
        self.assertEqual(
            PlainActionLinkPlugin.get_plugin_definition(),
            {
                "id": "test_plain",
                "type": "actionlink",
                "label": "test_plain",
                "description": "",
            },
        )


class PluginRegistryTestCase(TestCase):
    def test_declared_without_registering(self):
        with self.assertRaises(PluginNotFoundException):
            pluginhandler.get_plugin("actionlink", "test_plain")

        self.assertNotIn("test_plain", dict(ActionLinkTypePluginManager.get_choices()))

    def test_register_and_unregister(self):
        pluginhandler.register(PlainActionLinkPlugin)
        self.addCleanup(pluginhandler.unregister, PlainActionLinkPlugin)
        self.assertIs(
            pluginhandler.get_plugin("actionlink", "test_plain"), PlainActionLinkPlugin
        )

        pluginhandler.unregister(PlainActionLinkPlugin)
        with self.assertRaises(PluginNotFoundException):
            pluginhandler.get_plugin("actionlink", "test_plain")

    def test_unregister_keeps_replacement(self):
        class ReplacementActionLinkPlugin(PlainActionLinkPlugin):
            plugin_name = "test_plain"

        self.addCleanup(pluginhandler.unregister, ReplacementActionLinkPlugin)

        pluginhandler.unregister(PlainActionLinkPlugin)

        self.assertIs(
            pluginhandler.get_plugin("actionlink", "test_plain"),
            ReplacementActionLinkPlugin,
        )
