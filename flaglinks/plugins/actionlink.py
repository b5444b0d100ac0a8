import logging
from abc import abstractmethod

from django.core.exceptions import ImproperlyConfigured

from ..cache import CacheableMetadata
from ..render import RenderFragment
from ..url import Link, Url
from ..utils import merge_deep
from .base import PluginBase, pluginhandler

logger = logging.getLogger(__name__)

ACTION_LINK_PATTERN = r"(?P<flag_id>[\w-]+)/(?P<action>flag|unflag)/(?P<entity_id>[^/]+)/$"


class ActionLinkTypePlugin(PluginBase):
    """
    Base for all link types.

    A link type specifies the route used when a flag link is clicked and
    builds the output displaying flag links.
    """

    plugin_type = "actionlink"

    def __init__(self, config, current_user, request=None):
        super(ActionLinkTypePlugin, self).__init__(config)
        for key, value in self.default_configuration().items():
            self.configuration.setdefault(key, value)

        self.current_user = current_user
        self.request = request

    @classmethod
    def from_request(cls, request, config=None):
        return cls(config or {}, request.user, request=request)

    @classmethod
    def get_urls(cls):
        """
        Returns the url patterns this link type needs, they are mounted in
        the flaglinks namespace.
        """
        return []

    @abstractmethod
    def get_url(self, action, flag, entity):
        """
        Return a Url for the given flag action (flag or unflag) on the
        flaggable entity.
        """
        raise NotImplementedError

    def get_as_link(self, flag, entity):
        """
        Return a Link to the next action.

        Access is not checked, the caller has to do that before displaying it.
        """
        action = self.get_action(flag, entity)
        url = self.get_url(action, flag, entity)
        url.set_option("query", {"destination": self.get_destination()})
        title = flag.get_short_text(action)

        return Link.from_text_and_url(title, url)

    def get_as_flag_link(self, flag, entity):
        action = self.get_action(flag, entity)
        access = flag.action_access(action, self.current_user, entity)

        if access.is_allowed():
            url = self.get_url(action, flag, entity)
            url.set_route_parameter("destination", self.get_destination())
            render = RenderFragment(
                theme="flag",
                flag=flag,
                flaggable=entity,
                action=action,
                access=access.is_allowed(),
                title=flag.get_short_text(action),
                attributes={"title": flag.get_long_text(action)},
            )
            # token metadata belongs to the fragment, it is also rendered alone
            rendered_url = url.to_string(collect_bubbleable_metadata=True)
            rendered_url.apply_to(render)

            render["attributes"]["href"] = rendered_url.get_generated_url()
        else:
            logger.debug(
                f"Access to {action} {flag.pk} denied for {self.current_user}: {access.get_reason()}"
            )
            render = RenderFragment()

        # the flagged state picks the action
        CacheableMetadata.create_from_render(render).add_cacheable_dependency(
            access
        ).add_cacheable_dependency(
            flag.get_flagged_cacheability(entity)
        ).apply_to(render)

        return render

    def get_action(self, flag, entity):
        """Returns the next action the current user can take"""
        if flag.is_flagged(entity, user=self.current_user):
            return "unflag"
        return "flag"

    def get_destination(self):
        """
        Returns where to go after the action, an existing destination is kept
        as-is, otherwise it is the current path.
        """
        if self.request is None:
            raise ImproperlyConfigured(
                f"{self.__class__.__name__} needs a request to find the destination"
            )

        current_url = Url.from_request(self.request)
        route_params = current_url.get_route_parameters()

        if "destination" in route_params:
            return route_params["destination"]

        destination = current_url.get_option("query", {}).get("destination")
        if destination:
            return destination

        return current_url.get_internal_path()

    def calculate_dependencies(self):
        return []

    def build_configuration_form(self, form):
        """
        Add the settings of this link type to a Django form and return it.

        Derived classes will want to override this method.
        """
        return form

    def validate_configuration_form(self, form):
        """
        Validate the settings added by build_configuration_form, errors are
        added to the form.

        Derived classes will want to override this method.
        """

    def submit_configuration_form(self, form):
        """
        Store the settings from a valid form in the configuration.

        Derived classes will want to override this method.
        """

    def default_configuration(self):
        return self.config_schema().load({})

    def get_configuration(self):
        return self.configuration

    def set_configuration(self, configuration):
        self.configuration = merge_deep(self.default_configuration(), configuration)


class ActionLinkTypePluginManager:
    @staticmethod
    def get_definitions():
        return pluginhandler.get_plugins(ActionLinkTypePlugin.plugin_type)

    @staticmethod
    def get_definition(plugin_name):
        return pluginhandler.get_plugin(ActionLinkTypePlugin.plugin_type, plugin_name)

    @staticmethod
    def get_choices():
        return [
            (plugin.plugin_name, plugin.label or plugin.plugin_name)
            for plugin in ActionLinkTypePluginManager.get_definitions()
        ]

    @staticmethod
    def create_instance(plugin_name, config, current_user, request=None):
        plugin = ActionLinkTypePluginManager.get_definition(plugin_name)
        return plugin(config, current_user, request=request)

    @staticmethod
    def get_urls():
        urls = []
        for plugin in ActionLinkTypePluginManager.get_definitions():
            urls.extend(plugin.get_urls())

        return urls
