import copy
import logging
from abc import ABC

from marshmallow import Schema

from ..exceptions import PluginNotFoundException

logger = logging.getLogger(__name__)


class PluginHandler:
    def __init__(self):
        self.plugins = {}

    def register(self, plugin):
        key = (plugin.plugin_type, plugin.plugin_name)
        existing = self.plugins.get(key)
        if existing is not None and existing is not plugin:
            logger.warning(
                f"Plugin {plugin.plugin_type}:{plugin.plugin_name} from {existing!r} replaced by {plugin!r}"
            )

        logger.debug(f"Registering plugin {plugin.plugin_type}:{plugin.plugin_name}")
        self.plugins[key] = plugin

    def unregister(self, plugin):
        key = (plugin.plugin_type, plugin.plugin_name)
        if self.plugins.get(key) is plugin:
            logger.debug(f"Unregistering plugin {plugin.plugin_type}:{plugin.plugin_name}")
            del self.plugins[key]

    def get_plugin(self, plugin_type, plugin_name):
        try:
            return self.plugins[(plugin_type, plugin_name)]
        except KeyError:
            raise PluginNotFoundException(
                f"No {plugin_type} plugin named {plugin_name!r}"
            )

    def get_plugins(self, plugin_type):
        return [
            plugin
            for (t, name), plugin in sorted(self.plugins.items())
            if t == plugin_type
        ]


pluginhandler = PluginHandler()


class PluginBase(ABC):
    """
    Base of all plugins.

    A subclass that sets ``plugin_name`` is registered under its
    ``plugin_type`` as soon as it is defined, unless it is declared with
    ``register=False``.
    """

    plugin_type = None
    plugin_name = None
    label = None
    description = ""
    config_schema = Schema

    def __init_subclass__(cls, register=True, **kwargs):
        super().__init_subclass__(**kwargs)
        if register and cls.__dict__.get("plugin_name"):
            pluginhandler.register(cls)

    def __init__(self, config):
        self.configuration = copy.deepcopy(dict(config or {}))

    def get_plugin_id(self):
        return self.plugin_name

    @classmethod
    def get_plugin_definition(cls):
        return {
            "id": cls.plugin_name,
            "type": cls.plugin_type,
            "label": cls.label or cls.plugin_name,
            "description": cls.description,
        }
