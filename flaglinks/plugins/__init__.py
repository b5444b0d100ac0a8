from .actionlink import ActionLinkTypePlugin, ActionLinkTypePluginManager  # NOQA
from .base import PluginBase, pluginhandler  # NOQA
