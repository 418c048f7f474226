# -*- coding: utf-8 -*-
"""
    JSPWiki - plugin support

    A plugin is a class derived from WikiPlugin that is listed (by dotted
    name) in the "plugins" setting of the wiki configuration. Pages invoke it
    with [{PluginName key='value'}]; execute() returns the content to put in
    its place: text or an element of the internal document tree.

    Plugins describe themselves with these optional class attributes:
    name (defaults to the class name), description, author, min_version and
    max_version (the range of wiki versions the plugin works with).

    @copyright: 2001-2004 Juergen Hermann <jh@web.de>,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from werkzeug.utils import import_string

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki.error import WikiError
from JSPWiki.modules import BaseModuleManager, WikiModuleInfo


class PluginError(WikiError):
    """ raised when a plugin can't be found or refuses to run """


class WikiPlugin(object):
    """ Base class of all plugins """
    name = None
    description = None
    author = None
    min_version = None
    max_version = None

    def execute(self, context, args, context_block=False):
        """
        Run the plugin.

        @param context: WikiContext of the page the plugin is invoked on
        @param args: the Arguments of the invocation
        @param context_block: True if the invocation stands alone on a line
        @return: text, an element or None
        """
        raise NotImplementedError()


class PluginManager(BaseModuleManager):
    """
    Knows the plugins configured for a wiki and runs them.

    Plugins are found by their name; "CurrentTime" finds "CurrentTimePlugin".
    """
    SUFFIX = 'Plugin'

    def __init__(self, engine):
        super(PluginManager, self).__init__(engine)
        self._plugins = {}
        for plugin_name in engine.cfg.plugins:
            try:
                plugin_class = import_string(plugin_name)
            except ImportError as err:
                logging.error("plugin %s can't be imported: %s", plugin_name, err)
                continue
            self.register_plugin(plugin_class)

    def register_plugin(self, plugin_class):
        """
        Make a plugin available, unless it is incompatible with this wiki version.

        @rtype: bool
        @return: True if the plugin was registered
        """
        if not (isinstance(plugin_class, type) and issubclass(plugin_class, WikiPlugin)):
            logging.error("%r is not a WikiPlugin", plugin_class)
            return False
        info = WikiModuleInfo.for_class(plugin_class)
        if not self.check_compatibility(info):
            logging.warning("plugin %s is not compatible with this version of the wiki (needs %s - %s), ignored",
                            info.name, info.min_version or '*', info.max_version or '*')
            return False
        self._plugins[info.name] = plugin_class
        logging.debug("registered plugin %s", info.name)
        return True

    def find_plugin(self, name):
        """ the plugin class called name (or name + "Plugin"), None if there is none """
        plugin_class = self._plugins.get(name)
        if plugin_class is None and not name.endswith(self.SUFFIX):
            plugin_class = self._plugins.get(name + self.SUFFIX)
        return plugin_class

    def get_modules(self):
        return self.modules(WikiModuleInfo.for_class(cls) for cls in self._plugins.values())

    def execute(self, context, name, args, context_block=False):
        """
        Run a plugin.

        @raise PluginError: no such plugin
        """
        plugin_class = self.find_plugin(name)
        if plugin_class is None:
            raise PluginError(u"No such plugin: %s" % name)
        return plugin_class().execute(context, args, context_block)
