# -*- coding: utf-8 -*-
"""
    JSPWiki - Configuration defaults class

    A wiki configuration is a subclass of DefaultConfig that overrides some
    of its class attributes. The JSPWiki properties (jspwiki.* keys) are kept
    in the "properties" dict and merged over the built-in defaults and an
    optional site properties file when the configuration is instantiated.

    @copyright: 2000-2004 Juergen Hermann <jh@web.de>,
                2005-2010 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import sys
from secrets import token_hex
from urllib.parse import urlsplit

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import config, error, util
from JSPWiki.config.properties import load_wiki_properties


class ConfigFunctionality(object):
    """ Configuration base class with config class behaviour.

        This class contains the functionality for the DefaultConfig
        class, the settings themselves are added below.
    """

    # attributes of this class that are computed, not configured
    wiki_properties = None
    application_name = None
    page_front_page = None
    base_url = None
    match_english_plurals = None

    def __init__(self):
        """ Init Config instance """
        if self.config_check_enabled:
            self._config_check()

        if not isinstance(self.properties, dict):
            raise error.ConfigurationError("The properties setting in your wiki configuration must be a dict.")

        # effective properties: defaults < properties file < properties dict
        self.wiki_properties = load_wiki_properties(self.properties_file, self.properties)

        props = self.wiki_properties
        self.application_name = util.get_string_property(props, config.PROP_APPNAME, u'JSPWiki')
        self.page_front_page = util.get_string_property(props, config.PROP_FRONTPAGE, config.DEFAULT_FRONT_PAGE)
        self.base_url = util.get_string_property(props, config.PROP_BASEURL, u'')
        self.match_english_plurals = util.get_boolean_property(props, config.PROP_MATCHPLURALS, True)

        if self.base_url:
            parts = urlsplit(self.base_url)
            if not (parts.scheme and parts.netloc):
                logging.warning("%s is not an absolute URL: %r", config.PROP_BASEURL, self.base_url)

        if not isinstance(self.users, dict):
            raise error.ConfigurationError("The users setting in your wiki configuration must be a dict "
                                           "(user name -> password hash).")
        if not isinstance(self.groups, dict):
            raise error.ConfigurationError("The groups setting in your wiki configuration must be a dict "
                                           "(group name -> list of user names).")
        for group_name, members in self.groups.items():
            if not isinstance(members, (list, tuple, set)):
                raise error.ConfigurationError("Members of group %r must be given as a list." % group_name)

        if not isinstance(self.security_policy, dict):
            raise error.ConfigurationError("The security_policy setting in your wiki configuration must be a dict "
                                           "(role name -> list of page actions).")

        if not self.storage_uri:
            raise error.ConfigurationError("No storage configuration specified! You need to define a storage_uri, "
                                           "e.g. 'memory:' or 'sqla:sqlite:///wiki.db'.")

        if self.secrets is None:
            # admin did not setup a real secret: sessions only live as long as this process
            logging.warning("No secrets configured, using a random session secret. "
                            "Logins will not survive a restart and can't be shared between processes.")
            self.secrets = token_hex(32)

        secret_key_names = ['session', ]

        secret_min_length = 10
        if isinstance(self.secrets, str):
            if len(self.secrets) < secret_min_length:
                raise error.ConfigurationError("The secrets = '...' wiki config setting is a way too short string (minimum length is %d chars)!" % (
                    secret_min_length))
            # for lazy people: set all required secrets to same value
            secrets = {}
            for key in secret_key_names:
                secrets[key] = self.secrets
            self.secrets = secrets

        # we check if we have all secrets we need and that they have minimum length
        for secret_key_name in secret_key_names:
            try:
                secret = self.secrets[secret_key_name]
                if len(secret) < secret_min_length:
                    raise ValueError
            except (KeyError, ValueError):
                raise error.ConfigurationError("You must set a (at least %d chars long) secret string for secrets['%s']!" % (
                    secret_min_length, secret_key_name))

    def _config_check(self):
        """ Check namespace and warn about unknown names

        Warn about names which are not used by DefaultConfig, except
        modules, classes, _private or __magic__ names.

        This check is disabled by default, when enabled, it will show an
        error message with unknown names.
        """
        unknown = ['"%s"' % name for name in dir(self)
                  if not name.startswith('_') and
                  name not in DefaultConfig.__dict__ and
                  name not in ConfigFunctionality.__dict__ and
                  not isinstance(getattr(self, name), (type(sys), type(DefaultConfig)))]
        if unknown:
            msg = """
Unknown configuration options: %s.

Please check your configuration for typos.
""" % ', '.join(unknown)
            raise error.ConfigurationError(msg)


class DefaultConfig(ConfigFunctionality):
    """ Configuration base class with default config values
        (added below)
    """
    # Do not add anything into this class. Functionality must
    # be added above to avoid having the methods show up in
    # the configuration help. Settings must be added below to
    # the options dictionary.


#
# Options that are not prefixed automatically with their
# group name, see below (at the options dict) for more
# information on the layout of this structure.
#
options_no_group_name = {
  # ==========================================================================
  'properties': ('JSPWiki properties', None, (
    ('properties', {},
     "dict of JSPWiki properties (jspwiki.* keys), overrides the properties file and the built-in defaults"),
    ('properties_file', None,
     "path of a jspwiki.properties file with site properties, or None"),
  )),
  # ==========================================================================
  'security': ('Security', 'Users, groups and the security policy.', (
    ('users', {},
     "dict user name -> password hash (werkzeug.security.generate_password_hash)"),
    ('groups', {},
     "dict group name -> list of user names, group names are roles in the security policy and in page ACLs"),
    ('security_policy',
     {
        'All': ['view'],
        'Anonymous': ['edit', 'upload'],
        'Asserted': ['edit', 'upload'],
        'Authenticated': ['modify', 'rename'],
        'Admin': ['*'],
     },
     "dict role name -> list of page actions (view, comment, edit, modify, upload, rename, delete or *) granted to that role"),
    ('secrets', None,
     """Either a long shared secret string used for multiple purposes or a dict {"purpose": "longsecretstring", ...} for setting up different shared secrets for different purposes. If None, a random secret is made up at startup."""),
    ('xmlrpc_enabled', True, "if True, serve the XML-RPC API at /RPCU/"),
  )),
  # ==========================================================================
  'data': ('Data storage', None, (
    ('storage_uri', 'memory:',
     "storage backend to use, 'memory:' or 'sqla:<sqlalchemy database url>'"),
  )),
  # ==========================================================================
  'rendering': ('Rendering', None, (
    ('cache_type', 'SimpleCache', "Flask-Caching cache type used for rendered pages"),
    ('cache_default_timeout', 300, "seconds a rendered page stays in the cache"),
    ('plugins',
     [
       'JSPWiki.plugin.builtin.CurrentTimePlugin',
       'JSPWiki.plugin.builtin.IndexPlugin',
       'JSPWiki.plugin.builtin.RecentChangesPlugin',
     ],
     "dotted names of the plugin classes available in [{PluginName ...}] markup"),
  )),
  # ==========================================================================
  'style': ('Style / UI related', None, (
    ('edit_rows', 20, "Default height of the edit box"),
    ('recent_changes_count', 50, "number of entries shown on the recent changes page"),
    ('show_hosts', True, "if True, show the address of anonymous editors"),
  )),
  # ==========================================================================
  'various': ('Various', None, (
    ('config_check_enabled', False, "if True, check configuration for unknown settings."),
    ('language_default', 'en', "Default language for user interface and page content."),
    ('language_supported', ['en', ], "Languages the user interface is offered in (best match of the browser's Accept-Language wins)."),
  )),
}


def _add_options_to_defconfig(opts):
    for groupname in opts:
        group_short, group_doc, group_opts = opts[groupname]
        for name, default, doc in group_opts:
            setattr(DefaultConfig, name, default)

_add_options_to_defconfig(options_no_group_name)
