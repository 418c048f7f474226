# -*- coding: utf-8 -*-
"""
    JSPWiki - platform facade

    Release and version information plus access to the service providers
    that construct wiki objects (pages, contexts, sessions, ...).

    Run "jspwiki version" (or "python -m JSPWiki.api") to print the version
    of the installed wiki code.

    Service providers are configured with these properties (dotted names of
    classes implementing the matching JSPWiki.api.spi interface):

        jspwiki.provider.impl.acls
        jspwiki.provider.impl.contents
        jspwiki.provider.impl.context
        jspwiki.provider.impl.engine
        jspwiki.provider.impl.session

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import os

from werkzeug.utils import import_string

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import util
from JSPWiki.error import ProviderNotFoundError
from JSPWiki.util.version import Version, VersionFormatError
from JSPWiki.api import spi

PLATFORM_NAME = "JSPWiki"

VERSION_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'version.conf')

PROP_PROVIDER_IMPL_ACLS = "jspwiki.provider.impl.acls"
PROP_PROVIDER_IMPL_CONTENTS = "jspwiki.provider.impl.contents"
PROP_PROVIDER_IMPL_CONTEXT = "jspwiki.provider.impl.context"
PROP_PROVIDER_IMPL_ENGINE = "jspwiki.provider.impl.engine"
PROP_PROVIDER_IMPL_SESSION = "jspwiki.provider.impl.session"

# kind -> (interface, property, default implementation)
PROVIDERS = {
    'acls': (spi.AclsSPI, PROP_PROVIDER_IMPL_ACLS, 'JSPWiki.spi.DefaultAclsSPI'),
    'contents': (spi.ContentsSPI, PROP_PROVIDER_IMPL_CONTENTS, 'JSPWiki.spi.DefaultContentsSPI'),
    'context': (spi.ContextSPI, PROP_PROVIDER_IMPL_CONTEXT, 'JSPWiki.spi.DefaultContextSPI'),
    'engine': (spi.EngineSPI, PROP_PROVIDER_IMPL_ENGINE, 'JSPWiki.spi.DefaultEngineSPI'),
    'session': (spi.SessionSPI, PROP_PROVIDER_IMPL_SESSION, 'JSPWiki.spi.DefaultSessionSPI'),
}

# kind -> provider instance, filled by init() or lazily with the defaults
_providers = {}


def read_version(fname=VERSION_FILE):
    """
    Read the platform version from the version.conf resource.

    @return: the Version, Version.ZERO if it can't be read
    """
    try:
        with open(fname, encoding='utf-8') as f:
            return Version.parse_version(f.read().strip())
    except (IOError, OSError, VersionFormatError) as err:
        logging.error("Failed to read version from %s: %s", fname, err)
    return Version.ZERO


PLATFORM_VERSION = read_version()


def get_spi(interface, props, prop, default):
    """
    Load and instantiate the provider named by property prop.

    @param interface: the SPI class the provider must implement
    @param props: properties to look the provider name up in
    @param prop: property key
    @param default: provider name used if the property is not set
    @raise ProviderNotFoundError: name does not resolve to an implementation of interface
    """
    provider_impl = util.get_string_property(props, prop, default)
    try:
        provider_class = import_string(provider_impl)
    except ImportError as err:
        logging.error("provider %s for %s can't be imported: %s", provider_impl, prop, err)
        raise ProviderNotFoundError("%s provider not found" % interface.__name__)
    if not (isinstance(provider_class, type) and issubclass(provider_class, interface)):
        logging.error("%s is not a %s implementation", provider_impl, interface.__name__)
        raise ProviderNotFoundError("%s provider not found" % interface.__name__)
    return provider_class()


def init(properties=None):
    """
    (Re)initialize the service providers from properties.

    @param properties: wiki properties, the built-in defaults if None
    @rtype: dict
    @return: the provider properties used (property key -> provider name)
    """
    if properties is None:
        from JSPWiki.config.properties import get_default_properties
        properties = get_default_properties()
    providers = {}
    provider_props = {}
    for kind, (interface, prop, default) in PROVIDERS.items():
        providers[kind] = get_spi(interface, properties, prop, default)
        provider_props[prop] = util.get_string_property(properties, prop, default)
    _providers.clear()
    _providers.update(providers)
    return provider_props


def _provider(kind):
    if kind not in _providers:
        interface, prop, default = PROVIDERS[kind]
        _providers[kind] = get_spi(interface, {}, prop, default)
    return _providers[kind]


def acls():
    """ Access to the AclsSPI operations """
    return spi.AclsDSL(_provider('acls'))


def contents():
    """ Access to the ContentsSPI operations """
    return spi.ContentsDSL(_provider('contents'))


def context():
    """ Access to the ContextSPI operations """
    return spi.ContextDSL(_provider('context'))


def engine():
    """ Access to the EngineSPI operations """
    return spi.EngineDSL(_provider('engine'))


def session():
    """ Access to the SessionSPI operations """
    return spi.SessionDSL(_provider('session'))


def is_newer_or_equal(version):
    """
    Returns true, if this version of the wiki is newer or equal than what is requested.

    @param version: a version string (a.b.c-something)
    @rtype: bool
    """
    if util.is_blank(version):
        return True
    try:
        return PLATFORM_VERSION.is_greater_than_or_equal_to(version)
    except VersionFormatError:
        logging.error("Found incorrect version: %s", version)
    return True


def is_older_or_equal(version):
    """
    Returns true, if this version of the wiki is older or equal than what is requested.

    @param version: a version string (a.b.c-something)
    @rtype: bool
    """
    if util.is_blank(version):
        return True
    try:
        return PLATFORM_VERSION.is_lower_than_or_equal_to(version)
    except VersionFormatError:
        logging.error("Found incorrect version: %s", version)
    return False


def get_platform_name_string():
    return PLATFORM_NAME


def get_platform_version_string():
    """ The version string, e.g. 2.12.2 """
    return str(PLATFORM_VERSION)


def main(argv=None):
    """ print the platform version """
    print(get_platform_version_string())


if __name__ == '__main__':
    main()
