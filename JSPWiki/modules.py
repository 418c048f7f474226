# -*- coding: utf-8 -*-
"""
    JSPWiki - wiki modules

    Plugins (and other pluggable modules) describe themselves with a
    WikiModuleInfo. A module declares the range of wiki versions it works
    with; managers refuse modules outside of that range.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import functools

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import api


@functools.total_ordering
class WikiModuleInfo(object):
    """
    Description of a module. Infos are ordered (and equal) by name.

    @param name: module name, unique among the modules of a manager
    @param min_version: lowest compatible wiki version (blank: any)
    @param max_version: highest compatible wiki version (blank: any)
    """
    def __init__(self, name, description=u'', author=None, min_version=None, max_version=None):
        self.name = name
        self.description = description
        self.author = author
        self.min_version = min_version
        self.max_version = max_version

    @classmethod
    def for_class(cls, module_class):
        """ build the info from the (optional) info attributes of a class """
        return cls(getattr(module_class, 'name', None) or module_class.__name__,
                   description=getattr(module_class, 'description', None) or (module_class.__doc__ or u'').strip(),
                   author=getattr(module_class, 'author', None),
                   min_version=getattr(module_class, 'min_version', None),
                   max_version=getattr(module_class, 'max_version', None))

    def __eq__(self, other):
        if not isinstance(other, WikiModuleInfo):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other):
        if not isinstance(other, WikiModuleInfo):
            return NotImplemented
        return self.name < other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return '<%s %s [%s, %s]>' % (self.__class__.__name__, self.name,
                                     self.min_version or '*', self.max_version or '*')


class BaseModuleManager(object):
    """
    Superclass for all managers of modules (plugins, etc.).

    @param engine: the WikiEngine that owns this manager
    """
    def __init__(self, engine):
        self.engine = engine

    def check_compatibility(self, info):
        """
        Returns True, if the given module is compatible with this version of the wiki.

        @param info: WikiModuleInfo of the module to check
        """
        return api.is_newer_or_equal(info.min_version) and api.is_older_or_equal(info.max_version)

    def modules(self, iterable):
        """
        Collect module infos: unique by name, ordered by name.

        @rtype: list of WikiModuleInfo
        """
        ls = []
        seen = set()
        for info in iterable:
            if info.name not in seen:
                seen.add(info.name)
                ls.append(info)
        return sorted(ls)

    def module_info(self, name):
        """ the info of the named module or None """
        for info in self.get_modules():
            if info.name == name:
                return info
        return None

    def get_modules(self):
        """ Returns the infos of all modules this manager knows about """
        raise NotImplementedError()
