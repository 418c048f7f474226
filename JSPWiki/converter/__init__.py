"""
JSPWiki - Converter support

Converters are used to convert between formats or between different featuresets
of one format.

There are three types of converters:
- Between the JSPWiki markup and the internal tree representation.
- Between different featuresets of the internal tree representation like link
  resolution, plugin and variable expansion.
- Between the internal tree and HTML.

A converter module registers a factory at default_registry. The factory is
called with the input and output type (and optional keyword arguments) and
returns a converter if it can do the job.

@copyright: 2008 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

import importlib
import pkgutil

# the input type of page text and the type of the internal tree
type_jspwiki_markup = 'text/x-jspwiki'
type_jspwiki_document = 'application/x-jspwiki-document'
type_html = 'application/x-xhtml-jspwiki-page'


class Registry(object):
    """
    Converter factories, asked in order of priority (lowest first, factories
    of equal priority in the order they registered).
    """
    PRIORITY_FIRST = -10
    PRIORITY_MIDDLE = 0
    PRIORITY_LAST = 10

    def __init__(self):
        self._entries = [] # [(priority, factory)]

    def register(self, factory, priority=PRIORITY_MIDDLE):
        """
        @param factory: callable(input, output, **kw) returning a converter or None
        """
        if factory in self:
            return
        self._entries.append((priority, factory))
        # sort is stable, earlier registrations stay in front
        self._entries.sort(key=lambda entry: entry[0])

    def unregister(self, factory):
        """ @raise ValueError: factory is not registered """
        for entry in self._entries:
            if entry[1] == factory:
                self._entries.remove(entry)
                return
        raise ValueError("%r is not registered" % factory)

    def __contains__(self, factory):
        return any(registered == factory for priority, registered in self._entries)

    def __len__(self):
        return len(self._entries)

    def get(self, input, output, **kw):
        """
        @param input: Input MIME-Type
        @param output: Output MIME-Type
        @return: the converter of the first factory that returns one
        @raise TypeError: no converter found
        """
        for priority, factory in self._entries:
            converter = factory(input, output, **kw)
            if converter is not None:
                return converter
        raise TypeError(u"Couldn't find converter for %s to %s" % (input, output))


def _load():
    from JSPWiki import log
    logger = log.getLogger(__name__)
    for info in pkgutil.iter_modules(__path__):
        if info.name.startswith('_'):
            continue
        try:
            importlib.import_module(__name__ + '.' + info.name)
        except Exception:
            logger.exception("Failed to import converter module %s", info.name)

default_registry = Registry()

_load()
