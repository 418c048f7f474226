"""
JSPWiki - Plugin handling

Expands all plugin elements in an internal document. A plugin that is
unknown or fails is rendered as an error message, it never aborts the
rendering of the page.

@copyright: 2008 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from emeraldtree import ElementTree as ET

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki.converter import default_registry, type_jspwiki_document
from JSPWiki.converter._args import Arguments
from JSPWiki.converter.jspwiki_in import PLUGIN_CONTENT_TYPE
from JSPWiki.plugin import PluginError
from JSPWiki.util.tree import wiki_page


class Converter(object):
    @classmethod
    def _factory(cls, input, output, plugins=None, **kw):
        if input == type_jspwiki_document and output == type_jspwiki_document and plugins == 'expandall':
            return cls

    def __init__(self, context):
        self.context = context
        self.plugin_manager = context.engine.plugin_manager

    def handle_plugin(self, elem):
        type = elem.get(wiki_page.content_type)
        alt = elem.get(wiki_page.alt)

        if not type or not type.startswith(PLUGIN_CONTENT_TYPE):
            return
        name = type[len(PLUGIN_CONTENT_TYPE):]

        context_block = elem.tag == wiki_page.part

        args = Arguments()
        for item in elem:
            if isinstance(item, ET.Element) and item.tag == wiki_page.arguments:
                for arg in item:
                    key = arg.get(wiki_page.name)
                    value = arg[0] if len(arg) else u''
                    if key:
                        args.keyword[key] = value
                    else:
                        args.positional.append(value)

        elem_body = context_block and wiki_page.body() or wiki_page.inline_body()
        elem_error = wiki_page.error()

        try:
            ret = self.plugin_manager.execute(self.context, name, args, context_block)
            if ret is not None:
                elem_body.append(ret)
        except PluginError as err:
            logging.warning("plugin %s on page %s: %s", name, self._page_name(), err)
            elem_error.append(str(err))
        except Exception as err:
            # we do not want that a faulty plugin aborts rendering of the page
            # and makes the wiki UI unusable (by emitting a Server Error),
            # thus, in case of exceptions, we just log the problem and return
            # some standard text.
            logging.exception("Plugin %s raised an exception:", name)
            elem_error.append(u'%s: execution failed [%s] (see also the log)' % (alt or name, err))

        if len(elem_body):
            elem.append(elem_body)
        if len(elem_error):
            elem.append(elem_error)

    def _page_name(self):
        page = self.context.page
        return page.name if page is not None else None

    def recurse(self, elem):
        if elem.tag in (wiki_page.part, wiki_page.inline_part):
            yield elem

        for child in elem:
            if isinstance(child, ET.Element):
                for i in self.recurse(child):
                    yield i

    def __call__(self, tree):
        # collect first, expanding adds children
        for elem in list(self.recurse(tree)):
            self.handle_plugin(elem)

        return tree


default_registry.register(Converter._factory)
