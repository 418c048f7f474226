# -*- coding: utf-8 -*-
"""
    JSPWiki - rendering manager

    Page text goes through the converter pipeline:

        JSPWiki markup -> document tree -> plugins expanded -> variables
        expanded -> links resolved -> HTML tree -> HTML text

    The HTML of stored page versions is cached. As the rendering of a page
    depends on other pages (links to missing pages look different, plugins
    list pages), the whole cache is cleared whenever a page changes.

    @copyright: 2008 MoinMoin:BastianBlank,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from io import StringIO

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import api
from JSPWiki.converter import default_registry as reg, type_jspwiki_markup, type_jspwiki_document, type_html
from JSPWiki.pages import LATEST_VERSION
from JSPWiki.signalling import page_saved, page_deleted
from JSPWiki.util.tree import html


def serialize(doc):
    """ HTML tree -> unicode """
    out = StringIO()
    doc.write(out.write, namespaces={html.namespace: ''}, method='xml')
    return out.getvalue()


class RenderingManager(object):
    """
    Renders page text to HTML.

    @param engine: the WikiEngine that owns this manager
    @param cache: a flask_caching.Cache for rendered pages or None
    """
    def __init__(self, engine, cache=None):
        self.engine = engine
        self.cache = cache
        page_saved.connect(self._flush_cache, sender=engine)
        page_deleted.connect(self._flush_cache, sender=engine)

    def _flush_cache(self, engine, **kw):
        if self.cache is not None:
            logging.debug("page %s changed, clearing the rendering cache", kw.get('page_name'))
            self.cache.clear()

    def _cache_key(self, page):
        return u'jspwiki/html/%s/%s/%d' % (self.engine.application_name, page.name, page.version)

    def text_to_tree(self, context, text, local_links=None, external_links=None, attachment_links=None):
        """
        Parse text and run all tree converters on it.

        @return: the document tree (not converted to HTML yet)
        """
        page_name = context.page.name if context.page is not None else None
        doc = reg.get(type_jspwiki_markup, type_jspwiki_document)(page_name)(text)
        doc = reg.get(type_jspwiki_document, type_jspwiki_document, plugins='expandall')(context)(doc)
        doc = reg.get(type_jspwiki_document, type_jspwiki_document, variables='expandall')(context)(doc)
        link_conv = reg.get(type_jspwiki_document, type_jspwiki_document, links='resolve')
        doc = link_conv(context, local_links, external_links, attachment_links)(doc)
        return doc

    def text_to_html(self, context, text, local_links=None, external_links=None, attachment_links=None):
        """
        Render text in the given context.

        @param context: WikiContext, its page is the page the text belongs to
        @param local_links: LinkCollector for links to wiki pages or None
        @param external_links: LinkCollector for URLs or None
        @param attachment_links: LinkCollector for links to attachments or None
        @rtype: unicode
        """
        doc = self.text_to_tree(context, text, local_links, external_links, attachment_links)
        doc = reg.get(type_jspwiki_document, type_html)()(doc)
        return serialize(doc)

    def get_html(self, name, version=LATEST_VERSION, context=None):
        """
        The HTML of a stored page version, "" if there is no such page.

        @param name: page name
        @param version: page version, LATEST_VERSION for the newest
        @param context: WikiContext to render in (one is created if None)
        """
        page = self.engine.page_manager.get_page(name, version)
        if page is None:
            return u''
        key = self._cache_key(page)
        if self.cache is not None:
            rendered = self.cache.get(key)
            if rendered is not None:
                return rendered
        if context is None or context.page is None or context.page.name != page.name:
            context = api.context().create(self.engine, page)
        text = self.engine.page_manager.get_text(page.name, page.version)
        rendered = self.text_to_html(context, text)
        if self.cache is not None:
            self.cache.set(key, rendered)
        return rendered
