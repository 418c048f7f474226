"""
JSPWiki - Link converter

Resolves all links in an internal document: wiki page links become view
(or edit, for missing pages) URLs, attachment links attachment URLs. Every
link gets a class telling its kind:

    wikipage    existing page
    createpage  missing page (the link leads to the editor)
    attachment  attachment
    external    URL

Resolved links are reported to LinkCollector objects.

@copyright: 2008 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import util
from JSPWiki.converter import default_registry, type_jspwiki_document
from JSPWiki.converter.jspwiki_in import WIKI_LOCAL, is_external_target
from JSPWiki.pages import ATTACHMENT_DELIMITER
from JSPWiki.util.tree import html, wiki_page, xlink


class LinkCollector(object):
    """
    Collects link targets in the order they are found (each target once).
    """
    def __init__(self):
        self.links = []

    def add(self, link):
        if link not in self.links:
            self.links.append(link)

    def __iter__(self):
        return iter(self.links)

    def __len__(self):
        return len(self.links)

    def __contains__(self, link):
        return link in self.links

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.links)


class ConverterBase(object):
    _tag_xlink_href = xlink.href

    def handle_wikilocal(self, elem, name):
        pass

    def handle_external(self, elem, url):
        pass

    def __call__(self, elem):
        href = elem.get(self._tag_xlink_href)
        if href:
            if href.startswith(WIKI_LOCAL):
                self.handle_wikilocal(elem, href[len(WIKI_LOCAL):])
            elif is_external_target(href):
                self.handle_external(elem, href)

        for child in elem.iter_elements():
            self(child)

        return elem


class ConverterLinks(ConverterBase):
    """
    Resolve links against the wiki of a context and collect them.

    @param context: the WikiContext of the page being rendered
    """
    @classmethod
    def _factory(cls, input, output, links=None, **kw):
        if input == type_jspwiki_document and output == type_jspwiki_document and links == 'resolve':
            return cls

    def __init__(self, context, local_links=None, external_links=None, attachment_links=None):
        self.context = context
        self.engine = context.engine
        self.local_links = local_links
        self.external_links = external_links
        self.attachment_links = attachment_links

    def _attachment_name(self, name):
        """ the full name of the attachment name refers to, or None """
        if ATTACHMENT_DELIMITER in name:
            candidates = [name]
        else:
            candidates = []
            page = self.context.page
            if page is not None and page.name:
                candidates.append(page.name + ATTACHMENT_DELIMITER + name)
        for candidate in candidates:
            if self.engine.page_manager.get_attachment_info(candidate) is not None:
                return candidate
        return None

    def handle_wikilocal(self, elem, name):
        attachment = self._attachment_name(name)
        if attachment is not None:
            elem.set(html.class_, 'attachment')
            elem.set(self._tag_xlink_href, self.engine.get_url('att', attachment))
            if self.attachment_links is not None:
                self.attachment_links.add(attachment)
            return

        final_name = self.engine.action_bean_factory.get_final_page_name(name)
        if final_name is not None:
            elem.set(html.class_, 'wikipage')
            elem.set(self._tag_xlink_href, self.engine.get_url('view', final_name))
            link = final_name
        else:
            link = util.clean_link(name)
            elem.set(html.class_, 'createpage')
            elem.set(self._tag_xlink_href, self.engine.get_url('edit', link))
            elem.set(html.title, u'Create "%s"' % link)
        if self.local_links is not None:
            self.local_links.add(link)

    def handle_external(self, elem, url):
        if elem.tag == wiki_page.object:
            elem.set(html.class_, 'inline')
        else:
            elem.set(html.class_, 'external')
        if self.external_links is not None:
            self.external_links.add(url)


default_registry.register(ConverterLinks._factory)
