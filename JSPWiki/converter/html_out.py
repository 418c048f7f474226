"""
JSPWiki - HTML output converter

Converts an internal document tree into a HTML tree.

@copyright: 2008 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

import re

from emeraldtree import ElementTree as ET

from JSPWiki import util
from JSPWiki.converter import default_registry, type_jspwiki_document, type_html
from JSPWiki.util.tree import html, wiki_page, xlink


class ElementException(RuntimeError):
    pass


class Attributes(object):
    """ Copies the attributes in the HTML namespace to the output. """
    namespaces_valid_output = frozenset([
        html,
    ])

    def __init__(self, element):
        self.element = element

    def get(self, name):
        return self.element.get(getattr(wiki_page, name))

    def convert(self):
        new = {}
        for key, value in self.element.attrib.items():
            if getattr(key, 'uri', None) in self.namespaces_valid_output:
                new[key] = value
        return new


class Converter(object):
    """
    Converter application/x-jspwiki-document -> HTML tree
    """

    namespaces_visit = {
        wiki_page: 'wikipage',
    }

    def __call__(self, element):
        return self.visit(element)

    def do_children(self, element):
        new = []
        for child in element:
            if isinstance(child, ET.Element):
                r = self.visit(child)
                if r is None:
                    r = ()
                elif not isinstance(r, (list, tuple)):
                    r = (r, )
                new.extend(r)
            else:
                new.append(child)
        return new

    def new(self, tag, attrib={}, children=[]):
        return ET.Element(tag, attrib=attrib, children=children)

    def new_copy(self, tag, element, attrib={}):
        attrib_new = Attributes(element).convert()
        attrib_new.update(attrib)
        children = self.do_children(element)
        return self.new(tag, attrib_new, children)

    def visit(self, elem):
        uri = elem.tag.uri
        name = self.namespaces_visit.get(uri, None)
        if name is not None:
            n = 'visit_' + name
            f = getattr(self, n, None)
            if f is not None:
                return f(elem)

        # Element with unknown namespaces are just copied
        return self.new_copy(elem.tag, elem)

    def visit_wikipage(self, elem):
        n = 'visit_wikipage_' + elem.tag.name.replace('-', '_')
        f = getattr(self, n, None)
        if f:
            return f(elem)

        raise ElementException('Unable to handle page:%s' % elem.tag.name)

    def visit_wikipage_a(self, elem, _tag_html_href=html.href, _tag_xlink_href=xlink.href):
        attrib = {}
        href = elem.get(_tag_xlink_href)
        if href:
            attrib[_tag_html_href] = href
        return self.new_copy(html.a, elem, attrib)

    def visit_wikipage_blockcode(self, elem):
        return self.new_copy(html.pre, elem)

    def visit_wikipage_body(self, elem):
        return self.new_copy(html.div, elem)

    def visit_wikipage_code(self, elem):
        return self.new_copy(html.tt, elem)

    def visit_wikipage_emphasis(self, elem):
        return self.new_copy(html.em, elem)

    def visit_wikipage_error(self, elem):
        attrib = {html.class_: 'error'}
        if len(elem):
            return self.new(html.span, attrib, self.do_children(elem))
        return self.new(html.span, attrib, ['Error'])

    def visit_wikipage_h(self, elem):
        level = elem.get(wiki_page.outline_level, 1)
        try:
            level = int(level)
        except ValueError:
            raise ElementException('page:outline-level needs to be an integer')
        if level < 1:
            level = 1
        elif level > 6:
            level = 6
        return self.new_copy(ET.QName('h%d' % level, html), elem)

    def visit_wikipage_inline_part(self, elem):
        body = error = None

        for item in elem:
            if isinstance(item, ET.Element) and item.tag.uri == wiki_page:
                if item.tag.name == 'inline-body':
                    body = item
                elif item.tag.name == 'error':
                    error = item

        if body is not None:
            return self.do_children(body)

        if error is not None:
            return self.visit_wikipage_error(error)

        alt = elem.get(wiki_page.alt)
        if alt:
            return html.span(children=(alt, ))

        return html.span()

    def visit_wikipage_line_break(self, elem):
        return self.new(html.br)

    def visit_wikipage_list(self, elem):
        attrib = Attributes(elem)
        attrib_new = attrib.convert()
        generate = attrib.get('item-label-generate')

        if generate:
            if generate == 'ordered':
                ret = self.new(html.ol, attrib_new)
            elif generate == 'unordered':
                ret = self.new(html.ul, attrib_new)
            else:
                raise ElementException('page:item-label-generate does not support "%s"' % generate)
        else:
            ret = self.new(html.dl, attrib_new)

        for item in elem:
            if isinstance(item, ET.Element) and item.tag == wiki_page.list_item:
                if not generate:
                    for label in item:
                        if isinstance(label, ET.Element) and label.tag == wiki_page.list_item_label:
                            ret.append(self.new_copy(html.dt, label))

                for body in item:
                    if isinstance(body, ET.Element) and body.tag == wiki_page.list_item_body:
                        if generate:
                            ret.append(self.new_copy(html.li, body))
                        else:
                            ret.append(self.new_copy(html.dd, body))
                        break

        return ret

    def visit_wikipage_object(self, elem):
        attrib = {}
        href = elem.get(xlink.href)
        if href:
            attrib[html.src] = href
        alt = elem.get(wiki_page.alt) or href
        if alt:
            attrib[html.alt] = alt
        return self.new_copy(html.img, elem, attrib)

    def visit_wikipage_p(self, elem):
        return self.new_copy(html.p, elem)

    def visit_wikipage_page(self, elem):
        for item in elem:
            if isinstance(item, ET.Element) and item.tag == wiki_page.body:
                return self.new_copy(html.div, item)

        raise RuntimeError('page:page need to contain exactly one page:body tag, got %r' % elem[:])

    def visit_wikipage_part(self, elem):
        body = error = None

        for item in elem:
            if isinstance(item, ET.Element) and item.tag.uri == wiki_page:
                if item.tag.name == 'body':
                    body = item
                elif item.tag.name == 'error':
                    error = item

        if body is not None:
            return self.new_copy(html.div, body)

        if error is not None:
            children = self.do_children(error) or ['Error']
            return self.new(html.p, {html.class_: 'error'}, children)

        alt = elem.get(wiki_page.alt)
        if alt:
            return html.p(children=(alt, ))

        return html.p()

    def visit_wikipage_separator(self, elem):
        return self.new(html.hr)

    def visit_wikipage_strong(self, elem):
        return self.new_copy(html.strong, elem)

    def visit_wikipage_table(self, elem):
        attrib = Attributes(elem).convert()
        ret = self.new(html.table, attrib)
        for item in elem:
            if isinstance(item, ET.Element) and item.tag == wiki_page.table_body:
                ret.append(self.new_copy(html.tbody, item))
        return ret

    def visit_wikipage_table_cell(self, elem):
        if elem.get(wiki_page.header) == 'true':
            return self.new_copy(html.th, elem)
        return self.new_copy(html.td, elem)

    def visit_wikipage_table_row(self, elem):
        return self.new_copy(html.tr, elem)

    def visit_wikipage_variable(self, elem):
        return self.do_children(elem)


class SpecialId(object):
    """ generates unique heading ids: section-<page>-<heading>[-n] """
    _unsafe_re = re.compile(r'[^\w.-]+', re.U)

    def __init__(self, page_name=None):
        self.page_name = page_name or u''
        self._ids = {}

    def gen_text(self, text):
        id = u'section-%s-%s' % (util.wikify_link(self.page_name) or u'',
                                 util.wikify_link(text) or u'')
        id = self._unsafe_re.sub(u'', id)
        nr = self._ids[id] = self._ids.get(id, 0) + 1
        if nr == 1:
            return id
        return id + u'-%d' % nr


class ConverterPage(Converter):
    """
    Converter application/x-jspwiki-document -> application/x-xhtml-jspwiki-page

    Like Converter, additionally gives all headings an id.
    """

    @classmethod
    def _factory(cls, input, output, **kw):
        if input == type_jspwiki_document and output == type_html:
            return cls

    def __call__(self, element):
        self._id = SpecialId(element.get(wiki_page.page_name))
        return super(ConverterPage, self).__call__(element)

    def visit_wikipage_h(self, elem):
        elem = super(ConverterPage, self).visit_wikipage_h(elem)

        id = elem.get(html.id)
        if not id:
            id = self._id.gen_text(u''.join(elem.itertext()))
            elem.set(html.id, id)
        return elem


default_registry.register(ConverterPage._factory)
