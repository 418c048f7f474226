# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki markup input converter

    Converts page text into the internal document tree.

    Block markup (one construct per line):
    * !!! large, !! medium and ! small headings
    * ---- horizontal rule
    * * and # lists, nested by repeating the marker
    * ;term:definition
    * || header cells and | cells of a table row
    * {{{ ... }}} preformatted blocks
    * [{PluginName key='value'}] alone on a line: a block plugin

    Inline markup:
    * __bold__, ''italic'', {{monospace}}, {{{preformatted}}}
    * \\\\ line break, ~ escapes the next character, [[ is a literal [
    * [PageName], [text|target], bare URLs (image URLs are inlined)
    * [{$variable}], [{PluginName ...}], [{INSERT PluginName WHERE ...}]

    ACL lines ([{ALLOW ...}]) are not rendered.

    Links to wiki pages get a "wiki.local:" href, they are resolved by the
    link converter.

    @copyright: 2007 MoinMoin:RadomirDopieralski (creole 0.5 implementation),
                2007 MoinMoin:ThomasWaldmann (updates),
                2008 MoinMoin:BastianBlank,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import re

from emeraldtree import ElementTree as ET

from JSPWiki.converter import _args, default_registry, type_jspwiki_markup, type_jspwiki_document
from JSPWiki.security import strip_acl_lines
from JSPWiki.util.tree import wiki_page, xlink

WIKI_LOCAL = u'wiki.local:'

PLUGIN_CONTENT_TYPE = u'x-jspwiki/plugin;name='

IMAGE_EXTENSIONS = ('.png', '.gif', '.jpg', '.jpeg', '.bmp', '.svg', '.webp', )

URL_SCHEMES = ('http', 'https', 'ftp', 'mailto', 'news', 'file', 'irc', )

_url_target_re = re.compile(r'^(%s):' % '|'.join(URL_SCHEMES), re.I)


def is_external_target(target):
    return bool(_url_target_re.match(target))


def is_image_url(url):
    return is_external_target(url) and url.lower().split('?')[0].endswith(IMAGE_EXTENSIONS)


class _Iter(object):
    """
    Iterator with push back support

    Collected items can be pushed back into the iterator and further calls will
    return them.
    """

    def __init__(self, parent):
        self.__finished = False
        self.__parent = iter(parent)
        self.__prepend = []

    def __iter__(self):
        return self

    def __next__(self):
        if self.__finished:
            raise StopIteration

        if self.__prepend:
            return self.__prepend.pop(0)

        try:
            return next(self.__parent)
        except StopIteration:
            self.__finished = True
            raise

    def push(self, item):
        self.__prepend.append(item)


class Converter(object):
    tag_a = wiki_page.a
    tag_alt = wiki_page.alt
    tag_blockcode = wiki_page.blockcode
    tag_code = wiki_page.code
    tag_emphasis = wiki_page.emphasis
    tag_h = wiki_page.h
    tag_href = xlink.href
    tag_line_break = wiki_page.line_break
    tag_list = wiki_page.list
    tag_list_item = wiki_page.list_item
    tag_list_item_body = wiki_page.list_item_body
    tag_list_item_label = wiki_page.list_item_label
    tag_object = wiki_page.object
    tag_outline_level = wiki_page.outline_level
    tag_p = wiki_page.p
    tag_separator = wiki_page.separator
    tag_strong = wiki_page.strong
    tag_table = wiki_page.table
    tag_table_body = wiki_page.table_body
    tag_table_cell = wiki_page.table_cell
    tag_table_row = wiki_page.table_row

    @classmethod
    def factory(cls, input, output, **kw):
        if input == type_jspwiki_markup and output == type_jspwiki_document:
            return cls

    def __init__(self, page_name=None):
        self.page_name = page_name
        self._stack = []

    def __call__(self, content):
        """
        @param content: page text or an iterable of lines
        @return: the wiki_page.page root element
        """
        if isinstance(content, str):
            content = strip_acl_lines(content).splitlines()

        attrib = {}
        if self.page_name:
            attrib[wiki_page.page_name] = self.page_name

        body = wiki_page.body()
        root = wiki_page.page(attrib=attrib, children=[body])

        self._stack = [body]
        iter_content = _Iter(content)

        # Please note that the iterator can be modified by other functions
        for line in iter_content:
            match = self.block_re.match(line)
            self._apply(match, 'block', iter_content)

        return root

    block_line = r'(?P<line> ^ \s* $ )'
    # empty line that separates paragraphs

    def block_line_repl(self, _iter_content, line):
        self.stack_clear()

    block_head = r"""
        (?P<head>
            ^
            (?P<head_head> !{1,3} ) \s*
            (?P<head_text> .*? ) \s*
            $
        )
    """

    def block_head_repl(self, _iter_content, head, head_head, head_text=u''):
        self.stack_clear()

        # !!! is the largest heading
        attrib = {self.tag_outline_level: str(5 - len(head_head))}
        element = ET.Element(self.tag_h, attrib=attrib)
        self.stack_push(element)
        self.parse_inline(head_text)
        self.stack_clear()

    block_separator = r'(?P<separator> ^ \s* -{4,} \s* $ )'

    def block_separator_repl(self, _iter_content, separator):
        self.stack_clear()
        self.stack_top_append(ET.Element(self.tag_separator))

    block_plugin = r"""
        ^ \s*
        (?P<plugin>
            \[\{
            (?! \$ | ALLOW \s )
            (?P<plugin_text> [^}]+? )
            \s* \}\]
        )
        \s* $
    """

    def block_plugin_repl(self, _iter_content, plugin, plugin_text):
        """ a plugin alone on a line is a block element """
        self.stack_clear()

        elem = self.plugin(plugin_text, plugin, context_block=True)
        if elem is not None:
            self.stack_top_append(elem)

    block_nowiki = r"""
        (?P<nowiki>
            ^ \s* {{{
            (?P<nowiki_first> (?! .* }}} ) .* )
            $
        )
    """
    # Matches the beginning of a preformatted block not closed on the same line

    nowiki_end = r"""
        ^ (?P<nowiki_last> .*? ) }}} (?P<rest> .* ) $
    """

    def block_nowiki_repl(self, iter_content, nowiki, nowiki_first=u''):
        "Handles a complete preformatted block"

        self.stack_clear()

        lines = []
        if nowiki_first.strip():
            lines.append(nowiki_first)
        rest = None
        for line in iter_content:
            match = self.nowiki_end_re.match(line)
            if match:
                if match.group('nowiki_last'):
                    lines.append(match.group('nowiki_last'))
                rest = match.group('rest')
                break
            lines.append(line)

        element = ET.Element(self.tag_blockcode, children=[u'\n'.join(lines)])
        self.stack_top_append(element)

        if rest and rest.strip():
            iter_content.push(rest)

    block_list = r"""
        (?P<list>
            ^ [*\#]+ (?! [*\#]* \s* $ ) .* $
        )
    """
    # Matches the beginning of a list. All lines within a list are handled by
    # list_*.

    def block_list_repl(self, iter_content, list):
        iter_content.push(list)

        for line in iter_content:
            match = self.list_re.match(line)
            self._apply(match, 'list', iter_content)

            if match.group('end') is not None:
                # Allow the mainloop to take care of the line after a list.
                iter_content.push(line)
                break

    block_definition = r"""
        (?P<definition>
            ^ ; \s*
            (?P<definition_term> [^:]* ) \s*
            (: \s* (?P<definition_text> .* ))?
            $
        )
    """

    def block_definition_repl(self, _iter_content, definition, definition_term=u'', definition_text=u''):
        if not self.stack_top_check('list') or self.stack_top().get(wiki_page.item_label_generate):
            self.stack_clear()
            self.stack_push(ET.Element(self.tag_list))

        item = ET.Element(self.tag_list_item)
        self.stack_push(item)

        label = ET.Element(self.tag_list_item_label)
        self.stack_push(label)
        self.parse_inline(definition_term.strip())
        self.stack_pop()

        body = ET.Element(self.tag_list_item_body)
        self.stack_push(body)
        self.parse_inline(definition_text or u'')
        self.stack_pop()

        self.stack_pop()

    block_table = r"""
        (?P<table>
            ^ \s* \| .* $
        )
    """

    def block_table_repl(self, iter_content, table):
        self.stack_clear()

        element = ET.Element(self.tag_table)
        self.stack_push(element)
        element = ET.Element(self.tag_table_body)
        self.stack_push(element)

        self.block_table_row(table)

        for line in iter_content:
            match = self.table_re.match(line)
            if not match:
                # Allow the mainloop to take care of the line after a table.
                iter_content.push(line)
                break

            self.block_table_row(match.group('table'))

        self.stack_clear()

    def block_table_row(self, content):
        element = ET.Element(self.tag_table_row)
        self.stack_push(element)

        content = content.strip()
        # a closing | does not start another cell
        if content.endswith(u'|') and not content.endswith(u'~|'):
            content = content.rstrip(u'|')
        for match in self.tablerow_re.finditer(content):
            self._apply(match, 'tablerow')

        self.stack_pop()

    block_text = r'(?P<text> .+ )'

    def block_text_repl(self, _iter_content, text):
        if self.stack_top_check('table', 'table-body', 'list'):
            self.stack_clear()

        if self.stack_top_check('body'):
            element = ET.Element(self.tag_p)
            self.stack_push(element)
        # If we are in a paragraph already, don't loose the whitespace
        else:
            self.stack_top_append(u'\n')
        self.parse_inline(text)

    inline_url = r"""
        (?P<url>
            (^ | (?<= \s | [(] ))
            (?P<url_target>
                (%s):
                [^\s\[\]|]+?
            )
            ($ | (?= \s | [,.;:!?)] (\s | $) ))
        )
    """ % '|'.join(URL_SCHEMES)

    def inline_url_repl(self, url, url_target):
        """Handle raw urls in text."""
        if is_image_url(url_target):
            element = ET.Element(self.tag_object, attrib={self.tag_href: url_target})
        else:
            attrib = {self.tag_href: url_target}
            element = ET.Element(self.tag_a, attrib=attrib, children=[url_target])
        self.stack_top_append(element)

    inline_escape = r'(?P<escape> ~ (?P<escaped_char> \S ) )'

    def inline_escape_repl(self, escape, escaped_char):
        self.stack_top_append(escaped_char)

    inline_bracket = r'(?P<bracket> \[\[ )'

    def inline_bracket_repl(self, bracket):
        self.stack_top_append(u'[')

    inline_variable = r"""
        (?P<variable>
            \[\{ \$ \s* (?P<variable_name> [\w.]+ ) \s* \}\]
        )
    """

    def inline_variable_repl(self, variable, variable_name):
        element = wiki_page.variable(attrib={wiki_page.name: variable_name.lower()})
        self.stack_top_append(element)

    inline_acl = r'(?P<acl> \[\{ \s* ALLOW \s [^}]* \}\] )'

    def inline_acl_repl(self, acl):
        # ACLs are page metadata, not content
        pass

    inline_plugin = r"""
        (?P<plugin>
            \[\{
            (?P<plugin_text> [^}]+? )
            \s* \}\]
        )
    """

    def inline_plugin_repl(self, plugin, plugin_text):
        elem = self.plugin(plugin_text, plugin, context_block=False)
        if elem is not None:
            self.stack_top_append(elem)

    inline_link = r"""
        (?P<link>
            \[
            (?! \[ | \{ )
            \s*
            ( (?P<link_text> [^|\]]+? ) \s* \| \s* )?
            (?P<link_target> [^|\]]+? )
            \s*
            \]
        )
    """

    def inline_link_repl(self, link, link_target, link_text=None):
        """Handle all kinds of links."""
        if is_image_url(link_target):
            attrib = {self.tag_href: link_target}
            if link_text:
                attrib[self.tag_alt] = link_text
            self.stack_top_append(ET.Element(self.tag_object, attrib=attrib))
            return

        if is_external_target(link_target) or link_target.startswith(u'#'):
            target = link_target
        else:
            target = WIKI_LOCAL + link_target
        element = ET.Element(self.tag_a, attrib={self.tag_href: target})
        self.stack_push(element)
        self.parse_inline(link_text or link_target, self.link_desc_re)
        self.stack_pop_name('a')
        self.stack_pop()

    inline_nowiki = r"""
        (?P<nowiki>
            {{{
            (?P<nowiki_text> .*? )
            }}}
        )
    """

    def inline_nowiki_repl(self, nowiki, nowiki_text=u''):
        self.stack_top_append(ET.Element(self.tag_code, children=[nowiki_text]))

    inline_mono = r"""
        (?P<mono>
            {{
            (?P<mono_text> .*? )
            }}
        )
    """

    def inline_mono_repl(self, mono, mono_text=u''):
        element = ET.Element(self.tag_code)
        self.stack_push(element)
        self.parse_inline(mono_text)
        self.stack_pop()

    inline_strong = r'(?P<strong> __ )'

    def inline_strong_repl(self, strong):
        if not self.stack_top_check('strong'):
            self.stack_push(ET.Element(self.tag_strong))
        else:
            self.stack_pop_name('strong')
            self.stack_pop()

    inline_emph = r"(?P<emph> '' )"

    def inline_emph_repl(self, emph):
        if not self.stack_top_check('emphasis'):
            self.stack_push(ET.Element(self.tag_emphasis))
        else:
            self.stack_pop_name('emphasis')
            self.stack_pop()

    inline_linebreak = r'(?P<linebreak> \\\\ )'

    def inline_linebreak_repl(self, linebreak):
        element = ET.Element(self.tag_line_break)
        self.stack_top_append(element)

    list_end = r"""
        (?P<end>
            ^
            (
                # End the list on blank line,
                \s* $
                |
                # heading,
                !
                |
                # table,
                \s* \|
                |
                # definition,
                ;
                |
                # rule,
                \s* ----
                |
                # and preformatted block
                \s* {{{
            )
        )
    """
    # Matches a line which will end a list

    def list_end_repl(self, _iter_content, end):
        self.stack_clear()

    list_item = r"""
        (?P<item>
            ^
            (?P<item_head> [\#*]+ ) \s*
            (?P<item_text> .*? )
            $
        )
    """
    # Matches single list items

    def list_item_repl(self, _iter_content, item, item_head, item_text=u''):
        list_level = len(item_head)
        list_type = item_head[-1]

        # Try to locate the list element which matches the requested level and
        # type.
        while True:
            cur = self.stack_top()
            if cur.tag.name == 'body':
                break
            if cur.tag.name == 'list-item-body':
                if list_level > cur.list_level:
                    break
            if cur.tag.name == 'list' and hasattr(cur, 'list_level'):
                if list_level >= cur.list_level and list_type == cur.list_type:
                    break
            self.stack_pop()

        if cur.tag.name != 'list':
            generate = list_type == '#' and 'ordered' or 'unordered'
            attrib = {wiki_page.item_label_generate: generate}
            element = ET.Element(self.tag_list, attrib=attrib)
            element.list_level, element.list_type = list_level, list_type
            self.stack_push(element)

        element = ET.Element(self.tag_list_item)
        element_body = ET.Element(self.tag_list_item_body)
        element_body.list_level, element_body.list_type = list_level, list_type

        self.stack_push(element)
        self.stack_push(element_body)

        self.parse_inline(item_text)

    list_text = block_text

    list_text_repl = block_text_repl

    table = block_table

    tablerow = r"""
        (?P<cell>
            (?P<cell_head> \|\| | \| )
            \s*
            (?P<cell_text> ( \[[^\]]*\] | [^|] )* )
        )
    """

    def tablerow_cell_repl(self, cell, cell_head, cell_text=u''):
        attrib = {}
        if cell_head == u'||':
            attrib[wiki_page.header] = u'true'
        element = ET.Element(self.tag_table_cell, attrib=attrib)
        self.stack_push(element)

        self.parse_inline(cell_text.strip())

        self.stack_pop_name('table-cell')
        self.stack_pop()

    # Block elements
    block = (
        block_line,
        block_head,
        block_separator,
        block_plugin,
        block_nowiki,
        block_list,
        block_definition,
        block_table,
        block_text,
    )
    block_re = re.compile('|'.join(block), re.X | re.U)

    # Inline elements
    inline = (
        inline_url,
        inline_escape,
        inline_bracket,
        inline_variable,
        inline_acl,
        inline_plugin,
        inline_link,
        inline_nowiki,
        inline_mono,
        inline_strong,
        inline_emph,
        inline_linebreak,
    )
    inline_re = re.compile('|'.join(inline), re.X | re.U)

    # Link description
    link_desc = (
        inline_escape,
        inline_strong,
        inline_emph,
        inline_linebreak,
    )
    link_desc_re = re.compile('|'.join(link_desc), re.X | re.U)

    # List items
    list = (
        list_end,
        list_item,
        list_text,
    )
    list_re = re.compile('|'.join(list), re.X | re.U)

    # Preformatted block end
    nowiki_end_re = re.compile(nowiki_end, re.X)

    # Table
    table_re = re.compile(table, re.X | re.U)

    # Table row
    tablerow_re = re.compile(tablerow, re.X | re.U)

    # Plugin invocation: [{INSERT name WHERE args}] or [{name args}]
    plugin_re = re.compile(r"""
        ^ \s*
        (INSERT \s+)?
        (?P<name> [\w.]+ )
        (\s+ WHERE)?
        \s* (?P<args> .*? ) \s* $
    """, re.X | re.S)

    def plugin(self, text, markup, context_block=False):
        """
        Build the placeholder element of a plugin invocation, the plugin
        converter executes it.
        """
        match = self.plugin_re.match(text)
        if not match:
            return wiki_page.error(children=[markup])
        name = match.group('name').split('.')[-1]
        args = _args.parse(match.group('args'))

        tag = context_block and wiki_page.part or wiki_page.inline_part
        elem = tag(attrib={
            wiki_page.alt: markup,
            wiki_page.content_type: PLUGIN_CONTENT_TYPE + name,
        })

        if args:
            elem_arguments = wiki_page.arguments()
            elem.append(elem_arguments)

            for key, value in args.items():
                attrib = {}
                if key:
                    attrib[wiki_page.name] = key
                elem_arg = wiki_page.argument(attrib=attrib, children=(value, ))
                elem_arguments.append(elem_arg)

        return elem

    def stack_clear(self):
        del self._stack[1:]

    def stack_pop_name(self, *names):
        """
        Look up the tree to the first occurence
        of one of the listed kinds of nodes or root.
        """
        while len(self._stack) > 1 and not self.stack_top_check(*names):
            self._stack.pop()

    def stack_pop(self):
        self._stack.pop()

    def stack_push(self, elem):
        self.stack_top_append(elem)
        self._stack.append(elem)

    def stack_top(self):
        return self._stack[-1]

    def stack_top_append(self, elem):
        self._stack[-1].append(elem)

    def stack_top_append_ifnotempty(self, elem):
        if elem:
            self.stack_top_append(elem)

    def stack_top_check(self, *names):
        """
        Checks if the name of the top of the stack matches the parameters.
        """
        tag = self._stack[-1].tag
        return tag.uri == wiki_page.namespace and tag.name in names

    def _apply(self, match, prefix, *args):
        """
        Call the _repl method for the last matched group with the given prefix.
        """
        data = dict(((k, v) for k, v in match.groupdict().items() if v is not None))
        getattr(self, '%s_%s_repl' % (prefix, match.lastgroup))(*args, **data)

    def parse_inline(self, text, inline_re=inline_re):
        """Recognize inline elements within the given text"""

        pos = 0
        for match in inline_re.finditer(text):
            # Handle leading text
            self.stack_top_append_ifnotempty(text[pos:match.start()])
            pos = match.end()

            self._apply(match, 'inline')

        # Handle trailing text
        self.stack_top_append_ifnotempty(text[pos:])


default_registry.register(Converter.factory)
