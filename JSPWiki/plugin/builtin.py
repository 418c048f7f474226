# -*- coding: utf-8 -*-
"""
    JSPWiki - built-in plugins

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import re
from datetime import datetime, timedelta, timezone

from JSPWiki.converter.jspwiki_in import WIKI_LOCAL
from JSPWiki.plugin import PluginError, WikiPlugin
from JSPWiki.util.tree import wiki_page, xlink


def _page_link(name):
    return wiki_page.a(attrib={xlink.href: WIKI_LOCAL + name}, children=[name])


def _compile(args, key):
    pattern = args.get(key)
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as err:
        raise PluginError(u"Invalid %s pattern %r: %s" % (key, pattern, err))


class CurrentTimePlugin(WikiPlugin):
    """
    The current server time.

    [{CurrentTimePlugin format='%d.%m.%Y'}] - format is a strftime format
    """
    description = u"Shows the current time"
    default_format = u'%Y-%m-%d %H:%M:%S'

    def execute(self, context, args, context_block=False):
        return datetime.now().strftime(args.get('format') or self.default_format)


class IndexPlugin(WikiPlugin):
    """
    An alphabetical list of all pages.

    [{IndexPlugin include='Foo.*' exclude='.*Test'}] - regular expressions
    the page names must (not) match
    """
    description = u"Lists all pages of the wiki"

    def execute(self, context, args, context_block=False):
        include = _compile(args, 'include')
        exclude = _compile(args, 'exclude')
        items = []
        for page in context.engine.page_manager.get_all_pages():
            if include is not None and not include.match(page.name):
                continue
            if exclude is not None and exclude.match(page.name):
                continue
            body = wiki_page.list_item_body(children=[_page_link(page.name)])
            items.append(wiki_page.list_item(children=[body]))
        return wiki_page.list(attrib={wiki_page.item_label_generate: 'unordered'}, children=items)


class RecentChangesPlugin(WikiPlugin):
    """
    A table of the pages and attachments changed recently.

    [{RecentChangesPlugin since='7'}] - number of days to look back (default 2)
    """
    description = u"Lists the recently changed pages"
    default_days = 2

    def execute(self, context, args, context_block=False):
        try:
            days = int(args.get('since') or self.default_days)
        except ValueError:
            raise PluginError(u"since must be a number of days")
        since = datetime.now(timezone.utc) - timedelta(days=days)
        rows = []
        for page in context.engine.page_manager.get_recent_changes():
            if page.last_modified < since:
                break
            cells = [
                wiki_page.table_cell(children=[_page_link(page.name)]),
                wiki_page.table_cell(children=[page.last_modified.strftime('%Y-%m-%d %H:%M')]),
                wiki_page.table_cell(children=[page.author or u'']),
            ]
            rows.append(wiki_page.table_row(children=cells))
        body = wiki_page.table_body(children=rows)
        return wiki_page.table(children=[body])
