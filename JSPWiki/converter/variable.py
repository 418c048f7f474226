"""
JSPWiki - Variable expansion

Fills the [{$name}] elements of an internal document with their values.
Unknown variables become error messages.

@copyright: 2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from emeraldtree import ElementTree as ET

from JSPWiki import api
from JSPWiki.converter import default_registry, type_jspwiki_document
from JSPWiki.util.tree import wiki_page


class Converter(object):
    @classmethod
    def _factory(cls, input, output, variables=None, **kw):
        if input == type_jspwiki_document and output == type_jspwiki_document and variables == 'expandall':
            return cls

    def __init__(self, context):
        self.context = context
        self.engine = context.engine

    def var_applicationname(self):
        return self.engine.application_name

    def var_pagename(self):
        page = self.context.page
        return page.name if page is not None else u''

    def var_jspwikiversion(self):
        return api.get_platform_version_string()

    def var_totalpages(self):
        return str(self.engine.page_manager.get_total_page_count())

    def var_baseurl(self):
        return self.engine.get_base_url()

    def value(self, name):
        """
        @return: the value of variable name
        @raise KeyError: no such variable
        """
        func = getattr(self, 'var_' + name.replace('.', '_'), None)
        if func is None:
            raise KeyError(name)
        return func()

    def __call__(self, tree):
        for elem in tree.iter_elements():
            if elem.tag == wiki_page.variable:
                name = elem.get(wiki_page.name)
                try:
                    elem.append(self.value(name))
                except KeyError:
                    elem.append(wiki_page.error(children=[u'No such variable: %s' % name]))
            else:
                self(elem)
        return tree


default_registry.register(Converter._factory)
