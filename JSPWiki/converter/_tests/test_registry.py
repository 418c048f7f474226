# -*- coding: utf-8 -*-
"""
JSPWiki - Tests for the converter registry

@copyright: 2008,2009 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

import pytest

from JSPWiki.converter import Registry, default_registry, \
                              type_jspwiki_markup, type_jspwiki_document, type_html


def factory_none(input, output, **kw):
    pass


def factory_all(input, output, **kw):
    return 'all'


def factory_first(input, output, **kw):
    return 'first'


def factory_markup(input, output, **kw):
    if input == type_jspwiki_markup and output == type_jspwiki_document:
        return 'markup'


def test_get():
    r = Registry()
    r.register(factory_none)
    r.register(factory_markup)
    assert r.get(type_jspwiki_markup, type_jspwiki_document) == 'markup'
    with pytest.raises(TypeError):
        r.get(type_jspwiki_document, type_html)

    r.register(factory_all, r.PRIORITY_LAST)
    assert r.get(type_jspwiki_document, type_html) == 'all'
    assert r.get(type_jspwiki_markup, type_jspwiki_document) == 'markup'

    r.register(factory_first, r.PRIORITY_FIRST)
    assert r.get(type_jspwiki_markup, type_jspwiki_document) == 'first'


def test_register():
    r = Registry()
    r.register(factory_all)
    r.register(factory_none)
    r.register(factory_none)
    assert len(r) == 2
    assert factory_none in r


def test_unregister():
    r = Registry()
    r.register(factory_all)
    r.unregister(factory_all)
    assert len(r) == 0
    with pytest.raises(ValueError):
        r.unregister(factory_all)


def test_default_registry():
    # the converter modules of the package registered themselves
    assert default_registry.get(type_jspwiki_markup, type_jspwiki_document) is not None
    assert default_registry.get(type_jspwiki_document, type_html) is not None
