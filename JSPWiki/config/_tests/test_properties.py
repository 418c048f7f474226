# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.config.properties Tests

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import pytest

from JSPWiki.config.properties import PropertyReader, get_default_properties, load_wiki_properties
from JSPWiki.error import ConfigurationError


class TestPropertyReader(object):
    def test_separators(self):
        props = PropertyReader().loads(u"a = 1\nb:2\nc 3\nd=\n")
        assert props == {'a': u'1', 'b': u'2', 'c': u'3', 'd': u''}

    def test_comments_and_blank_lines(self):
        props = PropertyReader().loads(u"# comment\n! also a comment\n\n   \nkey = value\n")
        assert props == {'key': u'value'}

    def test_continuation_lines(self):
        props = PropertyReader().loads(u"list = one, \\\n       two, \\\n       three\nnext = x\n")
        assert props['list'] == u'one, two, three'
        assert props['next'] == u'x'

    def test_escapes(self):
        props = PropertyReader().loads(u"a\\=b = c\\td\nu = \\u0041\\u00e4\n")
        assert props['a=b'] == u'c\td'
        assert props['u'] == u'A\xe4'

    def test_later_keys_win(self):
        props = PropertyReader().loads(u"k = 1\nk = 2\n")
        assert props['k'] == u'2'

    def test_load(self, tmp_path):
        fname = tmp_path / 'site.properties'
        fname.write_text(u"jspwiki.applicationName = Site Wiki\n", encoding='utf-8')
        assert PropertyReader().load(str(fname)) == {'jspwiki.applicationName': u'Site Wiki'}

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            PropertyReader().load(str(tmp_path / 'missing.properties'))


def test_default_properties():
    props = get_default_properties()
    assert props['jspwiki.frontPage'] == u'Main'
    assert props['jspwiki.specialPage.Login'] == u'Login.jsp'
    assert props['jspwiki.baseURL'] == u''


def test_load_wiki_properties(tmp_path):
    fname = tmp_path / 'site.properties'
    fname.write_text(u"jspwiki.applicationName = Site Wiki\njspwiki.frontPage = Start\n", encoding='utf-8')
    props = load_wiki_properties(str(fname), {'jspwiki.frontPage': u'Home'})
    assert props['jspwiki.applicationName'] == u'Site Wiki'
    # the overrides win over the file
    assert props['jspwiki.frontPage'] == u'Home'
    # defaults are kept
    assert props['jspwiki.encoding'] == u'UTF-8'
