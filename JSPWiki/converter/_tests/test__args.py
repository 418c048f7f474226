"""
JSPWiki - Tests for JSPWiki.converter._args

@copyright: 2009 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from JSPWiki.converter._args import Arguments, parse


def test_Arguments():
    positional = []
    keyword = {}

    a = Arguments(positional, keyword)

    assert positional == a.positional
    assert positional is not a.positional
    assert keyword == a.keyword
    assert keyword is not a.keyword

    a = Arguments([u'a', u'b'], {u'c': u'd'})
    assert len(a) == 3
    assert a[0] == u'a'
    assert a[u'c'] == u'd'
    assert u'b' in a
    assert u'c' in a
    assert a.get(u'missing', u'x') == u'x'
    assert list(a.items()) == [(None, u'a'), (None, u'b'), (u'c', u'd')]
    assert list(a.keys()) == [u'c']
    assert list(a.values()) == [u'a', u'b', u'd']


def test_parse():
    a = parse(u'a b key=\'x y\' k2="q" k3=v')
    assert a.positional == [u'a', u'b']
    assert a.keyword == {u'key': u'x y', u'k2': u'q', u'k3': u'v'}

    a = parse(u"include='Foo.*' exclude = '.*Test'")
    assert a.keyword == {u'include': u'Foo.*', u'exclude': u'.*Test'}

    a = parse(u"msg='it\\'s'")
    assert a.keyword == {u'msg': u"it's"}

    assert len(parse(u'')) == 0
    assert len(parse(None)) == 0
