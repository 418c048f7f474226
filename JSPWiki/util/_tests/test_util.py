# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.util Tests

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki import util


def test_clean_link():
    tests = [
        (u'MainPage', u'MainPage'),
        (u'  main   page ', u'main Page'),
        (u'a!b?c', u'abc'),
        (u'file_name.txt', u'file_name.txt'),
        (u'Äpfel und Birnen', u'Äpfel Und Birnen'),
        (u'', u''),
    ]
    for link, expected in tests:
        assert util.clean_link(link) == expected
    assert util.clean_link(None) is None


def test_wikify_link():
    assert util.wikify_link(u'main page') == u'MainPage'
    assert util.wikify_link(u'recent changes!') == u'RecentChanges'
    assert util.wikify_link(u'') == u''
    assert util.wikify_link(None) is None


def test_string_property():
    props = {'a': u'  value ', 'blank': u'   '}
    assert util.get_string_property(props, 'a') == u'value'
    assert util.get_string_property(props, 'blank', u'default') == u'default'
    assert util.get_string_property(props, 'missing', u'default') == u'default'


def test_boolean_property():
    props = {'yes': u'Yes', 'on': u'ON', 'one': u'1', 'true': u' true ',
             'no': u'no', 'garbage': u'perhaps', 'blank': u''}
    for key in ['yes', 'on', 'one', 'true']:
        assert util.get_boolean_property(props, key) is True
    for key in ['no', 'garbage']:
        assert util.get_boolean_property(props, key, True) is False
    assert util.get_boolean_property(props, 'blank', True) is True
    assert util.get_boolean_property(props, 'missing') is False


def test_integer_property():
    props = {'n': u' 42 ', 'bad': u'forty-two'}
    assert util.get_integer_property(props, 'n') == 42
    assert util.get_integer_property(props, 'bad', 7) == 7
    assert util.get_integer_property(props, 'missing', 3) == 3


def test_is_blank():
    assert util.is_blank(None)
    assert util.is_blank(u' \t')
    assert not util.is_blank(u' x ')
