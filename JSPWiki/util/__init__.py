# -*- coding: utf-8 -*-
"""
    JSPWiki - utility functions

    Small text helpers used all over the place: page name cleanup and
    typed access to string properties.

    @copyright: 2004 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import re

# punctuation that survives link cleanup
PUNCTUATION_CHARS_ALLOWED = u"._"

_whitespace_re = re.compile(r'\s+', re.UNICODE)

TRUE_VALUES = ('true', 'yes', 'on', '1', )


def clean_link(link, allowed_chars=PUNCTUATION_CHARS_ALLOWED):
    """
    Clean a wiki name: drop all characters that are neither letters, digits
    nor in allowed_chars, collapse whitespace runs into a single blank and
    strip leading and trailing whitespace. A letter following whitespace is
    upper-cased.

    @param link: the (user supplied) page name
    @param allowed_chars: punctuation that is kept
    @rtype: unicode
    @return: cleaned up page name
    """
    if link is None:
        return None
    clean = []
    upper_next = False
    for ch in _whitespace_re.sub(u' ', link.strip()):
        if ch == u' ':
            if clean and clean[-1] != u' ':
                clean.append(ch)
            upper_next = True
        elif ch.isalnum() or ch in allowed_chars:
            if upper_next:
                ch = ch.upper()
                upper_next = False
            clean.append(ch)
    return u''.join(clean).strip()


def wikify_link(link):
    """
    Turn a free-form link text into a CamelCase wiki name,
    e.g. u"main page" -> u"MainPage".
    """
    if link is None:
        return None
    cleaned = clean_link(link)
    if not cleaned:
        return cleaned
    cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned.replace(u' ', u'')


def get_string_property(props, key, default=None):
    """ return the stripped value of key or default if it is missing or blank """
    value = props.get(key)
    if value is None:
        return default
    value = value.strip()
    if not value:
        return default
    return value


def get_boolean_property(props, key, default=False):
    """ return a boolean property, accepting true/yes/on/1 (any case) as True """
    value = props.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    value = value.strip()
    if not value:
        return default
    return value.lower() in TRUE_VALUES


def get_integer_property(props, key, default=0):
    """ return an int property, falling back to default on missing or garbled values """
    value = props.get(key)
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def is_blank(text):
    return text is None or not text.strip()
