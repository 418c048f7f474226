"""
JSPWiki - Arguments wrapper

Holds the positional and keyword arguments of a plugin invocation.

@copyright: 2009 MoinMoin:BastianBlank,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

import re


class Arguments(object):
    __slots__ = 'positional', 'keyword'

    def __init__(self, positional=None, keyword=None):
        self.positional = positional and positional[:] or []
        self.keyword = keyword and keyword.copy() or {}

    def __contains__(self, key):
        return key in self.positional or key in self.keyword

    def __getitem__(self, key):
        if isinstance(key, (int, slice)):
            return self.positional[key]
        return self.keyword[key]

    def __len__(self):
        return len(self.positional) + len(self.keyword)

    def __repr__(self):
        return '<%s(%r, %r)>' % (self.__class__.__name__,
                self.positional, self.keyword)

    def get(self, key, default=None):
        return self.keyword.get(key, default)

    def items(self):
        """
        Return an iterator over all (key, value) pairs.
        Positional arguments are assumed to have a None key.
        """
        for value in self.positional:
            yield None, value
        for item in self.keyword.items():
            yield item

    def keys(self):
        """
        Return an iterator over all keys from the keyword arguments.
        """
        return iter(self.keyword)

    def values(self):
        """
        Return an iterator over all values.
        """
        for value in self.positional:
            yield value
        for value in self.keyword.values():
            yield value


# key=value, key='value with blanks', key="value", or positional values
_parse_rules = r'''
(?:
    ([\w.-]+)
    \s* = \s*
)?
(?:
    '
    (.*?)
    (?<!\\)'
    |
    "
    (.*?)
    (?<!\\)"
    |
    ([^\s'"=]+)
)
'''
_parse_re = re.compile(_parse_rules, re.X | re.S)

_unescape_re = re.compile(r'''\\(['"\\])''')


def parse(input):
    """
    Parse the argument string of a plugin invocation.

    @rtype: Arguments
    """
    ret = Arguments()

    for match in _parse_re.finditer(input or u''):
        key = match.group(1)
        value = match.group(2)
        if value is None:
            value = match.group(3)
        if value is None:
            value = match.group(4)
        value = _unescape_re.sub(r'\1', value)

        if key:
            ret.keyword[key] = value
        else:
            ret.positional.append(value)

    return ret
