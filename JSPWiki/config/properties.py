# -*- coding: utf-8 -*-
"""
    JSPWiki - properties files

    JSPWiki keeps its tunables in "properties" files: ``key = value`` lines,
    ``#`` or ``!`` comment lines and trailing backslashes for continuation
    lines. Keys and values may also be separated by ``:`` or whitespace.
    This module reads such files into a plain dict.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import os
import re

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import config
from JSPWiki.error import ConfigurationError

_escapes = {
    't': u'\t',
    'n': u'\n',
    'r': u'\r',
    'f': u'\f',
}

_unicode_escape_re = re.compile(r'\\u([0-9a-fA-F]{4})')


def _unescape(text):
    text = _unicode_escape_re.sub(lambda m: chr(int(m.group(1), 16)), text)
    result = []
    chars = iter(text)
    for ch in chars:
        if ch == u'\\':
            ch = next(chars, u'')
            ch = _escapes.get(ch, ch)
        result.append(ch)
    return u''.join(result)


def _split_key_value(line):
    """ split a logical line at the first unescaped separator (=, : or blank) """
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch == u'\\':
            i += 2
            continue
        if ch in u'=: \t':
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(u' \t')
    if rest[:1] in (u'=', u':'):
        rest = rest[1:].lstrip(u' \t')
    return _unescape(key), _unescape(rest)


def _logical_lines(lines):
    """ join continuation lines, skip comments and blank lines """
    buf = None
    for line in lines:
        line = line.rstrip(u'\r\n')
        if buf is None:
            stripped = line.lstrip()
            if not stripped or stripped[0] in u'#!':
                continue
        else:
            stripped = line.lstrip()
        # an odd number of trailing backslashes continues the line
        trailing = len(stripped) - len(stripped.rstrip(u'\\'))
        if trailing % 2:
            stripped = stripped[:-1]
            buf = stripped if buf is None else buf + stripped
            continue
        yield stripped if buf is None else buf + stripped
        buf = None
    if buf is not None:
        yield buf


class PropertyReader(object):
    """
    Reader for properties files.

    @param encoding: charset of the files read
    """
    def __init__(self, encoding=config.charset):
        self.encoding = encoding

    def parse(self, lines):
        """
        Parse properties from an iterable of text lines.

        @rtype: dict
        @return: key -> value mapping, later keys override earlier ones
        """
        props = {}
        for line in _logical_lines(lines):
            key, value = _split_key_value(line)
            if key:
                props[key] = value
        return props

    def loads(self, text):
        return self.parse(text.splitlines())

    def load(self, fname):
        """
        Read a properties file.

        @param fname: path of the file
        @raise ConfigurationError: if the file can't be read
        """
        try:
            with open(fname, encoding=self.encoding) as f:
                props = self.parse(f)
        except (IOError, OSError, UnicodeError) as err:
            raise ConfigurationError(u"Could not read properties file %s: %s" % (fname, err))
        logging.debug("read %d properties from %s", len(props), fname)
        return props


def get_default_properties():
    """ the properties shipped with the wiki code """
    fname = os.path.join(os.path.dirname(__file__), config.default_properties_name)
    return PropertyReader().load(fname)


def load_wiki_properties(fname=None, overrides=None):
    """
    Build the effective wiki properties.

    Defaults come first, then the optional site properties file, then the
    overrides (usually the "properties" dict of the wiki configuration).

    @param fname: path of a site properties file or None
    @param overrides: dict of properties that win over everything else
    @rtype: dict
    """
    props = get_default_properties()
    if fname:
        props.update(PropertyReader().load(fname))
    if overrides:
        props.update(overrides)
    return props
