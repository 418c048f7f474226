# -*- coding: utf-8 -*-
"""
    JSPWiki - version handling

    Version strings look like "a.b.c-qualifier", e.g. "2.12.2" or
    "2.0.0-alpha". Missing trailing numbers count as 0, the qualifier is
    optional. A qualified version is older than the same unqualified one
    ("2.0.0-alpha" < "2.0.0").

    @copyright: 2008 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import re

from JSPWiki.error import Error


class VersionFormatError(Error, ValueError):
    """ Raised if a version string can't be parsed """


_version_re = re.compile(r"""
    ^\s*
    (?P<numbers> \d+ (?: \. \d+ ){0,2} )
    (?: - (?P<qualifier> [\w.-]+ ) )?
    \s*$
""", re.X)


class Version(tuple):
    """
    Version objects store versions like 2.12.2-svn.

    A Version is a tuple (major, minor, release, additional), so versions
    can be compared like tuples, except that a version with "additional"
    information (the qualifier) sorts before the release without it.
    """
    def __new__(cls, major=0, minor=0, release=0, additional=''):
        if additional is None:
            additional = ''
        return tuple.__new__(cls, (int(major), int(minor), int(release), str(additional)))

    @classmethod
    def parse_version(cls, version):
        """
        Parse a version string into a Version.

        @param version: string like "2.12.2" or "2.0.0-alpha"
        @raise VersionFormatError: if the text is not a valid version
        """
        if isinstance(version, Version):
            return version
        if version is None:
            raise VersionFormatError(u"Version must not be None")
        m = _version_re.match(version)
        if m is None:
            raise VersionFormatError(u"Invalid version string: %r" % version)
        numbers = [int(n) for n in m.group('numbers').split('.')]
        numbers += [0] * (3 - len(numbers))
        return cls(numbers[0], numbers[1], numbers[2], m.group('qualifier') or '')

    major = property(lambda self: self[0])
    minor = property(lambda self: self[1])
    release = property(lambda self: self[2])
    additional = property(lambda self: self[3])

    def _key(self):
        # an empty qualifier (final release) sorts after any qualifier
        return (self[0], self[1], self[2], self[3] == '', self[3])

    def _coerce(self, other):
        if isinstance(other, str):
            return Version.parse_version(other)
        if isinstance(other, Version):
            return other
        return NotImplemented

    def __eq__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return tuple.__eq__(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return tuple.__hash__(self)

    def __lt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self._key() < other._key()

    def __le__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self._key() <= other._key()

    def __gt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self._key() > other._key()

    def __ge__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self._key() >= other._key()

    def is_greater_than_or_equal_to(self, other):
        return self >= Version.parse_version(other)

    def is_lower_than_or_equal_to(self, other):
        return self <= Version.parse_version(other)

    def __str__(self):
        version_str = "%d.%d.%d" % self[:3]
        if self.additional:
            version_str = "%s-%s" % (version_str, self.additional)
        return version_str

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, str(self))


Version.ZERO = Version(0, 0, 0)
