# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.util.version Tests

    @copyright: 2008 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import pytest

from JSPWiki.util.version import Version, VersionFormatError


class TestVersion(object):
    def test_parse_version(self):
        assert Version.parse_version('2.12.2') == Version(2, 12, 2)
        assert Version.parse_version('2.12') == Version(2, 12, 0)
        assert Version.parse_version('3') == Version(3, 0, 0)
        assert Version.parse_version('2.0.0-alpha') == Version(2, 0, 0, 'alpha')
        assert Version.parse_version(' 1.2.3 ') == (1, 2, 3, '')

    def test_parse_version_errors(self):
        for bad in [None, '', 'a.b.c', '1.2.3.4', '1..2', '-alpha']:
            with pytest.raises(VersionFormatError):
                Version.parse_version(bad)
        # it is a ValueError, too
        pytest.raises(ValueError, Version.parse_version, 'nonsense')

    def test_str(self):
        assert str(Version(2, 0, 0, 'alpha')) == '2.0.0-alpha'
        assert str(Version.parse_version('2.12')) == '2.12.0'
        assert str(Version.ZERO) == '0.0.0'

    def test_compare(self):
        assert Version(1, 2, 3) > Version(1, 2, 2)
        assert Version(1, 10, 0) > Version(1, 9, 9)
        assert Version(2, 0, 0) > '1.99.99'
        # qualified versions come before the release
        assert Version(2, 0, 0, 'alpha') < Version(2, 0, 0)
        assert Version(2, 0, 0, 'alpha') < Version(2, 0, 0, 'beta')
        assert Version(2, 0, 0, 'beta') > Version(1, 9, 9)

    def test_is_greater_or_lower(self):
        version = Version.parse_version('2.12.2')
        assert version.is_greater_than_or_equal_to('2.12.2')
        assert version.is_greater_than_or_equal_to('2.9')
        assert not version.is_greater_than_or_equal_to('2.12.3')
        assert version.is_lower_than_or_equal_to('2.12.2')
        assert version.is_lower_than_or_equal_to('3')
        assert not version.is_lower_than_or_equal_to('2.12.1')

    def test_attributes(self):
        version = Version(2, 12, 2, 'svn')
        assert (version.major, version.minor, version.release, version.additional) == (2, 12, 2, 'svn')
