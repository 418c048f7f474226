# -*- coding: utf-8 -*-
"""
    JSPWiki - i18n Tests

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki._tests import wikiconfig
from JSPWiki.i18n import _, get_locale


class TestLocale(object):
    class Config(wikiconfig.Config):
        language_default = 'de'
        language_supported = ['en', 'de', ]

    def test_best_match(self):
        with self.app.test_request_context('/', headers={'Accept-Language': 'fr, en;q=0.8, de;q=0.5'}):
            assert get_locale() == 'en'

    def test_default(self):
        with self.app.test_request_context('/', headers={'Accept-Language': 'fr'}):
            assert get_locale() == 'de'
        with self.app.test_request_context('/'):
            assert get_locale() == 'de'


def test_gettext():
    # there are no catalogs, messages come back untranslated
    assert _("Recent Changes") == u'Recent Changes'
    assert _("%(name)s deleted.", name=u'Main') == u'Main deleted.'
