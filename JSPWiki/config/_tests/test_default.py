# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.config.default Tests

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import pytest

from JSPWiki.config.default import DefaultConfig
from JSPWiki.error import ConfigurationError


def make_config(**settings):
    settings.setdefault('secrets', 'a secret for the tests')
    return type('Config', (DefaultConfig, ), settings)()


class TestDefaultConfig(object):
    def test_computed_attributes(self):
        cfg = make_config(properties={'jspwiki.applicationName': u' My Wiki ',
                                      'jspwiki.translatorReader.matchEnglishPlurals': u'false'})
        assert cfg.application_name == u'My Wiki'
        assert cfg.page_front_page == u'Main'
        assert cfg.base_url == u''
        assert cfg.match_english_plurals is False

    def test_secrets(self):
        cfg = make_config(secrets='0123456789abc')
        assert cfg.secrets == {'session': '0123456789abc'}
        with pytest.raises(ConfigurationError):
            make_config(secrets='short')
        with pytest.raises(ConfigurationError):
            make_config(secrets={'other': 'long enough secret'})

    def test_made_up_secrets(self):
        cfg = make_config(secrets=None)
        other = make_config(secrets=None)
        assert len(cfg.secrets['session']) >= 32
        assert cfg.secrets['session'] != other.secrets['session']
        # nothing the public configuration shows
        for value in (cfg.storage_uri, cfg.application_name, cfg.page_front_page):
            assert repr(value) not in cfg.secrets['session']

    def test_invalid_settings(self):
        for settings in [dict(properties=[]),
                         dict(users=[]),
                         dict(groups={'Admin': 'admin'}),
                         dict(security_policy=None),
                         dict(storage_uri=''),
                        ]:
            with pytest.raises(ConfigurationError):
                make_config(**settings)

    def test_config_check(self):
        with pytest.raises(ConfigurationError):
            make_config(config_check_enabled=True, no_such_setting=1)
        make_config(config_check_enabled=True)
