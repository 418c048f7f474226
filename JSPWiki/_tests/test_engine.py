# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.engine Tests

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import pytest
from flask import Flask

from JSPWiki import action
from JSPWiki._tests import save_page, wikiconfig
from JSPWiki.engine import WikiEngine
from JSPWiki.error import InternalError
from JSPWiki.signalling import page_saved, page_deleted


class TestEngine(object):
    def test_find(self):
        assert WikiEngine.find() is self.engine
        assert WikiEngine.find(self.app) is self.engine
        with pytest.raises(InternalError):
            WikiEngine.find(Flask('other'))

    def test_settings(self):
        assert self.engine.application_name == u'JSPWiki Test'
        assert self.engine.front_page == u'Main'
        assert self.engine.get_base_url() == u'/'

    @pytest.mark.parametrize('request_context,name,params,expected', [
        (action.VIEW, u'Main', {}, u'/Wiki.jsp?page=Main'),
        (action.VIEW, u'Main', dict(version=None), u'/Wiki.jsp?page=Main'),
        (action.EDIT, u'Main', dict(version=2), u'/Edit.jsp?page=Main&version=2'),
        (action.INFO, u'Main Page', {}, u'/PageInfo.jsp?page=Main+Page'),
        (action.DIFF, u'Main', dict(r2=3, r1=1), u'/Diff.jsp?page=Main&r1=1&r2=3'),
        (action.ATTACH, u'Main/file name.txt', {}, u'/attach/Main/file%20name.txt'),
        (action.RECENT_CHANGES, None, {}, u'/RecentChanges.jsp'),
        (action.FIND, None, dict(query=u'wiki'), u'/Search.jsp?query=wiki'),
        (action.LOGIN, None, dict(redirect=u'Main'), u'/Login.jsp?redirect=Main'),
        (action.LOGOUT, None, {}, u'/Logout.jsp'),
    ])
    def test_get_url(self, request_context, name, params, expected):
        assert self.engine.get_url(request_context, name, **params) == expected

    def test_get_url_unknown(self):
        with pytest.raises(ValueError):
            self.engine.get_url('dance', u'Main')

    def test_get_page(self):
        assert self.engine.get_page(u'Main') is None
        save_page(self.engine, u'Main', u'text\n')
        assert self.engine.get_page(u'Main').version == 1


class TestBaseURL(object):
    class Config(wikiconfig.Config):
        properties = dict(wikiconfig.Config.properties, **{'jspwiki.baseURL': u'http://example.org/wiki'})

    def test_get_url(self):
        assert self.engine.get_base_url() == u'http://example.org/wiki/'
        assert self.engine.get_url(action.VIEW, u'Main') == u'http://example.org/wiki/Wiki.jsp?page=Main'


class TestSignals(object):
    def test_page_saved(self):
        received = []

        def receiver(engine, page_name, version=None):
            received.append((engine, page_name, version))

        with page_saved.connected_to(receiver):
            save_page(self.engine, u'Main', u'text\n')
            save_page(self.engine, u'Main', u'text\n') # unchanged, nothing saved
        assert received == [(self.engine, u'Main', 1), ]

    def test_page_deleted(self):
        received = []

        def receiver(engine, page_name):
            received.append(page_name)

        save_page(self.engine, u'Main', u'text\n')
        with page_deleted.connected_to(receiver):
            self.engine.page_manager.delete_page(u'Main')
        assert received == [u'Main', ]
