# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.xmlrpc Tests

    @copyright: 2007 by Karol Nowak <grywacz@gmail.com>,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import xmlrpc.client as xmlrpclib
from datetime import datetime, timedelta, timezone

import pytest

from JSPWiki.auth import WikiSession
from JSPWiki.xmlrpc import (RPCHandlerUTF8, METHOD_PREFIX, ERR_NOPAGE, ERR_NOPERMISSION,
                            FAULT_METHOD_NOT_FOUND, FAULT_PARSE_ERROR, FAULT_SERVER_ERROR,
                            from_utc_naive, to_utc_naive)
from JSPWiki._tests import save_page, wiki_context


def test_utc_conversion():
    aware = datetime(2026, 1, 2, 13, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc_naive(aware) == datetime(2026, 1, 2, 11, 4, 5)
    naive = datetime(2026, 1, 2, 11, 4, 5)
    assert to_utc_naive(naive) is naive
    assert from_utc_naive(naive) == datetime(2026, 1, 2, 11, 4, 5, tzinfo=timezone.utc)
    assert from_utc_naive(xmlrpclib.DateTime('20260102T11:04:05')) == from_utc_naive(naive)


class TestXmlRpc(object):
    def setup_method(self, method):
        save_page(self.engine, u'Main', u'Hello [Other] and [Missing] and [file.txt]\nhttp://example.org/')
        save_page(self.engine, u'Main', u'Hello [Other] and [Missing] and [file.txt] http://example.org/',
                  user_name=u'Janne')
        save_page(self.engine, u'Other', u'__other__')
        save_page(self.engine, u'Secret', u'[{ALLOW view Admin}]\nsecret')
        context = wiki_context(self.engine, u'Main', u'admin', authenticated=True)
        self.engine.page_manager.store_attachment(context, u'Main', u'file.txt', b'data')

    def call(self, method, *params, **kw):
        session = kw.get('session') or WikiSession(self.engine)
        context = self.engine.action_bean_factory.new_view_action_bean()
        context.context.session = session
        data = xmlrpclib.dumps(params, METHOD_PREFIX + method, encoding='utf-8')
        response = RPCHandlerUTF8(context).process(data.encode('utf-8'))
        return xmlrpclib.loads(response, use_builtin_types=True)[0][0]

    def fault_code(self, method, *params, **kw):
        with pytest.raises(xmlrpclib.Fault) as excinfo:
            self.call(method, *params, **kw)
        return excinfo.value.faultCode

    def test_simple_calls(self):
        assert self.call('getRPCVersionSupported') == 1
        assert self.call('getApplicationName') == u'JSPWiki Test'
        assert sorted(self.call('getAllPages')) == [u'Main', u'Other', u'Secret']

    def test_recent_changes(self):
        changes = self.call('getRecentChanges', datetime(2000, 1, 1))
        assert sorted(change['name'] for change in changes) == [u'Main', u'Other', u'Secret']
        main = [change for change in changes if change['name'] == u'Main'][0]
        assert main['version'] == 2
        assert main['author'] == u'Janne'
        assert isinstance(main['lastModified'], datetime)
        future = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=1)
        assert self.call('getRecentChanges', future) == []

    def test_page_info(self):
        info = self.call('getPageInfo', u'Main')
        assert (info['name'], info['version'], info['author']) == (u'Main', 2, u'Janne')
        info = self.call('getPageInfoVersion', u'Main', 1)
        assert (info['version'], info['author']) == (1, u'admin')
        assert self.fault_code('getPageInfo', u'Missing') == ERR_NOPAGE
        assert self.fault_code('getPageInfoVersion', u'Main', 7) == ERR_NOPAGE
        assert self.call('getPageInfoVersion', u'Main', 0)['version'] == 2

    def test_get_page(self):
        assert self.call('getPage', u'Other') == u'__other__\n'
        assert self.call('getPageVersion', u'Main', 1).startswith(u'Hello [Other] and [Missing] and [file.txt]\n')
        assert u'<strong>other</strong>' in self.call('getPageHTML', u'Other')
        assert u'<strong>other</strong>' in self.call('getPageHTMLVersion', u'Other', 1)
        assert self.fault_code('getPage', u'Missing') == ERR_NOPAGE

    def test_permissions(self):
        assert self.fault_code('getPage', u'Secret') == ERR_NOPERMISSION
        assert self.fault_code('getPageHTML', u'Secret') == ERR_NOPERMISSION
        admin = WikiSession(self.engine, u'admin', authenticated=True)
        assert self.call('getPage', u'Secret', session=admin) == u'[{ALLOW view Admin}]\nsecret\n'

    def test_list_links(self):
        links = self.call('listLinks', u'Main')
        assert links == [
            {'page': u'Other', 'type': u'local', 'href': u'/Wiki.jsp?page=Other'},
            {'page': u'Missing', 'type': u'local', 'href': u'/Edit.jsp?page=Missing'},
            {'page': u'Main/file.txt', 'type': u'local', 'href': u'/attach/Main/file.txt'},
            {'page': u'http://example.org/', 'type': u'external', 'href': u'http://example.org/'},
        ]

    def test_errors(self):
        assert self.fault_code('noSuchMethod') == FAULT_METHOD_NOT_FOUND
        assert self.fault_code('getPageVersion', u'Main', u'one') == FAULT_SERVER_ERROR
        context = self.engine.action_bean_factory.new_view_action_bean()
        response = RPCHandlerUTF8(context).process(b'not xml at all')
        with pytest.raises(xmlrpclib.Fault) as excinfo:
            xmlrpclib.loads(response)
        assert excinfo.value.faultCode == FAULT_PARSE_ERROR

    def test_method_prefix(self):
        context = self.engine.action_bean_factory.new_view_action_bean()
        data = xmlrpclib.dumps((), 'getApplicationName', encoding='utf-8')
        with pytest.raises(xmlrpclib.Fault) as excinfo:
            xmlrpclib.loads(RPCHandlerUTF8(context).process(data.encode('utf-8')))
        assert excinfo.value.faultCode == FAULT_METHOD_NOT_FOUND


class TestXmlRpcView(object):
    def post(self, method, *params, **kw):
        data = xmlrpclib.dumps(params, METHOD_PREFIX + method, encoding='utf-8')
        with self.app.test_client() as c:
            return c.post('/RPCU/', data=data.encode('utf-8'), content_type='text/xml', **kw)

    def test_call(self):
        save_page(self.engine, u'Secret', u'[{ALLOW view Admin}]\nsecret')
        rv = self.post('getApplicationName')
        assert rv.status_code == 200
        assert rv.mimetype == 'text/xml'
        assert xmlrpclib.loads(rv.data)[0][0] == u'JSPWiki Test'

        rv = self.post('getPage', u'Secret')
        with pytest.raises(xmlrpclib.Fault):
            xmlrpclib.loads(rv.data)
        rv = self.post('getPage', u'Secret', headers={'Authorization': 'Basic YWRtaW46c2VjcmV0'})
        assert xmlrpclib.loads(rv.data)[0][0] == u'[{ALLOW view Admin}]\nsecret\n'

    def test_wrong_credentials(self):
        rv = self.post('getApplicationName', headers={'Authorization': 'Basic YWRtaW46d3Jvbmc='})
        assert rv.status_code == 401
        assert rv.headers['WWW-Authenticate'] == 'Basic realm="JSPWiki Test"'

    def test_get_not_allowed(self):
        with self.app.test_client() as c:
            assert c.get('/RPCU/').status_code == 405
