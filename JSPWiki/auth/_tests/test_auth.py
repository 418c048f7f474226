# -*- coding: utf-8 -*-
"""
    JSPWiki - JSPWiki.auth Tests

    @copyright: 2008 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from flask import session as flask_session

from JSPWiki.auth import WikiSession, SESSION_USER_KEY, ALL, ANONYMOUS, ASSERTED, AUTHENTICATED
from JSPWiki.security import PagePermission
from JSPWiki._tests import save_page, wikiconfig


class TestWikiSession(object):
    def test_principals(self):
        anonymous = WikiSession(self.engine)
        assert anonymous.is_anonymous()
        assert anonymous.get_principals() == [ALL, ANONYMOUS]

        asserted = WikiSession(self.engine, u'Janne')
        assert asserted.is_asserted()
        assert asserted.get_principals() == [ALL, ASSERTED, u'Janne']

        admin = WikiSession(self.engine, u'admin', authenticated=True)
        assert admin.is_authenticated()
        assert admin.get_principals() == [ALL, AUTHENTICATED, u'admin', u'Admin']

    def test_asserted_users_get_no_groups(self):
        asserted = WikiSession(self.engine, u'admin')
        assert asserted.get_groups() == []
        assert asserted.get_principals() == [ALL, ASSERTED, u'admin']
        assert asserted.get_roles() == [ALL, ASSERTED]

    def test_roles(self):
        assert WikiSession(self.engine).get_roles() == [ALL, ANONYMOUS]
        admin = WikiSession(self.engine, u'admin', authenticated=True)
        assert admin.get_roles() == [ALL, AUTHENTICATED, u'Admin']

    def test_find_ignores_reserved_names(self):
        for name in ('admin', 'Admin', 'Janne', 'Authenticated', '  '):
            with self.app.test_request_context('/', headers={'Cookie': 'JSPWikiAssertedName=%s' % name}):
                from flask import request
                assert WikiSession.find(self.engine, request).is_anonymous()

    def test_authenticated_needs_a_name(self):
        assert not WikiSession(self.engine, None, authenticated=True).is_authenticated()

    def test_user_name(self):
        assert WikiSession(self.engine, u'Janne').get_user_name() == u'Janne'
        assert WikiSession(self.engine, remote_addr='10.0.0.1').get_user_name() == '10.0.0.1'

    def test_find(self):
        with self.app.test_request_context('/', headers={'Cookie': 'JSPWikiAssertedName=Bob'}):
            from flask import request
            session = WikiSession.find(self.engine, request)
            assert session.is_asserted()
            assert session.user_name == u'Bob'
            flask_session[SESSION_USER_KEY] = u'Janne'
            session = WikiSession.find(self.engine, request)
            assert session.is_authenticated()
            assert session.user_name == u'Janne'


class TestHideHosts(object):
    class Config(wikiconfig.Config):
        show_hosts = False

    def test_no_hosts(self):
        assert WikiSession(self.engine, remote_addr='10.0.0.1').get_user_name() is None


class TestAuthorizationManager(object):
    def check(self, session, page_name, action):
        return self.engine.authorization_manager.check_page_permission(session, page_name, action)

    def test_security_policy(self):
        anonymous = WikiSession(self.engine)
        asserted = WikiSession(self.engine, u'Bob')
        janne = WikiSession(self.engine, u'Janne', authenticated=True)
        admin = WikiSession(self.engine, u'admin', authenticated=True)
        assert self.check(anonymous, u'Main', 'view')
        assert self.check(anonymous, u'Main', 'edit')
        assert not self.check(anonymous, u'Main', 'delete')
        assert self.check(asserted, u'Main', 'upload')
        assert not self.check(asserted, u'Main', 'rename')
        assert self.check(janne, u'Main', 'rename')
        assert self.check(janne, u'Main', 'modify')
        assert not self.check(janne, u'Main', 'delete')
        assert self.check(admin, u'Main', 'delete')

    def test_page_acl(self):
        save_page(self.engine, u'Secret', u'[{ALLOW view Janne, Admin}]\n[{ALLOW edit Admin}]\nsecret stuff\n')
        anonymous = WikiSession(self.engine)
        janne = WikiSession(self.engine, u'Janne', authenticated=True)
        admin = WikiSession(self.engine, u'admin', authenticated=True)
        assert not self.check(anonymous, u'Secret', 'view')
        assert self.check(janne, u'Secret', 'view')
        assert not self.check(janne, u'Secret', 'edit')
        assert self.check(admin, u'Secret', 'edit')
        # attachments are protected by the ACL of their page
        assert not self.check(anonymous, u'Secret/file.txt', 'view')

    def test_policy_ignores_user_names(self):
        # a user called like a role gets nothing from the policy entry of that role
        authz = self.engine.authorization_manager
        assert not authz.policy_grants([ALL, ASSERTED, u'Admin'], PagePermission(u'Main', 'delete'))
        assert not self.check(WikiSession(self.engine, u'Admin'), u'Main', 'delete')

    def test_asserted_name_does_not_open_acl(self):
        save_page(self.engine, u'Secret', u'[{ALLOW view Admin}]\nsecret stuff\n')
        assert not self.check(WikiSession(self.engine, u'admin'), u'Secret', 'view')

    def test_acl_cannot_exceed_policy(self):
        save_page(self.engine, u'Open', u'[{ALLOW delete All}]\n')
        assert not self.check(WikiSession(self.engine), u'Open', 'delete')

    def test_wildcard_permission(self):
        save_page(self.engine, u'Secret', u'[{ALLOW view Admin}]\n')
        # the ACLs of single pages don't matter for "*"
        assert self.engine.authorization_manager.check_permission(WikiSession(self.engine),
                                                                  PagePermission(u'*', 'view'))


class TestAuthenticationManager(object):
    def test_authenticate(self):
        manager = self.engine.authentication_manager
        assert manager.authenticate(u'admin', u'secret')
        assert not manager.authenticate(u'admin', u'wrong')
        assert not manager.authenticate(u'nobody', u'secret')
        assert not manager.authenticate(u'', u'secret')
        assert not manager.authenticate(u'admin', None)

    def test_login_logout(self):
        manager = self.engine.authentication_manager
        assert not manager.login(u'Janne', u'wrong')
        assert SESSION_USER_KEY not in flask_session
        assert manager.login(u'Janne', u'janne')
        assert flask_session[SESSION_USER_KEY] == u'Janne'
        manager.logout()
        assert SESSION_USER_KEY not in flask_session

    def test_basic_auth_session(self):
        manager = self.engine.authentication_manager
        with self.app.test_request_context('/RPCU/'):
            from flask import request
            assert manager.basic_auth_session(request).is_anonymous()
        with self.app.test_request_context('/RPCU/', headers={'Authorization': 'Basic YWRtaW46c2VjcmV0'}):
            from flask import request
            session = manager.basic_auth_session(request)
            assert session.is_authenticated()
            assert session.user_name == u'admin'
        with self.app.test_request_context('/RPCU/', headers={'Authorization': 'Basic YWRtaW46d3Jvbmc='}):
            from flask import request
            assert manager.basic_auth_session(request) is None

    def test_asserted_names(self):
        manager = self.engine.authentication_manager
        assert manager.is_valid_asserted_name(u'Bob')
        assert manager.is_valid_asserted_name(u' Bob ')
        for name in (u'', u'  ', None, u'admin', u'Janne', u'Admin', u'admin ', u'ADMIN', u'All', u'anonymous'):
            assert not manager.is_valid_asserted_name(name)
