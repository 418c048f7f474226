# -*- coding: utf-8 -*-
"""
    JSPWiki - basic tests for frontend

    @copyright: 2010 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from io import BytesIO

from JSPWiki._tests import save_page


def login(client, user_name, password):
    return client.post('/Login.jsp', data=dict(j_username=user_name, j_password=password))


class TestFrontend(object):
    def setup_method(self, method):
        save_page(self.engine, u'Main', u'!!! Welcome\nHello __world__\n')
        save_page(self.engine, u'Main', u'!!! Welcome\nHello __wiki__\n', user_name=u'Janne')
        save_page(self.engine, u'Secret', u'[{ALLOW view Admin}]\nsecret stuff\n')

    def test_root(self):
        with self.app.test_client() as c:
            rv = c.get('/') # / redirects to front page
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Wiki.jsp?page=Main')

    def test_robots(self):
        with self.app.test_client() as c:
            rv = c.get('/robots.txt')
            assert rv.status == '200 OK'
            assert rv.headers['Content-Type'] == 'text/plain; charset=utf-8'
            assert b'Disallow: /Edit.jsp' in rv.data

    def test_view(self):
        with self.app.test_client() as c:
            rv = c.get('/Wiki.jsp?page=Main')
            assert rv.status == '200 OK'
            assert rv.headers['Content-Type'] == 'text/html; charset=utf-8'
            assert b'<html>' in rv.data
            assert b'id="section-Main-Welcome"' in rv.data
            assert b'wiki' in rv.data
            assert b'</html>' in rv.data

    def test_view_old_version(self):
        with self.app.test_client() as c:
            rv = c.get('/Wiki.jsp?page=Main&version=1')
            assert rv.status == '200 OK'
            assert b'world' in rv.data
            assert b'It is not the current version' in rv.data

    def test_view_missing(self):
        with self.app.test_client() as c:
            rv = c.get('/Wiki.jsp?page=DoesntExist')
            assert rv.status == '404 NOT FOUND'
            assert b'This page does not exist.' in rv.data

    def test_special_page(self):
        with self.app.test_client() as c:
            rv = c.get('/Wiki.jsp?page=Login')
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Login.jsp')

    def test_acl_anonymous(self):
        with self.app.test_client() as c:
            rv = c.get('/Wiki.jsp?page=Secret')
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Login.jsp?redirect=Secret')

    def test_acl_authenticated(self):
        with self.app.test_client() as c:
            login(c, u'Janne', u'janne')
            rv = c.get('/Wiki.jsp?page=Secret')
            assert rv.status == '403 FORBIDDEN'
            login(c, u'admin', u'secret')
            rv = c.get('/Wiki.jsp?page=Secret')
            assert rv.status == '200 OK'
            assert b'secret stuff' in rv.data
            assert b'ALLOW' not in rv.data

    def test_edit_form(self):
        with self.app.test_client() as c:
            rv = c.get('/Edit.jsp?page=Main')
            assert rv.status == '200 OK'
            assert b'<textarea' in rv.data
            assert b'Hello __wiki__' in rv.data

    def test_edit_save(self):
        with self.app.test_client() as c:
            rv = c.post('/Edit.jsp?page=NewPage', data=dict(text=u'Some new text\n', changenote=u'created'))
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Wiki.jsp?page=NewPage')
        page = self.engine.page_manager.get_page(u'NewPage')
        assert page.version == 1
        assert page.author == u'127.0.0.1'
        assert self.engine.page_manager.get_pure_text(u'NewPage') == u'Some new text\n'

    def test_edit_asserted_name(self):
        with self.app.test_client() as c:
            rv = c.post('/Edit.jsp?page=NewPage', data=dict(text=u'text\n', author=u'Bob'))
            assert rv.status == '302 FOUND'
            assert 'JSPWikiAssertedName=Bob' in rv.headers['Set-Cookie']
        assert self.engine.page_manager.get_page(u'NewPage').author == u'Bob'

    def test_edit_reserved_name(self):
        with self.app.test_client() as c:
            for author in (u'Admin', u'admin', u'Authenticated'):
                rv = c.post('/Edit.jsp?page=NewPage', data=dict(text=u'text\n', author=author))
                assert rv.status == '400 BAD REQUEST'
                assert 'JSPWikiAssertedName' not in ' '.join(rv.headers.getlist('Set-Cookie'))
        assert not self.engine.page_manager.page_exists(u'NewPage')

    def test_asserted_cookie_grants_no_roles(self):
        with self.app.test_client() as c:
            for name in ('admin', 'Admin', 'Janne'):
                c.set_cookie('JSPWikiAssertedName', name)
                rv = c.get('/Wiki.jsp?page=Secret')
                assert rv.status == '302 FOUND'
                rv = c.post('/Delete.jsp?page=Main')
                assert rv.headers['Location'].endswith('/Login.jsp?redirect=Main')
        assert self.engine.page_manager.page_exists(u'Main')

    def test_edit_cancel(self):
        with self.app.test_client() as c:
            rv = c.post('/Edit.jsp?page=NewPage', data=dict(text=u'text\n', cancel=u'Cancel'))
            assert rv.status == '302 FOUND'
        assert not self.engine.page_manager.page_exists(u'NewPage')

    def test_page_info(self):
        with self.app.test_client() as c:
            rv = c.get('/PageInfo.jsp?page=Main')
            assert rv.status == '200 OK'
            assert b'Janne' in rv.data
            rv = c.get('/PageInfo.jsp?page=DoesntExist')
            assert rv.status == '404 NOT FOUND'

    def test_diff(self):
        with self.app.test_client() as c:
            rv = c.get('/Diff.jsp?page=Main')
            assert rv.status == '200 OK'
            assert b'class="diff"' in rv.data
            rv = c.get('/Diff.jsp?page=Main&r1=1&r2=5')
            assert rv.status == '404 NOT FOUND'
            rv = c.get('/Diff.jsp?page=Main&r2=x')
            assert rv.status == '400 BAD REQUEST'

    def test_upload(self):
        with self.app.test_client() as c:
            rv = c.post('/Upload.jsp?page=Main', data=dict(content=(BytesIO(b'hello'), 'hello.txt')))
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/PageInfo.jsp?page=Main')
            rv = c.get('/attach/Main/hello.txt')
            assert rv.status == '200 OK'
            assert rv.mimetype == 'text/plain'
            assert rv.data == b'hello'
            rv = c.get('/attach/Main/missing.txt')
            assert rv.status == '404 NOT FOUND'

    def test_upload_without_file(self):
        with self.app.test_client() as c:
            rv = c.post('/Upload.jsp?page=Main', data={})
            assert rv.status == '400 BAD REQUEST'
            assert b'Please choose a file to upload.' in rv.data

    def test_delete_needs_login(self):
        with self.app.test_client() as c:
            rv = c.post('/Delete.jsp?page=Main')
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Login.jsp?redirect=Main')
        assert self.engine.page_manager.page_exists(u'Main')

    def test_delete(self):
        with self.app.test_client() as c:
            login(c, u'admin', u'secret')
            rv = c.post('/Delete.jsp?page=Main')
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Wiki.jsp?page=Main')
        assert not self.engine.page_manager.page_exists(u'Main')

    def test_recent_changes(self):
        with self.app.test_client() as c:
            rv = c.get('/RecentChanges.jsp')
            assert rv.status == '200 OK'
            assert b'page=Main' in rv.data
            assert b'page=Secret' not in rv.data

    def test_search(self):
        with self.app.test_client() as c:
            rv = c.get('/Search.jsp?query=stuff')
            assert rv.status == '200 OK'
            assert b'page=Secret' not in rv.data
            login(c, u'admin', u'secret')
            rv = c.get('/Search.jsp?query=stuff')
            assert b'page=Secret' in rv.data


class TestLogin(object):
    def test_login_form(self):
        with self.app.test_client() as c:
            rv = c.get('/Login.jsp')
            assert rv.status == '200 OK'
            assert b'j_username' in rv.data

    def test_login(self):
        with self.app.test_client() as c:
            rv = login(c, u'admin', u'secret')
            assert rv.status == '302 FOUND'
            assert rv.headers['Location'].endswith('/Wiki.jsp?page=Main')
            rv = c.get('/Wiki.jsp?page=Main')
            assert b'Logged in as admin' in rv.data

    def test_login_redirect(self):
        with self.app.test_client() as c:
            rv = c.post('/Login.jsp?redirect=Other', data=dict(j_username=u'admin', j_password=u'secret'))
            assert rv.headers['Location'].endswith('/Wiki.jsp?page=Other')

    def test_login_failed(self):
        with self.app.test_client() as c:
            rv = login(c, u'admin', u'wrong')
            assert rv.status == '401 UNAUTHORIZED'
            assert b'Login failed.' in rv.data

    def test_logout(self):
        with self.app.test_client() as c:
            login(c, u'admin', u'secret')
            rv = c.get('/Logout.jsp')
            assert rv.status == '302 FOUND'
            rv = c.get('/Wiki.jsp?page=Main')
            assert b'Logged in as admin' not in rv.data
            assert b'Log in' in rv.data
