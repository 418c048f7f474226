# -*- coding: utf-8 -*-
"""
    JSPWiki - frontend views

    This shows the usual things users see when using the wiki. The URLs are
    the ones JSPWiki always had (Wiki.jsp?page=Main, Edit.jsp?page=Main, ...),
    so old links and bookmarks keep working.

    Every view creates the action bean of its request context first. The
    bean finds the page (page and version parameters) and knows what the
    user needs to be allowed to do; users lacking that get a 403 or, if
    they did not log in, the login form.

    @copyright: 2003-2010 MoinMoin:ThomasWaldmann,
                2008 MoinMoin:FlorianKrupicka,
                2010 MoinMoin:DiogenesAugusto,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import difflib
from io import BytesIO

from flask import request, redirect, render_template, Response, abort, flash, send_file
from markupsafe import Markup

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import DiffLexer

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import action
from JSPWiki.action import (ViewActionBean, EditActionBean, PageInfoActionBean, DiffActionBean,
                            UploadActionBean, DeleteActionBean, AttachmentActionBean,
                            RecentChangesActionBean, SearchActionBean, LoginActionBean, LogoutActionBean)
from JSPWiki.action.factory import WikiActionBeanFactory
from JSPWiki.apps.frontend import frontend
from JSPWiki.auth import ASSERTED_NAME_COOKIE, WikiSession
from JSPWiki.engine import WikiEngine
from JSPWiki.error import WikiError
from JSPWiki.i18n import _
from JSPWiki.pages import Attachment, LATEST_VERSION
from JSPWiki.security import VIEW_ACTION
from JSPWiki.signalling import page_displayed

# browsers send this if they don't know better
GENERIC_MIMETYPE = 'application/octet-stream'


@frontend.app_context_processor
def inject_wiki():
    bean = WikiActionBeanFactory.find_action_bean()
    return dict(
        engine=WikiEngine.find(),
        bean=bean,
        wiki_session=bean.session if bean is not None else None,
    )


def absolute_target(engine, url):
    """ special page targets are relative to the wiki base URL """
    if u'://' in url or url.startswith(u'/'):
        return url
    return engine.get_base_url() + url


def int_param(name, default):
    try:
        return int(request.values.get(name, default))
    except (TypeError, ValueError):
        abort(400)


def check_access(bean):
    """
    Abort the request if the session of bean may not run it: anonymous
    users are sent to the login form, all others get a 403.
    """
    if bean.has_access():
        return
    session = bean.session
    logging.info("%r denied %r", session, bean)
    if not session.is_authenticated():
        page = getattr(bean, 'page', None)
        target = page.name if page is not None else None
        abort(redirect(bean.engine.get_url(action.LOGIN, None, redirect=target)))
    abort(403)


def action_bean(bean_class, page=None):
    """
    Create, stash and check the action bean of the current request.

    @param page: the page of the bean, overrides the page parameter
    """
    factory = WikiEngine.find().action_bean_factory
    bean = factory.new_action_bean(request, Response(), bean_class)
    if page is not None:
        bean.set_page(page)
    factory.save_action_bean(bean)
    check_access(bean)
    return bean


@frontend.route('/')
def show_root():
    engine = WikiEngine.find()
    return redirect(engine.get_url(action.VIEW, engine.front_page))


@frontend.route('/robots.txt')
def robots():
    return Response("""\
User-agent: *
Crawl-delay: 20
Disallow: /Edit.jsp
Disallow: /Diff.jsp
Disallow: /Upload.jsp
Disallow: /Delete.jsp
Disallow: /Login.jsp
Disallow: /Logout.jsp
Disallow: /Search.jsp
Disallow: /RPCU/
Allow: /
""", mimetype='text/plain')


@frontend.route('/Wiki.jsp')
def show_page():
    engine = WikiEngine.find()
    factory = engine.action_bean_factory
    name = factory.extract_page_from_parameter(request)
    if name is not None:
        target = factory.get_special_page_reference(name)
        if target is not None:
            return redirect(absolute_target(engine, target))

    bean = action_bean(ViewActionBean)
    page = bean.page
    if not page.exists:
        content = render_template('view.html', page=page, title=page.name,
                                  data_rendered=None, attachments=[])
        return Response(content, 404)
    if isinstance(page, Attachment):
        return redirect(engine.get_url(action.ATTACH, page.name))

    data_rendered = Markup(engine.rendering_manager.get_html(page.name, page.version, bean))
    page_displayed.send(engine, page_name=page.name)
    latest = engine.page_manager.get_page(page.name)
    return render_template('view.html', page=page, title=page.name,
                           data_rendered=data_rendered,
                           is_latest=latest is not None and latest.version == page.version,
                           attachments=engine.page_manager.list_attachments(page.name))


@frontend.route('/Edit.jsp', methods=['GET', 'POST', ])
def edit_page():
    """
    On GET, displays the editor.
    On POST, saves the new text (unless cancelled) and redirects to the page.
    """
    engine = WikiEngine.find()
    bean = action_bean(EditActionBean)
    page = bean.page
    if isinstance(page, Attachment):
        abort(400)

    if request.method == 'POST':
        if 'cancel' in request.form:
            return redirect(bean.get_view_url(page.name))
        text = request.form.get('text', u'')
        changenote = request.form.get('changenote', u'').strip() or None
        author = request.form.get('author', u'').strip()
        assert_name = bool(author) and not bean.session.is_authenticated()
        try:
            if assert_name:
                if not engine.authentication_manager.is_valid_asserted_name(author):
                    raise WikiError(_("The name %(name)s is reserved, please log in.", name=author))
                bean.context.session = WikiSession(engine, author, remote_addr=request.remote_addr)
            engine.page_manager.save_text(bean, text, changenote)
        except WikiError as err:
            flash(str(err), 'error')
            content = render_template('edit.html', page=page, title=page.name, text=text,
                                      changenote=changenote, author=author)
            return Response(content, 400)
        response = redirect(bean.get_view_url(page.name))
        if assert_name:
            response.set_cookie(ASSERTED_NAME_COOKIE, author)
        return response

    text = u''
    if page.exists:
        text = engine.page_manager.get_pure_text(page.name, page.version)
    return render_template('edit.html', page=page, title=page.name, text=text,
                           changenote=u'', author=bean.session.user_name or u'')


@frontend.route('/PageInfo.jsp')
def page_info():
    engine = WikiEngine.find()
    bean = action_bean(PageInfoActionBean)
    page = bean.page
    if not page.exists:
        abort(404)
    attachments = []
    if not isinstance(page, Attachment):
        attachments = engine.page_manager.list_attachments(page.name)
    return render_template('info.html', page=page, title=page.name,
                           history=engine.page_manager.get_version_history(page.name),
                           attachments=attachments)


@frontend.route('/Diff.jsp')
def diff_page():
    """
    Differences between two versions of a page: r1 (default: the version
    before r2) and r2 (default: the latest version).
    """
    engine = WikiEngine.find()
    bean = action_bean(DiffActionBean)
    page = bean.page
    if not page.exists or isinstance(page, Attachment):
        abort(404)
    page_manager = engine.page_manager
    latest = page_manager.get_page(page.name)
    r2 = int_param('r2', latest.version)
    r1 = int_param('r1', r2 - 1)
    if not page_manager.page_exists(page.name, r2) or (r1 > 0 and not page_manager.page_exists(page.name, r1)):
        abort(404)

    old_text = page_manager.get_pure_text(page.name, r1) if r1 > 0 else u''
    new_text = page_manager.get_pure_text(page.name, r2)
    diff = difflib.unified_diff(old_text.splitlines(True), new_text.splitlines(True),
                                fromfile=u'%s (version %d)' % (page.name, r1),
                                tofile=u'%s (version %d)' % (page.name, r2))
    diff_text = u''.join(diff)
    diff_html = None
    if diff_text:
        diff_html = Markup(highlight(diff_text, DiffLexer(), HtmlFormatter(cssclass='diff')))
    return render_template('diff.html', page=page, title=page.name,
                           r1=r1, r2=r2, diff_html=diff_html,
                           diff_css=Markup(HtmlFormatter(cssclass='diff').get_style_defs('.diff')))


@frontend.route('/Upload.jsp', methods=['GET', 'POST', ])
def upload():
    engine = WikiEngine.find()
    bean = action_bean(UploadActionBean)
    page = bean.page
    if not page.exists or isinstance(page, Attachment):
        abort(404)

    if request.method == 'POST':
        upload_file = request.files.get('content')
        if upload_file is None or not upload_file.filename:
            flash(_("Please choose a file to upload."), 'error')
            return Response(render_template('upload.html', page=page, title=page.name), 400)
        mimetype = upload_file.mimetype
        if mimetype == GENERIC_MIMETYPE:
            mimetype = None
        try:
            attachment = engine.page_manager.store_attachment(bean, page.name, upload_file.filename,
                                                              upload_file.read(), mimetype)
        except WikiError as err:
            flash(str(err), 'error')
            return Response(render_template('upload.html', page=page, title=page.name), 400)
        flash(_("Attachment %(name)s saved.", name=attachment.file_name), 'info')
        return redirect(engine.get_url(action.INFO, page.name))

    return render_template('upload.html', page=page, title=page.name)


@frontend.route('/Delete.jsp', methods=['GET', 'POST', ])
def delete_page():
    engine = WikiEngine.find()
    bean = action_bean(DeleteActionBean)
    page = bean.page
    if not page.exists:
        abort(404)

    if request.method == 'POST':
        if isinstance(page, Attachment):
            done_url = engine.get_url(action.INFO, page.parent_name)
        else:
            done_url = engine.get_url(action.VIEW, engine.front_page)
        if 'cancel' in request.form:
            return redirect(bean.get_view_url(page.name))
        engine.page_manager.delete_page(page.name)
        flash(_("%(name)s deleted.", name=page.name), 'info')
        return redirect(done_url)

    return render_template('delete.html', page=page, title=page.name)


@frontend.route('/attach/<path:name>')
def get_attachment(name):
    engine = WikiEngine.find()
    version = int_param('version', LATEST_VERSION)
    attachment = engine.page_manager.get_attachment_info(name, version)
    if attachment is None:
        abort(404)
    action_bean(AttachmentActionBean, page=attachment)
    data = engine.page_manager.get_attachment_data(attachment)
    return send_file(BytesIO(data), mimetype=attachment.mimetype,
                     download_name=attachment.file_name,
                     last_modified=attachment.last_modified)


@frontend.route('/RecentChanges.jsp')
def recent_changes():
    engine = WikiEngine.find()
    bean = action_bean(RecentChangesActionBean)
    authz = engine.authorization_manager
    changes = [page for page in engine.page_manager.get_recent_changes()
               if authz.check_page_permission(bean.session, page.name, VIEW_ACTION)]
    return render_template('rc.html', title=_("Recent Changes"),
                           changes=changes[:engine.cfg.recent_changes_count])


@frontend.route('/Search.jsp')
def search():
    engine = WikiEngine.find()
    bean = action_bean(SearchActionBean)
    query = request.values.get('query', u'').strip()
    results = []
    if query:
        authz = engine.authorization_manager
        results = [page for page in engine.page_manager.find_pages(query)
                   if authz.check_page_permission(bean.session, page.name, VIEW_ACTION)]
    return render_template('search.html', title=_("Search"), query=query, results=results)


@frontend.route('/Login.jsp', methods=['GET', 'POST', ])
def login():
    engine = WikiEngine.find()
    action_bean(LoginActionBean)
    target = request.values.get('redirect') or engine.front_page
    if request.method == 'POST':
        user_name = request.form.get('j_username', u'').strip()
        password = request.form.get('j_password', u'')
        if engine.authentication_manager.login(user_name, password):
            return redirect(engine.get_url(action.VIEW, target))
        flash(_("Login failed. Please check your user name and password."), 'error')
        content = render_template('login.html', title=_("Login"), target=target, user_name=user_name)
        return Response(content, 401)
    return render_template('login.html', title=_("Login"), target=target, user_name=u'')


@frontend.route('/Logout.jsp')
def logout():
    engine = WikiEngine.find()
    action_bean(LogoutActionBean)
    engine.authentication_manager.logout()
    response = redirect(engine.get_url(action.VIEW, engine.front_page))
    response.delete_cookie(ASSERTED_NAME_COOKIE)
    return response
