# -*- coding: utf-8 -*-
"""
    JSPWiki - action beans

    An action bean is the command object of one request: it knows the wiki
    engine, the HTTP request and response and (for WikiContext beans) the
    page the request is about. Every bean class names its request context
    ("view", "edit", ...) and the page action a user needs to run it.

    Beans are created by the WikiActionBeanFactory (see factory.py).

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki import api
from JSPWiki.security import PagePermission, VIEW_ACTION, EDIT_ACTION, UPLOAD_ACTION, DELETE_ACTION

# request contexts
VIEW = 'view'
EDIT = 'edit'
INFO = 'info'
DIFF = 'diff'
UPLOAD = 'upload'
DELETE = 'delete'
ATTACH = 'att'
RECENT_CHANGES = 'rc'
FIND = 'find'
LOGIN = 'login'
LOGOUT = 'logout'


class WikiActionBeanContext(object):
    """
    Binds engine, request and response of a request.

    The session is looked up lazily; contexts without a request get a guest
    session.
    """
    def __init__(self, engine=None, request=None, response=None):
        self.engine = engine
        self.request = request
        self.response = response
        self._session = None

    @property
    def session(self):
        if self._session is None:
            if self.request is not None:
                self._session = api.session().find(self.engine, self.request)
            else:
                self._session = api.session().guest(self.engine)
        return self._session

    @session.setter
    def session(self, session):
        self._session = session


class WikiActionBean(object):
    """ Base class of all action beans """
    request_context = None
    # page action needed to run this bean, None: no page permission needed
    required_action = None

    def __init__(self):
        self.context = None

    def set_context(self, context):
        self.context = context

    @property
    def engine(self):
        return self.context.engine if self.context is not None else None

    @property
    def request(self):
        return self.context.request if self.context is not None else None

    @property
    def response(self):
        return self.context.response if self.context is not None else None

    @property
    def session(self):
        return self.context.session if self.context is not None else None

    def required_permission(self):
        return None

    def has_access(self):
        """ may the session of this bean run it? """
        permission = self.required_permission()
        if permission is None:
            return True
        return self.engine.authorization_manager.check_permission(self.session, permission)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.request_context)


class WikiContext(WikiActionBean):
    """ An action bean about a wiki page """
    def __init__(self):
        super(WikiContext, self).__init__()
        self.page = None

    def set_page(self, page):
        self.page = page

    def get_url(self, request_context, name, **params):
        return self.engine.get_url(request_context, name, **params)

    def get_view_url(self, name):
        return self.get_url(VIEW, name)

    def required_permission(self):
        if self.required_action is None or self.page is None:
            return None
        return PagePermission(self.page.name, self.required_action)

    def __repr__(self):
        return '<%s %s %r>' % (self.__class__.__name__, self.request_context,
                               self.page.name if self.page is not None else None)


class ViewActionBean(WikiContext):
    request_context = VIEW
    required_action = VIEW_ACTION


class EditActionBean(WikiContext):
    request_context = EDIT
    required_action = EDIT_ACTION


class PageInfoActionBean(WikiContext):
    request_context = INFO
    required_action = VIEW_ACTION


class DiffActionBean(WikiContext):
    request_context = DIFF
    required_action = VIEW_ACTION


class UploadActionBean(WikiContext):
    request_context = UPLOAD
    required_action = UPLOAD_ACTION


class DeleteActionBean(WikiContext):
    request_context = DELETE
    required_action = DELETE_ACTION


class AttachmentActionBean(WikiContext):
    request_context = ATTACH
    required_action = VIEW_ACTION


class RecentChangesActionBean(WikiContext):
    request_context = RECENT_CHANGES


class SearchActionBean(WikiContext):
    request_context = FIND


class LoginActionBean(WikiActionBean):
    request_context = LOGIN


class LogoutActionBean(WikiActionBean):
    request_context = LOGOUT


ACTION_BEANS = (
    ViewActionBean, EditActionBean, PageInfoActionBean, DiffActionBean,
    UploadActionBean, DeleteActionBean, AttachmentActionBean,
    RecentChangesActionBean, SearchActionBean, LoginActionBean, LogoutActionBean,
)
