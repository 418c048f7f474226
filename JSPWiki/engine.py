# -*- coding: utf-8 -*-
"""
    JSPWiki - the wiki engine

    The WikiEngine ties the parts of a wiki together: the storage backend,
    the managers (pages, rendering, plugins, authorization, authentication)
    and the action bean factory. There is one engine per Flask application,
    it is kept in app.extensions.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from urllib.parse import quote, urlencode

from flask import current_app, has_request_context, request

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import action, api
from JSPWiki.action.factory import WikiActionBeanFactory
from JSPWiki.auth import AuthorizationManager, AuthenticationManager
from JSPWiki.error import InternalError
from JSPWiki.pages import PageManager
from JSPWiki.plugin import PluginManager
from JSPWiki.rendering import RenderingManager
from JSPWiki.storage.backends import create_simple_backend

EXTENSION_NAME = 'jspwiki'

# request context -> view
_JSP_PAGES = {
    action.VIEW: 'Wiki.jsp',
    action.EDIT: 'Edit.jsp',
    action.INFO: 'PageInfo.jsp',
    action.DIFF: 'Diff.jsp',
    action.UPLOAD: 'Upload.jsp',
    action.DELETE: 'Delete.jsp',
    action.RECENT_CHANGES: 'RecentChanges.jsp',
    action.FIND: 'Search.jsp',
    action.LOGIN: 'Login.jsp',
    action.LOGOUT: 'Logout.jsp',
}


class WikiEngine(object):
    """
    @param app: the Flask application this engine serves
    @param cfg: the wiki configuration (a DefaultConfig instance)
    @param cache: flask_caching.Cache for rendered pages or None
    """
    def __init__(self, app, cfg, cache=None):
        self.app = app
        self.cfg = cfg
        self.application_name = cfg.application_name
        self.front_page = cfg.page_front_page
        self.base_url = cfg.base_url

        self.storage = create_simple_backend(cfg.storage_uri)

        self.action_bean_factory = WikiActionBeanFactory(self, cfg.wiki_properties)
        self.page_manager = PageManager(self)
        self.rendering_manager = RenderingManager(self, cache)
        self.plugin_manager = PluginManager(self)
        self.authorization_manager = AuthorizationManager(self)
        self.authentication_manager = AuthenticationManager(self)

        if app is not None:
            app.extensions[EXTENSION_NAME] = self
        logging.info("wiki engine %s started (%s %s)", self.application_name,
                     api.get_platform_name_string(), api.get_platform_version_string())

    @classmethod
    def find(cls, app=None):
        """
        The engine of app (default: the current Flask application).

        @raise InternalError: app has no engine
        """
        if app is None:
            app = current_app
        engine = app.extensions.get(EXTENSION_NAME)
        if engine is None:
            raise InternalError("No wiki engine configured for application %r" % app.name)
        return engine

    def get_base_url(self):
        """ the URL prefix of all wiki URLs, with a trailing slash """
        base_url = self.base_url
        if not base_url:
            base_url = request.script_root if has_request_context() else u''
        if not base_url.endswith(u'/'):
            base_url += u'/'
        return base_url

    def get_url(self, request_context, name=None, **params):
        """
        The URL of a view.

        @param request_context: one of the request contexts in JSPWiki.action
        @param name: page (or, for attachments, "Page/file") name
        @param params: more query parameters (None values are left out)
        """
        base_url = self.get_base_url()
        if request_context == action.ATTACH:
            url = base_url + u'attach/' + quote(name)
        else:
            try:
                url = base_url + _JSP_PAGES[request_context]
            except KeyError:
                raise ValueError("Unknown request context %r" % request_context)
            if name:
                params = dict(params, page=name)
        query = sorted((key, value) for key, value in params.items() if value is not None)
        if query:
            url += u'?' + urlencode(query)
        return url

    def get_page(self, name, version=-1):
        """ shortcut for page_manager.get_page """
        return self.page_manager.get_page(name, version)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.application_name)
