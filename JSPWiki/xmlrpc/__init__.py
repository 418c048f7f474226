# -*- coding: utf-8 -*-
"""
    JSPWiki - XML-RPC interface

    Implements the WikiRPCInterface (version 1) with UTF-8 strings, see
    http://www.jspwiki.org/wiki/WikiRPCInterface2 - all methods are called
    "wiki.<method>" by clients.

    Faults:
    * 1 (ERR_NOPAGE): no such page
    * 2 (ERR_NOPERMISSION): the caller may not see the page
    * -32601: no such method
    * -32500: the server failed (details are logged)

    @copyright: 2003-2004 by Thomas Waldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import xmlrpc.client as xmlrpclib
from datetime import datetime, timezone

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import action, api
from JSPWiki.converter.link import LinkCollector
from JSPWiki.pages import Attachment, LATEST_VERSION
from JSPWiki.security import PagePermission, VIEW_ACTION, WILDCARD

RPC_VERSION = 1

ERR_NOPAGE = 1
ERR_NOPERMISSION = 2

FAULT_PARSE_ERROR = -32700
FAULT_METHOD_NOT_FOUND = -32601
FAULT_SERVER_ERROR = -32500

LINK_LOCAL = "local"
LINK_EXTERNAL = "external"
LINK_INLINE = "inline"

METHOD_PREFIX = "wiki."


def to_utc_naive(dt):
    """ aware datetime -> naive UTC datetime (what xmlrpc DateTime transports) """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def from_utc_naive(dt):
    """ naive UTC datetime (or xmlrpc DateTime) -> aware datetime """
    if isinstance(dt, xmlrpclib.DateTime):
        dt = datetime.strptime(dt.value, "%Y%m%dT%H:%M:%S")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class AbstractRPCHandler(object):
    """
    Base class of the XML-RPC handlers.

    @param context: WikiContext of the call, its session is the caller
    """
    def __init__(self, context):
        self.context = context
        self.engine = context.engine

    def check_permission(self, permission):
        """
        @raise xmlrpclib.Fault: ERR_NOPERMISSION if the caller lacks permission
        """
        if not self.engine.authorization_manager.check_permission(self.context.session, permission):
            logging.info("XML-RPC: %r denied %r", self.context.session, permission)
            raise xmlrpclib.Fault(ERR_NOPERMISSION, "You have no access to this resource, o master")

    def encode_wiki_page(self, page):
        raise NotImplementedError()

    def xmlrpc_getRPCVersionSupported(self):
        return RPC_VERSION

    def xmlrpc_getRecentChanges(self, since):
        raise NotImplementedError()

    def process(self, data):
        """
        Run the call encoded in data.

        @param data: XML-RPC request body (bytes)
        @return: XML-RPC response (str)
        """
        try:
            params, method = xmlrpclib.loads(data, use_builtin_types=True)
        except Exception as err:
            logging.warning("XML-RPC: unparseable request: %s", err)
            response = xmlrpclib.Fault(FAULT_PARSE_ERROR, "Parse error: %s" % err)
            return xmlrpclib.dumps(response, methodresponse=True, encoding='utf-8')

        logging.debug("XML-RPC: %s%r", method, params)
        fn = None
        if method and method.startswith(METHOD_PREFIX):
            fn = getattr(self, 'xmlrpc_' + method[len(METHOD_PREFIX):], None)
        if fn is None:
            response = xmlrpclib.Fault(FAULT_METHOD_NOT_FOUND, "No such method: %s" % method)
        else:
            try:
                # wrap response in a singleton tuple
                response = (fn(*params), )
            except xmlrpclib.Fault as fault:
                response = fault
            except Exception as err:
                logging.exception("XML-RPC: %s failed", method)
                response = xmlrpclib.Fault(FAULT_SERVER_ERROR, "Server error: %s" % err)
        return xmlrpclib.dumps(response, methodresponse=True, encoding='utf-8')


class RPCHandlerUTF8(AbstractRPCHandler):
    """ The handler behind /RPCU/ """
    def xmlrpc_getApplicationName(self):
        self.check_permission(PagePermission(WILDCARD, VIEW_ACTION))
        return self.engine.application_name

    def xmlrpc_getAllPages(self):
        self.check_permission(PagePermission(WILDCARD, VIEW_ACTION))
        pages = self.engine.page_manager.get_recent_changes()
        return [page.name for page in pages if not isinstance(page, Attachment)]

    def encode_wiki_page(self, page):
        """ the page info struct of page """
        ht = {
            'name': page.name,
            'lastModified': to_utc_naive(page.last_modified),
            'version': page.version,
        }
        if page.author is not None:
            ht['author'] = page.author
        return ht

    def xmlrpc_getRecentChanges(self, since):
        """
        @param since: UTC date, only pages changed after it are listed
        """
        self.check_permission(PagePermission(WILDCARD, VIEW_ACTION))
        since = from_utc_naive(since)
        result = []
        for page in self.engine.page_manager.get_recent_changes():
            if page.last_modified > since and not isinstance(page, Attachment):
                result.append(self.encode_wiki_page(page))
        return result

    def _parse_page_check_condition(self, pagename):
        """
        @return: pagename, if it exists and the caller may view it
        @raise xmlrpclib.Fault: ERR_NOPAGE or ERR_NOPERMISSION
        """
        if not self.engine.page_manager.wiki_page_exists(pagename):
            raise xmlrpclib.Fault(ERR_NOPAGE, "No such page '%s' found, o master." % pagename)
        self.check_permission(PagePermission(pagename, VIEW_ACTION))
        return pagename

    def _get_page(self, pagename, version=LATEST_VERSION):
        page = self.engine.page_manager.get_page(pagename, version)
        if page is None:
            raise xmlrpclib.Fault(ERR_NOPAGE, "No such page '%s' found, o master." % pagename)
        return page

    def xmlrpc_getPageInfo(self, pagename):
        return self.encode_wiki_page(self._get_page(self._parse_page_check_condition(pagename)))

    def xmlrpc_getPageInfoVersion(self, pagename, version):
        pagename = self._parse_page_check_condition(pagename)
        return self.encode_wiki_page(self._get_page(pagename, version))

    def xmlrpc_getPage(self, pagename):
        return self.engine.page_manager.get_pure_text(self._parse_page_check_condition(pagename), LATEST_VERSION)

    def xmlrpc_getPageVersion(self, pagename, version):
        return self.engine.page_manager.get_pure_text(self._parse_page_check_condition(pagename), version)

    def xmlrpc_getPageHTML(self, pagename):
        return self.engine.rendering_manager.get_html(self._parse_page_check_condition(pagename))

    def xmlrpc_getPageHTMLVersion(self, pagename, version):
        return self.engine.rendering_manager.get_html(self._parse_page_check_condition(pagename), version)

    def xmlrpc_listLinks(self, pagename):
        """
        The links on a page: structs with "page" (link target), "type"
        ("local" or "external") and "href".
        """
        pagename = self._parse_page_check_condition(pagename)
        page_manager = self.engine.page_manager

        page = self._get_page(pagename)
        pagedata = page_manager.get_pure_text(page)

        local_collector = LinkCollector()
        ext_collector = LinkCollector()
        att_collector = LinkCollector()

        context = api.context().create(self.engine, page)
        self.engine.rendering_manager.text_to_html(context, pagedata, local_collector, ext_collector, att_collector)

        result = []
        for link in local_collector:
            if page_manager.wiki_page_exists(link):
                href = context.get_view_url(link)
            else:
                href = context.get_url(action.EDIT, link)
            result.append({'page': link, 'type': LINK_LOCAL, 'href': href})

        for link in att_collector:
            result.append({'page': link, 'type': LINK_LOCAL, 'href': context.get_url(action.ATTACH, link)})

        # URLs are ASCII by definition, no need to change them
        for link in ext_collector:
            result.append({'page': link, 'type': LINK_EXTERNAL, 'href': link})

        return result
