# -*- coding: utf-8 -*-
"""
    JSPWiki - default service providers

    The implementations of the JSPWiki.api.spi interfaces used unless the
    wiki properties name others.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki.api import spi
from JSPWiki.auth import WikiSession
from JSPWiki.pages import WikiPage, Attachment
from JSPWiki.security import AccessControlList, AclEntry


class DefaultAclsSPI(spi.AclsSPI):
    def acl(self):
        return AccessControlList()

    def entry(self):
        return AclEntry()


class DefaultContentsSPI(spi.ContentsSPI):
    def page(self, engine, name):
        return WikiPage(engine, name)

    def attachment(self, engine, parent, file_name):
        return Attachment(engine, parent, file_name)


class DefaultContextSPI(spi.ContextSPI):
    def create(self, engine, page):
        """ a view context for page, not bound to any request """
        return engine.action_bean_factory.new_view_action_bean(page=page)


class DefaultEngineSPI(spi.EngineSPI):
    def find(self, app, properties=None):
        # imported here, the engine module imports the api module
        from JSPWiki.engine import WikiEngine
        return WikiEngine.find(app)


class DefaultSessionSPI(spi.SessionSPI):
    def find(self, engine, request):
        return WikiSession.find(engine, request)

    def guest(self, engine):
        return WikiSession.guest(engine)
