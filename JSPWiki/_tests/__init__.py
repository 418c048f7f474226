# -*- coding: utf-8 -*-
"""
    JSPWiki - some common code for testing

    @copyright: 2007 MoinMoin:KarolNowak,
                2008 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki import api
from JSPWiki.auth import WikiSession
from JSPWiki.pages import WikiPage


def wiki_context(engine, page_name, user_name=None, authenticated=False):
    """ a WikiContext for page_name, used by user_name (None: anonymous) """
    context = api.context().create(engine, WikiPage(engine, page_name))
    context.context.session = WikiSession(engine, user_name, authenticated=authenticated)
    return context


def save_page(engine, page_name, text, user_name=u'admin', changenote=u''):
    """ store a new version of a page, as admin by default """
    context = wiki_context(engine, page_name, user_name, authenticated=True)
    return engine.page_manager.save_text(context, text, changenote)
