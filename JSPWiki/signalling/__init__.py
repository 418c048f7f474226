# -*- coding: utf-8 -*-
"""
    JSPWiki - signalling support

    JSPWiki uses blinker for sending signals and letting listeners subscribe
    to signals. The sender is always the WikiEngine.

    page_saved      page_name, version (pages and attachments)
    page_deleted    page_name
    page_displayed  page_name

    @copyright: 2010 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from blinker import Namespace, ANY

_signals = Namespace()

page_saved = _signals.signal('page_saved')
page_deleted = _signals.signal('page_deleted')
page_displayed = _signals.signal('page_displayed')


from JSPWiki import log
logging = log.getLogger(__name__)


@page_displayed.connect_via(ANY)
def log_page_displayed(engine, page_name):
    logging.info("page %s:%s displayed", engine.application_name, page_name)

@page_saved.connect_via(ANY)
def log_page_saved(engine, page_name, version=None):
    logging.info("page %s:%s saved (version %s)", engine.application_name, page_name, version)

@page_deleted.connect_via(ANY)
def log_page_deleted(engine, page_name):
    logging.info("page %s:%s deleted", engine.application_name, page_name)
