# -*- coding: utf-8 -*-
"""
    JSPWiki - Flask blueprints

    frontend - the pages users see (JSP compatible URLs)
    xmlrpc   - the XML-RPC API for remote clients

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""
