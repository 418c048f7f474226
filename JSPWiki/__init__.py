# -*- coding: utf-8 -*-
"""
JSPWiki - a wiki engine in Python.

@copyright: 2000-2006 by Juergen Hermann <jh@web.de>,
            2002-2011 MoinMoin:ThomasWaldmann,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from JSPWiki import log
logging = log.getLogger(__name__)

project = "JSPWiki"
