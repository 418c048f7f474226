# -*- coding: utf-8 -*-
"""
    JSPWiki - frontend blueprint

    @copyright: 2010 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from flask import Blueprint

frontend = Blueprint('frontend', __name__)

import JSPWiki.apps.frontend.views
