# -*- coding: utf-8 -*-
"""
    JSPWiki - XML-RPC blueprint

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from flask import Blueprint

xmlrpc = Blueprint('xmlrpc', __name__)

import JSPWiki.apps.xmlrpc.views
