# -*- coding: utf-8 -*-
"""
    JSPWiki - XML-RPC views

    Clients POST their calls to /RPCU/. Callers are anonymous unless they
    send HTTP Basic credentials of a configured user.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from flask import request, Response

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki.apps.xmlrpc import xmlrpc
from JSPWiki.engine import WikiEngine
from JSPWiki.xmlrpc import RPCHandlerUTF8


@xmlrpc.route('/', methods=['POST', ])
def rpc_utf8():
    engine = WikiEngine.find()
    session = engine.authentication_manager.basic_auth_session(request)
    if session is None:
        return Response('Unauthorized', 401,
                        {'WWW-Authenticate': 'Basic realm="%s"' % engine.application_name})
    response = Response(mimetype='text/xml')
    context = engine.action_bean_factory.new_view_action_bean(request, response)
    context.context.session = session
    result = RPCHandlerUTF8(context).process(request.get_data())
    response.set_data(result.encode('utf-8'))
    return response
