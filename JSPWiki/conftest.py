# -*- coding: utf-8 -*-
"""
JSPWiki Testing Framework
-------------------------

All test modules must be named test_modulename to be included in the
test suite. If you are testing a package, name the test module
test_package_module.

Test classes get a fresh wiki for every test method: self.app is the Flask
application, self.ctx its pushed test request context and self.engine the
WikiEngine. The wiki's storage is empty.

Tests that require a certain configuration, like an other security policy,
must use a Config class to define the required configuration within the
test class.

@copyright: 2005 MoinMoin:NirSoffer,
            2007 MoinMoin:AlexanderSchremmer,
            2008 MoinMoin:ThomasWaldmann,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

# exclude some directories from py.test test discovery, pathes relative to this file
collect_ignore = ['templates',
                  '../wiki', # no tests there
                  '../instance',
                 ]

import pytest

from JSPWiki.app import create_app
from JSPWiki.engine import WikiEngine
from JSPWiki._tests import wikiconfig


def init_test_app(given_config):
    app = create_app(flask_config_dict=dict(SECRET_KEY='foo', TESTING=True),
                     wiki_config_class=given_config)
    ctx = app.test_request_context('/')
    ctx.push()
    engine = WikiEngine.find(app)
    return app, ctx, engine


@pytest.fixture(autouse=True)
def wiki_app(request):
    """
    Inject app, ctx and engine into test class instances, using the inner
    Config class of the test class if it has one.
    """
    instance = request.instance
    if instance is None:
        # plain test functions ask for the fixture if they need a wiki
        given_config = wikiconfig.Config
    else:
        given_config = getattr(instance, 'Config', wikiconfig.Config)
    app, ctx, engine = init_test_app(given_config)
    if instance is not None:
        instance.app, instance.ctx, instance.engine = app, ctx, engine
    yield app
    ctx.pop()
