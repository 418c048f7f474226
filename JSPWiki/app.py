# -*- coding: utf-8 -*-
"""
    JSPWiki - WSGI application

    create_app() builds the Flask application of a wiki: it loads the wiki
    configuration, sets up i18n and the rendering cache, creates the
    WikiEngine and registers the views.

    @copyright: 2003-2010 MoinMoin:ThomasWaldmann,
                2008-2008 MoinMoin:FlorianKrupicka,
                2010 MoinMoin:DiogenesAugusto,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import os

from flask import Flask
from flask_caching import Cache

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import api
from JSPWiki.engine import WikiEngine
from JSPWiki.i18n import i18n_init
from JSPWiki.pages import utc_datetime

# environment variable naming the wiki configuration file
CONFIG_ENV = 'JSPWIKI_CONFIG'

# name of the wiki configuration class in the configuration file
CONFIG_CLASS_NAME = 'JSPWIKICFG'


def datetime_format(dt, fmt='%Y-%m-%d %H:%M:%S'):
    if dt is None:
        return u''
    if isinstance(dt, (int, float)):
        dt = utc_datetime(dt)
    return dt.strftime(fmt)


def setup_jinja_env(app):
    app.jinja_env.filters['datetime_format'] = datetime_format
    app.jinja_env.globals.update({
        'cfg': app.cfg,
        'platform_version': api.get_platform_version_string(),
    })


def create_app(config_uri=None, flask_config_dict=None, wiki_config_class=None, **wiki_config):
    """
    Create the Flask application of a wiki.

    @param config_uri: path of a wiki configuration file (default: the file
                       named by $JSPWIKI_CONFIG), it must define
                       JSPWIKICFG = <wiki configuration class>
    @param flask_config_dict: Flask settings that override the file's
    @param wiki_config_class: wiki configuration class, overrides the file's
    @param wiki_config: wiki settings that override the class attributes
    """
    app = Flask('JSPWiki')
    if config_uri is None:
        config_uri = os.environ.get(CONFIG_ENV)
    if config_uri:
        app.config.from_pyfile(os.path.abspath(config_uri))
    if flask_config_dict:
        app.config.update(flask_config_dict)

    if wiki_config_class is None:
        wiki_config_class = app.config.get(CONFIG_CLASS_NAME)
    if wiki_config_class is None:
        from JSPWiki.config.default import DefaultConfig as wiki_config_class
    if wiki_config:
        # just to override some settings, e.g. for tests
        wiki_config_class = type('Config', (wiki_config_class, ), wiki_config)
    app.cfg = wiki_config_class()

    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = app.cfg.secrets['session']

    i18n_init(app)

    cache = Cache(app, config={
        'CACHE_TYPE': app.cfg.cache_type,
        'CACHE_DEFAULT_TIMEOUT': app.cfg.cache_default_timeout,
    })

    api.init(app.cfg.wiki_properties)
    WikiEngine(app, app.cfg, cache)

    from JSPWiki.apps.frontend import frontend
    app.register_blueprint(frontend)
    if app.cfg.xmlrpc_enabled:
        from JSPWiki.apps.xmlrpc import xmlrpc
        app.register_blueprint(xmlrpc, url_prefix='/RPCU')

    setup_jinja_env(app)
    logging.info("created application %s", app.cfg.application_name)
    return app
