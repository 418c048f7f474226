# -*- coding: utf-8 -*-
"""
JSPWiki - i18n (internationalization) and l10n (localization) support

@copyright: 2011 MoinMoin:ThomasWaldmann,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from flask import current_app, request

from flask_babel import Babel
from flask_babel import gettext as _
from flask_babel import lazy_gettext as N_

from JSPWiki import log
logging = log.getLogger(__name__)


def i18n_init(app):
    """ initialize Flask-Babel """
    babel = Babel(app, locale_selector=get_locale)
    return babel


def get_locale():
    """ return the locale for the current request """
    cfg = current_app.cfg
    # try to guess the language from the user accept
    # header the browser transmits. The best match wins.
    locale = request.accept_languages.best_match(cfg.language_supported)
    if not locale:
        locale = cfg.language_default
    return locale
