# -*- coding: utf-8 -*-
"""
JSPWiki - test wiki configuration

Do not change any values without good reason.

We mostly want to have default values here, except for stuff that doesn't
work without setting them (like the users).

@copyright: 2000-2004 by Juergen Hermann <jh@web.de>,
            2026 JSPWiki contributors
@license: GNU GPL, see COPYING for details.
"""

from werkzeug.security import generate_password_hash

from JSPWiki.config.default import DefaultConfig

# cheap hashes, the tests log in a lot
_HASH_METHOD = 'pbkdf2:sha256:1000'


class Config(DefaultConfig):
    storage_uri = 'memory:'
    secrets = 'only for testing, not secret at all'
    properties = {
        'jspwiki.applicationName': u'JSPWiki Test',
        'jspwiki.frontPage': u'Main',
    }
    users = {
        u'admin': generate_password_hash(u'secret', method=_HASH_METHOD),
        u'Janne': generate_password_hash(u'janne', method=_HASH_METHOD),
    }
    groups = {
        u'Admin': [u'admin', ],
    }
