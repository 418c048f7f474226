# -*- coding: utf-8 -*-
"""
    JSPWiki - site-independent configuration constants

    @copyright: 2000-2004 Juergen Hermann <jh@web.de>,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

# Charset - we support only 'utf-8'. While older encodings might work,
# we don't have the resources to test them, and there is no real
# benefit for the user. IMPORTANT: use only lowercase 'utf-8'!
charset = 'utf-8'

# URL prefix for static files (css, images)
url_prefix_static = '/static'

# name of the built-in default properties resource (inside this package)
default_properties_name = 'jspwiki.properties'

# prefix of the property keys that define special page redirects
special_page_prefix = 'jspwiki.specialPage.'

# property keys used all over the place
PROP_APPNAME = 'jspwiki.applicationName'
PROP_FRONTPAGE = 'jspwiki.frontPage'
PROP_BASEURL = 'jspwiki.baseURL'
PROP_MATCHPLURALS = 'jspwiki.translatorReader.matchEnglishPlurals'
PROP_ENCODING = 'jspwiki.encoding'
PROP_PAGE_PROVIDER = 'jspwiki.pageProvider'

# default front page name
DEFAULT_FRONT_PAGE = u'Main'
