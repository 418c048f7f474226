# -*- coding: utf-8 -*-
"""
    JSPWiki - action bean factory

    Turns requests into action beans: finds the page a request is about
    (tolerating singular/plural and unwikified spellings), knows the special
    pages that are redirects rather than wiki pages and stashes the bean of
    the current request in flask.g.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from urllib.parse import urlsplit

from flask import g as flaskg

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import config, util
from JSPWiki.action import WikiContext, ViewActionBean, WikiActionBeanContext
from JSPWiki.error import WikiError
from JSPWiki.pages import WikiPage, LATEST_VERSION

# path prefix used when the base URL can't be parsed
DEFAULT_PATH_PREFIX = '/JSPWiki'


class WikiActionBeanFactory(object):
    """
    @param engine: the WikiEngine
    @param properties: wiki properties (special pages, plural matching)
    """
    def __init__(self, engine, properties):
        self.engine = engine
        self._special_redirects = {}

        for key, value in properties.items():
            if key.startswith(config.special_page_prefix):
                special_page = key[len(config.special_page_prefix):]
                if special_page is not None and value is not None:
                    special_page = special_page.strip()
                    redirect_url = value.strip()
                    if special_page not in self._special_redirects:
                        self._special_redirects[special_page] = redirect_url

        self.match_english_plurals = util.get_boolean_property(properties, config.PROP_MATCHPLURALS, True)

        # the path of the base URL, used for building URLs
        base_url = engine.base_url
        path_prefix = ''
        if base_url:
            try:
                parts = urlsplit(base_url)
                if not (parts.scheme and parts.netloc):
                    raise ValueError(base_url)
                path_prefix = parts.path
            except ValueError:
                logging.warning("malformed base URL %r, guessing path prefix %s", base_url, DEFAULT_PATH_PREFIX)
                path_prefix = DEFAULT_PATH_PREFIX
        self.path_prefix = path_prefix

    @property
    def special_pages(self):
        """ special page name -> redirect URL """
        return dict(self._special_redirects)

    def _plural_variant(self, name):
        if name.endswith('s'):
            return name[:-1]
        return name + 's'

    def get_final_page_name(self, page):
        """
        The name of the existing page page refers to.

        Tries page itself, its singular/plural variant (if plural matching is
        on), the wikified name and its singular/plural variant.

        @return: the page name or None if no variant exists
        """
        is_there = self.simple_page_exists(page)
        final_name = page

        if not is_there and self.match_english_plurals:
            final_name = self._plural_variant(page)
            is_there = self.simple_page_exists(final_name)

        if not is_there:
            final_name = util.wikify_link(page)
            is_there = self.simple_page_exists(final_name)

            if not is_there and self.match_english_plurals:
                final_name = self._plural_variant(final_name)
                is_there = self.simple_page_exists(final_name)

        return final_name if is_there else None

    def get_special_page_reference(self, page):
        """ the redirect URL of special page page or None """
        return self._special_redirects.get(page)

    def new_action_bean(self, request, response, bean_class):
        """
        Create the action bean of a request.

        @param bean_class: the WikiActionBean subclass to create
        @raise ValueError: request or response missing
        @raise WikiError: the bean can't be created
        """
        if request is None or response is None:
            raise ValueError("Request or response cannot be None")

        bean = self.new_instance(bean_class)

        bean.set_context(WikiActionBeanContext(self.engine, request, response))

        if isinstance(bean, WikiContext):
            page = self.extract_page_from_parameter(request)

            # For view action, default to front page
            if page is None and isinstance(bean, ViewActionBean):
                page = self.engine.front_page
            if page is not None:
                bean.set_page(self.resolve_page(request, page))
        return bean

    def new_view_action_bean(self, request=None, response=None, page=None):
        """
        Create a view bean for page (default: the front page).
        """
        context = WikiActionBeanContext(self.engine, request, response)
        bean = ViewActionBean()
        bean.set_context(context)

        if page is None:
            page = self._front_page()
        bean.set_page(page)
        return bean

    def _front_page(self):
        page = self.engine.page_manager.get_page(self.engine.front_page)
        if page is None:
            page = WikiPage(self.engine, self.engine.front_page)
        return page

    def extract_page_from_parameter(self, request):
        """
        The page named by the first "page" parameter, resolved by
        get_final_page_name (the parameter value if that fails), or None.
        """
        if request is None:
            return None
        pages = request.values.getlist('page')
        if not pages:
            return None
        page = pages[0]
        final_page = self.get_final_page_name(page)
        if final_page is not None:
            page = final_page
        return page

    def new_instance(self, bean_class):
        if bean_class is None:
            return None
        try:
            return bean_class()
        except Exception as err:
            raise WikiError(u"Could not create ActionBean: %s" % err)

    def resolve_page(self, request, page):
        """
        The WikiPage called page, in the version given by the "version"
        parameter. Missing pages become new WikiPage objects.
        """
        version = LATEST_VERSION
        rev = request.values.get('version') if request is not None else None
        if rev:
            try:
                version = int(rev)
            except ValueError:
                logging.warning("ignoring invalid version parameter %r", rev)

        wikipage = self.engine.page_manager.get_page(page, version)
        if wikipage is None:
            wikipage = WikiPage(self.engine, util.clean_link(page))
        return wikipage

    def simple_page_exists(self, page):
        if page in self._special_redirects:
            return True
        return self.engine.page_manager.page_exists(page)

    @staticmethod
    def find_action_bean():
        """ the action bean of the current request (or None) """
        return flaskg.get('action_bean')

    @staticmethod
    def save_action_bean(action_bean):
        """
        Stash the bean and its page in request scope. The stashed page is the
        front page if the bean has none.
        """
        flaskg.action_bean = action_bean

        page = None
        if isinstance(action_bean, WikiContext):
            page = action_bean.page
        if page is None:
            engine = action_bean.engine
            page = engine.page_manager.get_page(engine.front_page)
            if page is None:
                page = WikiPage(engine, engine.front_page)
        if isinstance(action_bean, WikiContext):
            action_bean.set_page(page)
        flaskg.wiki_page = page

        logging.debug("Stashed action bean %r and page %s", action_bean, page.name)
