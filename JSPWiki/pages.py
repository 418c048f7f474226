# -*- coding: utf-8 -*-
"""
    JSPWiki - pages, attachments and the page manager

    Every page is an item in the storage backend, every page version is a
    revision of that item (version = revision number + 1). Attachments are
    items named "<parent page>/<file name>" - page names never contain a
    slash, so the name tells pages and attachments apart.

    @copyright: 2008 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import mimetypes
import posixpath
import re
import threading
from datetime import datetime, timezone

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import config
from JSPWiki.error import WikiError
from JSPWiki.security import parse_acl, strip_acl_lines
from JSPWiki.signalling import page_saved, page_deleted
from JSPWiki.storage import AUTHOR, CHANGENOTE, MIMETYPE, EDIT_LOG_ADDR
from JSPWiki.storage.error import NoSuchItemError, NoSuchRevisionError

# versions start at 1, LATEST_VERSION (and any other version below 1) means the newest one
LATEST_VERSION = -1

ATTACHMENT_DELIMITER = u'/'

PAGE_MIMETYPE = 'text/x-jspwiki'


def utc_datetime(timestamp):
    """ seconds since the epoch -> aware UTC datetime """
    return datetime.fromtimestamp(timestamp, timezone.utc)


def normalize_post_data(text):
    """
    Line endings become LF and the text ends with a newline (empty text
    stays empty).
    """
    text = text.replace(u'\r\n', u'\n').replace(u'\r', u'\n')
    if text and not text.endswith(u'\n'):
        text += u'\n'
    return text


class WikiPage(object):
    """
    A named, versioned text document.

    version is the number of the version (the first version is 1) or
    LATEST_VERSION for pages that were not loaded from storage.
    """
    def __init__(self, engine, name):
        self.engine = engine
        self.name = name
        self.version = LATEST_VERSION
        self.last_modified = None
        self.author = None
        self.changenote = None
        self.size = 0
        self.attributes = {}

    def get_attribute(self, key, default=None):
        return self.attributes.get(key, default)

    def set_attribute(self, key, value):
        self.attributes[key] = value

    @property
    def exists(self):
        return self.last_modified is not None

    def __eq__(self, other):
        if not isinstance(other, WikiPage):
            return NotImplemented
        return self.name == other.name and self.version == other.version

    def __hash__(self):
        return hash((self.name, self.version))

    def __repr__(self):
        return '<%s %r version %d>' % (self.__class__.__name__, self.name, self.version)


class Attachment(WikiPage):
    """ A file attached to a page """
    def __init__(self, engine, parent_name, file_name):
        WikiPage.__init__(self, engine, parent_name + ATTACHMENT_DELIMITER + file_name)
        self.parent_name = parent_name
        self.file_name = file_name
        self.mimetype = mimetypes.guess_type(file_name)[0] or 'application/octet-stream'


def is_attachment_name(name):
    return ATTACHMENT_DELIMITER in name


def split_attachment_name(name):
    """ 'Parent/file.txt' -> ('Parent', 'file.txt') """
    parent, _, file_name = name.partition(ATTACHMENT_DELIMITER)
    return parent, file_name


_unsafe_filename_re = re.compile(r'[\x00-\x1f/\\:*?"<>|]')


def clean_file_name(file_name):
    """ strip any path a browser may send and characters we don't want in names """
    file_name = posixpath.basename(file_name.replace(u'\\', u'/'))
    file_name = _unsafe_filename_re.sub(u'', file_name).strip()
    if file_name in (u'.', u'..'):
        file_name = u''
    return file_name


class PageManager(object):
    """
    Access to the pages and attachments of a wiki.

    @param engine: the WikiEngine that owns this manager
    """
    def __init__(self, engine):
        self.engine = engine
        self.storage = engine.storage
        self._lock = threading.RLock()

    # ---------------------------------------------------------------- reading

    def _get_item(self, name):
        try:
            return self.storage.get_item(name)
        except NoSuchItemError:
            return None

    def _get_revision(self, item, version):
        revno = LATEST_VERSION if version is None or version < 1 else version - 1
        try:
            return item.get_revision(revno)
        except NoSuchRevisionError:
            return None

    def _page_from_revision(self, item, rev):
        if is_attachment_name(item.name):
            parent, file_name = split_attachment_name(item.name)
            page = Attachment(self.engine, parent, file_name)
            page.mimetype = rev.get(MIMETYPE) or page.mimetype
        else:
            page = WikiPage(self.engine, item.name)
        page.version = rev.revno + 1
        page.last_modified = utc_datetime(rev.timestamp)
        page.author = rev.get(AUTHOR)
        page.changenote = rev.get(CHANGENOTE)
        page.size = rev.size
        return page

    def page_exists(self, name, version=LATEST_VERSION):
        """
        Does a page (not an attachment) of that name (and version) exist?
        """
        if not name or is_attachment_name(name):
            return False
        item = self._get_item(name)
        if item is None:
            return False
        if version is None or version < 1:
            return bool(item.list_revisions())
        return (version - 1) in item.list_revisions()

    def wiki_page_exists(self, name, version=LATEST_VERSION):
        """
        Is there anything called name? Special pages, pages and attachments count.
        """
        if not name:
            return False
        if self.engine.action_bean_factory.get_special_page_reference(name) is not None:
            return True
        if self.page_exists(name, version):
            return True
        return is_attachment_name(name) and self.get_attachment_info(name, version) is not None

    def get_page(self, name, version=LATEST_VERSION):
        """
        Get a page (or attachment) with its version info.

        @rtype: WikiPage or None
        """
        if not name:
            return None
        item = self._get_item(name)
        if item is None:
            return None
        rev = self._get_revision(item, version)
        if rev is None:
            return None
        return self._page_from_revision(item, rev)

    def get_pure_text(self, name, version=LATEST_VERSION):
        """
        The stored text of a page, ACL lines included. "" for a missing page.
        """
        if isinstance(name, WikiPage):
            name, version = name.name, name.version
        if not name or is_attachment_name(name):
            return u''
        item = self._get_item(name)
        if item is None:
            return u''
        rev = self._get_revision(item, version)
        if rev is None:
            return u''
        return rev.read().decode(config.charset)

    def get_text(self, name, version=LATEST_VERSION):
        """ The text of a page without the ACL lines """
        return strip_acl_lines(self.get_pure_text(name, version))

    def get_acl(self, page):
        """
        The access control list of a page (attachments use their parent's).

        @param page: WikiPage or page name
        @rtype: AccessControlList or None
        """
        name = page.name if isinstance(page, WikiPage) else page
        if is_attachment_name(name):
            name = split_attachment_name(name)[0]
        return parse_acl(name, self.get_pure_text(name))

    def get_version_history(self, name):
        """
        All versions of a page or attachment, newest first.

        @rtype: list of WikiPage (empty if the page does not exist)
        """
        item = self._get_item(name)
        if item is None:
            return []
        history = []
        for revno in reversed(item.list_revisions()):
            history.append(self._page_from_revision(item, item.get_revision(revno)))
        return history

    def _latest_pages(self):
        for item in self.storage.iteritems():
            rev = self._get_revision(item, LATEST_VERSION)
            if rev is not None:
                yield self._page_from_revision(item, rev)

    def get_recent_changes(self):
        """
        Latest versions of all pages and attachments, most recently changed first.
        """
        pages = list(self._latest_pages())
        pages.sort(key=lambda page: (page.last_modified, page.name), reverse=True)
        return pages

    def get_all_pages(self):
        """ Latest versions of all pages (no attachments), ordered by name """
        pages = [page for page in self._latest_pages() if not isinstance(page, Attachment)]
        pages.sort(key=lambda page: page.name)
        return pages

    def get_total_page_count(self):
        return len(self.get_all_pages())

    def find_pages(self, query):
        """
        Case-insensitive search in page names and texts.

        @param query: text to look for
        @rtype: list of WikiPage
        @return: pages whose name matches, then pages whose text matches,
                 each group ordered by name
        """
        query = (query or u'').strip().lower()
        if not query:
            return []
        by_name = []
        by_text = []
        for page in self.get_all_pages():
            if query in page.name.lower():
                by_name.append(page)
            elif query in self.get_text(page.name).lower():
                by_text.append(page)
        return by_name + by_text

    # ---------------------------------------------------------------- writing

    def _author(self, context):
        session = getattr(context, 'session', None)
        if session is not None:
            return session.get_user_name()
        return None

    def _remote_addr(self, context):
        request = getattr(context, 'request', None)
        return getattr(request, 'remote_addr', None)

    def _store(self, name, data, metadata):
        with self._lock:
            item = self._get_item(name)
            if item is None:
                item = self.storage.create_item(name)
                revno = 0
            else:
                revnos = item.list_revisions()
                revno = revnos[-1] + 1 if revnos else 0
            rev = item.create_revision(revno)
            for key, value in metadata.items():
                if value is not None:
                    rev[key] = value
            rev.write(data)
            item.commit()
        return revno + 1

    def save_text(self, context, text, changenote=None):
        """
        Store text as a new version of the context page.

        Nothing is stored if the text did not change.

        @param context: WikiContext carrying the page (and the session of the author)
        @param text: the new page text
        @param changenote: optional short description of the change
        @rtype: WikiPage or None
        @return: the new version or None if nothing was saved
        """
        page = context.page
        if page is None or not page.name:
            raise WikiError(u"No page to save to")
        if is_attachment_name(page.name):
            raise WikiError(u"Page names must not contain '%s'" % ATTACHMENT_DELIMITER)
        text = normalize_post_data(text)
        if self.page_exists(page.name) and text == self.get_pure_text(page.name):
            logging.debug("page %s not saved, text is unchanged", page.name)
            return None
        version = self._store(page.name, text.encode(config.charset), {
            MIMETYPE: PAGE_MIMETYPE,
            AUTHOR: self._author(context),
            CHANGENOTE: changenote or None,
            EDIT_LOG_ADDR: self._remote_addr(context),
        })
        page_saved.send(self.engine, page_name=page.name, version=version)
        return self.get_page(page.name, version)

    def delete_page(self, name):
        """
        Remove a page with all its versions and attachments
        (or a single attachment).

        @raise WikiError: no such page
        """
        with self._lock:
            item = self._get_item(name)
            if item is None:
                raise WikiError(u"No such page: %s" % name)
            if not is_attachment_name(name):
                for attachment in self.list_attachments(name):
                    self.storage.get_item(attachment.name).destroy()
            item.destroy()
        page_deleted.send(self.engine, page_name=name)

    # ------------------------------------------------------------ attachments

    def store_attachment(self, context, parent, file_name, data, mimetype=None):
        """
        Store data as a new version of attachment file_name of page parent.

        @raise WikiError: the parent page does not exist or the file name is unusable
        @rtype: Attachment
        """
        file_name = clean_file_name(file_name or u'')
        if not file_name:
            raise WikiError(u"Invalid attachment file name")
        if not self.page_exists(parent):
            raise WikiError(u"Page %s does not exist, can't attach files to it" % parent)
        attachment = Attachment(self.engine, parent, file_name)
        version = self._store(attachment.name, data, {
            MIMETYPE: mimetype or attachment.mimetype,
            AUTHOR: self._author(context),
            EDIT_LOG_ADDR: self._remote_addr(context),
        })
        page_saved.send(self.engine, page_name=attachment.name, version=version)
        return self.get_attachment_info(attachment.name, version)

    def get_attachment_info(self, name, version=LATEST_VERSION):
        """
        @param name: full attachment name ("Page/file.txt")
        @rtype: Attachment or None
        """
        if not is_attachment_name(name):
            return None
        page = self.get_page(name, version)
        if isinstance(page, Attachment):
            return page
        return None

    def get_attachment_data(self, attachment):
        """ the stored bytes of (the version of) an attachment """
        item = self._get_item(attachment.name)
        if item is None:
            raise WikiError(u"No such attachment: %s" % attachment.name)
        rev = self._get_revision(item, attachment.version)
        if rev is None:
            raise WikiError(u"No such attachment version: %s %d" % (attachment.name, attachment.version))
        return rev.read()

    def list_attachments(self, parent):
        """ latest versions of the attachments of a page, ordered by file name """
        prefix = parent + ATTACHMENT_DELIMITER
        attachments = [page for page in self._latest_pages()
                       if isinstance(page, Attachment) and page.name.startswith(prefix)]
        attachments.sort(key=lambda att: att.file_name)
        return attachments
