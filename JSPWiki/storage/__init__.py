# -*- coding: utf-8 -*-
"""
    JSPWiki - page storage API

    A backend keeps items, an item keeps numbered revisions. Every wiki page
    and every attachment is an item, every version of it is a revision:
    version n of a page is revision n - 1 of its item.

    Revisions are written once. A NewRevision collects data and metadata
    (author, change note, ...) until the item is committed, from then on it
    is read back as a StoredRevision. Revision numbers start at 0 and have
    no gaps; LATEST_REVISION addresses the newest one.

    Concrete backends (see JSPWiki.storage.backends) implement the
    underscore methods of Backend, Item and the revisions call them.

    @copyright: 2008 MoinMoin:ChristopherDenter,
                2008 MoinMoin:JohannesBerg,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from collections.abc import Mapping

from JSPWiki.storage.error import NoSuchItemError, RevisionAlreadyExistsError, RevisionNumberMismatchError

# revision metadata keys
MIMETYPE = "mimetype"
AUTHOR = "author"
CHANGENOTE = "changenote"
EDIT_LOG_ADDR = "edit_log_addr"

LATEST_REVISION = -1


class Backend(object):
    """
    A collection of items, e.g. all pages and attachments of a wiki.
    """
    def get_item(self, itemname):
        """
        @rtype: Item
        @raise NoSuchItemError: there is no item called itemname
        """
        raise NotImplementedError()

    def has_item(self, itemname):
        try:
            self.get_item(itemname)
        except NoSuchItemError:
            return False
        return True

    def create_item(self, itemname):
        """
        A new item, it is stored when its first revision is committed.

        @rtype: Item
        @raise ItemAlreadyExistsError: there already is an item called itemname
        @raise TypeError: itemname is not a str
        """
        raise NotImplementedError()

    def iteritems(self):
        """ iterator over all stored items """
        raise NotImplementedError()

    def _list_revisions(self, item):
        """ the revision numbers of item in ascending order, [] for new items """
        raise NotImplementedError()

    def _get_revision(self, item, revno):
        """
        @param revno: revision number, LATEST_REVISION for the newest
        @rtype: StoredRevision
        @raise NoSuchRevisionError: item has no such revision
        """
        raise NotImplementedError()

    def _create_revision(self, item, revno):
        """
        @rtype: NewRevision
        @raise RevisionAlreadyExistsError: revno is taken
        @raise RevisionNumberMismatchError: revno is not the next free number
        """
        raise NotImplementedError()

    def _commit_item(self, item):
        """ store the uncommitted revision of item (creating the item if needed) """
        raise NotImplementedError()

    def _rollback_item(self, item):
        """ forget the uncommitted revision of item """
        raise NotImplementedError()

    def _destroy_item(self, item):
        """
        Remove item and all its revisions.

        @raise NoSuchItemError: item was never committed
        """
        raise NotImplementedError()

    def _check_new_revno(self, item, revno):
        # shared by the backends
        revnos = self._list_revisions(item)
        last_revno = revnos[-1] if revnos else -1
        if revno in revnos:
            raise RevisionAlreadyExistsError("Item %r already has revision %d" % (item.name, revno))
        if revno != last_revno + 1:
            raise RevisionNumberMismatchError("The latest revision of %r is %d, can't create revision %d"
                                              % (item.name, last_revno, revno))


class Item(object):
    """
    Proxy for an item of a backend. It is cheap, get a new one when needed.
    """
    def __init__(self, backend, itemname, item_id=None):
        self._backend = backend
        self._name = itemname
        # backend specific key of a stored item, None until committed
        self._item_id = item_id
        self._uncommitted_revision = None

    @property
    def name(self):
        return self._name

    def list_revisions(self):
        return self._backend._list_revisions(self)

    def get_revision(self, revno):
        return self._backend._get_revision(self, revno)

    def create_revision(self, revno):
        """
        Start revision revno; there is at most one uncommitted revision.
        """
        uncommitted = self._uncommitted_revision
        if uncommitted is not None:
            if uncommitted.revno != revno:
                raise RevisionNumberMismatchError("Revision %d of %r is not committed yet"
                                                  % (uncommitted.revno, self.name))
            return uncommitted
        self._uncommitted_revision = self._backend._create_revision(self, revno)
        return self._uncommitted_revision

    def commit(self):
        assert self._uncommitted_revision is not None, "nothing to commit"
        try:
            self._backend._commit_item(self)
        finally:
            self._uncommitted_revision = None

    def rollback(self):
        self._backend._rollback_item(self)
        self._uncommitted_revision = None

    def destroy(self):
        self._backend._destroy_item(self)
        self._item_id = None

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.name)


class Revision(Mapping):
    """
    A revision of an item: its metadata (a read-only mapping), its data and
    its creation timestamp (seconds since the epoch, UTC).
    """
    def __init__(self, item, revno, timestamp=None, metadata=None):
        self._item = item
        self._revno = revno
        self._timestamp = timestamp
        self._metadata = dict(metadata or {})

    @property
    def item(self):
        return self._item

    @property
    def revno(self):
        return self._revno

    @property
    def timestamp(self):
        return self._timestamp

    def __getitem__(self, key):
        return self._metadata[key]

    def __iter__(self):
        return iter(self._metadata)

    def __len__(self):
        return len(self._metadata)


class StoredRevision(Revision):
    """ a committed revision, all data is loaded """
    def __init__(self, item, revno, timestamp, metadata, data):
        Revision.__init__(self, item, revno, timestamp, metadata)
        self._data = data

    @property
    def size(self):
        return len(self._data)

    def read(self):
        return self._data


class NewRevision(Revision):
    """ a revision that is being written, metadata and data can be added """
    def __init__(self, item, revno):
        Revision.__init__(self, item, revno)
        self._chunks = []
        self.size = 0

    @Revision.timestamp.setter
    def timestamp(self, timestamp):
        # importers may keep the original time of a version
        self._timestamp = float(timestamp)

    def __setitem__(self, key, value):
        if not isinstance(key, str):
            raise TypeError("Metadata keys must be str, not %s" % type(key))
        if not (value is None or isinstance(value, (str, int, float))):
            raise TypeError("Metadata values must be str, int or float, not %s" % type(value))
        self._metadata[key] = value

    def write(self, data):
        self._chunks.append(data)
        self.size += len(data)

    def get_data(self):
        return b''.join(self._chunks)

    def get_metadata(self):
        return dict(self._metadata)
