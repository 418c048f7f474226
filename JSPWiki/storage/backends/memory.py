# -*- coding: utf-8 -*-
"""
    JSPWiki - MemoryBackend

    Keeps all items in dicts of the backend object. Everything is gone when
    the process ends, so this is for tests and throw-away wikis only.

    @copyright: 2008 MoinMoin:ChristopherDenter,
                2008 MoinMoin:JohannesBerg,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import time
from itertools import count
from threading import RLock

from JSPWiki.storage import Backend, Item, StoredRevision, NewRevision, LATEST_REVISION
from JSPWiki.storage.error import NoSuchItemError, NoSuchRevisionError, \
                                  ItemAlreadyExistsError, RevisionAlreadyExistsError


class MemoryBackend(Backend):
    def __init__(self):
        self._ids = count()
        self._itemmap = {}      # {itemname: item_id}
        self._revisions = {}    # {item_id: {revno: (timestamp, metadata, data)}}
        self._lock = RLock()

    def get_item(self, itemname):
        try:
            return Item(self, itemname, self._itemmap[itemname])
        except KeyError:
            raise NoSuchItemError("No such item: %r" % itemname)

    def has_item(self, itemname):
        return itemname in self._itemmap

    def create_item(self, itemname):
        if not isinstance(itemname, str):
            raise TypeError("Item names must be str, not %s" % type(itemname))
        if self.has_item(itemname):
            raise ItemAlreadyExistsError("An item called %r already exists" % itemname)
        return Item(self, itemname)

    def iteritems(self):
        # a copy, callers may destroy items while iterating
        for itemname, item_id in list(self._itemmap.items()):
            yield Item(self, itemname, item_id)

    def _list_revisions(self, item):
        return sorted(self._revisions.get(item._item_id, {}))

    def _get_revision(self, item, revno):
        revisions = self._revisions.get(item._item_id, {})
        if revno == LATEST_REVISION and revisions:
            revno = max(revisions)
        try:
            timestamp, metadata, data = revisions[revno]
        except KeyError:
            raise NoSuchRevisionError("Item %r has no revision %d" % (item.name, revno))
        return StoredRevision(item, revno, timestamp, metadata, data)

    def _create_revision(self, item, revno):
        self._check_new_revno(item, revno)
        return NewRevision(item, revno)

    def _commit_item(self, item):
        revision = item._uncommitted_revision
        with self._lock:
            if item._item_id is None:
                if self.has_item(item.name):
                    raise ItemAlreadyExistsError("An item called %r already exists" % item.name)
                item._item_id = next(self._ids)
                self._itemmap[item.name] = item._item_id
                self._revisions[item._item_id] = {}
            revisions = self._revisions[item._item_id]
            if revision.revno in revisions:
                raise RevisionAlreadyExistsError("Item %r already has revision %d" % (item.name, revision.revno))
            if revision.timestamp is None:
                revision.timestamp = time.time()
            revisions[revision.revno] = (revision.timestamp, revision.get_metadata(), revision.get_data())

    def _rollback_item(self, item):
        # nothing was stored yet
        pass

    def _destroy_item(self, item):
        with self._lock:
            if item._item_id is None or self._itemmap.get(item.name) != item._item_id:
                raise NoSuchItemError("No such item: %r" % item.name)
            del self._itemmap[item.name]
            del self._revisions[item._item_id]
