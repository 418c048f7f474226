# -*- coding: utf-8 -*-
"""
    JSPWiki - Backends - SQLAlchemy Backend

    Stores the wiki contents in any database SQLAlchemy supports (SQLite,
    PostgreSQL, MySQL, ...). An item is a row of the items table, each of
    its revisions a row of the revisions table holding metadata and data.

    @copyright: 2009 MoinMoin:ChristopherDenter,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import time

from sqlalchemy import create_engine, Column, Unicode, Integer, Float, LargeBinary, PickleType, ForeignKey
from sqlalchemy.exc import IntegrityError, DataError
from sqlalchemy.orm import sessionmaker, relationship, declarative_base
from sqlalchemy.schema import UniqueConstraint
# Only used/needed for development/testing:
from sqlalchemy.pool import StaticPool

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki.storage import Backend, Item, NewRevision, StoredRevision, LATEST_REVISION
from JSPWiki.storage.error import ItemAlreadyExistsError, NoSuchItemError, NoSuchRevisionError, \
                                  RevisionAlreadyExistsError, StorageError


Base = declarative_base()

NAME_LEN = 512


class ItemRow(Base):
    __tablename__ = 'items'

    id = Column(Integer, primary_key=True)
    name = Column(Unicode(NAME_LEN), unique=True, index=True, nullable=False)
    revisions = relationship('RevisionRow', back_populates='item',
                             cascade='all, delete-orphan', order_by='RevisionRow.revno')


class RevisionRow(Base):
    __tablename__ = 'revisions'
    __table_args__ = (UniqueConstraint('item_id', 'revno'), {})

    id = Column(Integer, primary_key=True)
    item_id = Column(Integer, ForeignKey('items.id'), index=True, nullable=False)
    item = relationship(ItemRow, back_populates='revisions')
    revno = Column(Integer, index=True, nullable=False)
    timestamp = Column(Float, index=True)
    rev_metadata = Column(PickleType)
    data = Column(LargeBinary)


class SQLAlchemyBackend(Backend):
    """
    @param db_uri: SQLAlchemy database URL, None for an in-memory SQLite database
    @param verbose: log the SQL statements
    """
    def __init__(self, db_uri=None, verbose=False):
        if db_uri is None or db_uri in ('sqlite://', 'sqlite:///:memory:', ):
            # an in-memory database exists once per connection, all threads must share it
            db_uri = 'sqlite:///:memory:'
            self.engine = create_engine(db_uri, poolclass=StaticPool, connect_args={'check_same_thread': False})
        else:
            self.engine = create_engine(db_uri, echo=verbose, echo_pool=verbose)

        # one session factory per backend, backends may use different databases
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)
        logging.debug("SQLAlchemyBackend using %s", self.engine.url)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.engine.url)

    def has_item(self, itemname):
        with self.Session() as session:
            return session.query(ItemRow.id).filter_by(name=itemname).first() is not None

    def get_item(self, itemname):
        with self.Session() as session:
            item_id = session.query(ItemRow.id).filter_by(name=itemname).scalar()
        if item_id is None:
            raise NoSuchItemError("No such item: %r" % itemname)
        return Item(self, itemname, item_id)

    def create_item(self, itemname):
        if not isinstance(itemname, str):
            raise TypeError("Item names must be str, not %s" % type(itemname))
        if self.has_item(itemname):
            raise ItemAlreadyExistsError("An item called %r already exists" % itemname)
        return Item(self, itemname)

    def iteritems(self):
        """
        Load all item names at once, then yield the items one by one.
        """
        with self.Session() as session:
            rows = session.query(ItemRow.id, ItemRow.name).order_by(ItemRow.id).all()
        for item_id, name in rows:
            yield Item(self, name, item_id)

    def _list_revisions(self, item):
        if item._item_id is None:
            return []
        with self.Session() as session:
            rows = session.query(RevisionRow.revno).filter_by(item_id=item._item_id).order_by(RevisionRow.revno).all()
        return [revno for (revno, ) in rows]

    def _get_revision(self, item, revno):
        with self.Session() as session:
            query = session.query(RevisionRow).filter_by(item_id=item._item_id)
            if revno == LATEST_REVISION:
                row = query.order_by(RevisionRow.revno.desc()).first()
            else:
                row = query.filter_by(revno=revno).first()
        if row is None:
            raise NoSuchRevisionError("Item %r has no revision %d" % (item.name, revno))
        return StoredRevision(item, row.revno, row.timestamp, row.rev_metadata, row.data or b'')

    def _create_revision(self, item, revno):
        self._check_new_revno(item, revno)
        return NewRevision(item, revno)

    def _commit_item(self, item):
        revision = item._uncommitted_revision
        if revision.timestamp is None:
            revision.timestamp = time.time()

        with self.Session() as session:
            item_id = item._item_id
            if item_id is None:
                row = ItemRow(name=item.name)
                session.add(row)
                try:
                    session.flush()
                except IntegrityError:
                    session.rollback()
                    raise ItemAlreadyExistsError("An item called %r already exists" % item.name)
                except DataError:
                    session.rollback()
                    raise StorageError("Item names must be shorter than %d characters" % NAME_LEN)
                item_id = row.id

            session.add(RevisionRow(item_id=item_id, revno=revision.revno,
                                    timestamp=revision.timestamp,
                                    rev_metadata=revision.get_metadata(),
                                    data=revision.get_data()))
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise RevisionAlreadyExistsError("Item %r already has revision %d" % (item.name, revision.revno))
        item._item_id = item_id

    def _rollback_item(self, item):
        # nothing is sent to the database before commit
        pass

    def _destroy_item(self, item):
        if item._item_id is None:
            raise NoSuchItemError("No such item: %r" % item.name)
        with self.Session() as session:
            row = session.get(ItemRow, item._item_id)
            if row is None:
                raise NoSuchItemError("No such item: %r" % item.name)
            session.delete(row)
            session.commit()
