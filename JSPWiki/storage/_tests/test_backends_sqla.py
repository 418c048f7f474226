# -*- coding: utf-8 -*-
"""
    JSPWiki - Test - SQLAlchemyBackend

    This defines tests for the SQLAlchemyBackend.

    ---

    @copyright: 2009 MoinMoin:ChristopherDenter
    @license: GNU GPL, see COPYING for details.
"""

import pytest

from JSPWiki.error import ConfigurationError
from JSPWiki.storage._tests.test_backends import BackendTest
from JSPWiki.storage.backends import create_simple_backend, memory
from JSPWiki.storage.backends.sqla import SQLAlchemyBackend


class TestSQLAlchemyBackend(BackendTest):
    """
    Test the SQLAlchemyBackend (using an in-memory sqlite database)
    """
    def create_backend(self):
        return SQLAlchemyBackend()


class TestFileDatabase(object):
    def test_data_survives_new_backend(self, tmp_path):
        db_uri = 'sqlite:///%s' % (tmp_path / 'wiki.db')
        backend = SQLAlchemyBackend(db_uri)
        item = backend.create_item(u"Persistent")
        rev = item.create_revision(0)
        rev.write(b"still here")
        item.commit()

        backend = SQLAlchemyBackend(db_uri)
        assert backend.get_item(u"Persistent").get_revision(-1).read() == b"still here"


class TestCreateSimpleBackend(object):
    def test_memory(self):
        assert isinstance(create_simple_backend('memory:'), memory.MemoryBackend)

    def test_sqla(self):
        assert isinstance(create_simple_backend('sqla:sqlite://'), SQLAlchemyBackend)

    def test_unknown(self):
        pytest.raises(ConfigurationError, create_simple_backend, 'fs:/tmp/wiki')


coverage_modules = ['JSPWiki.storage.backends.sqla']
