# -*- coding: utf-8 -*-
"""
    JSPWiki - storage backends

    @copyright: 2009 MoinMoin:ChristopherDenter,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki.error import ConfigurationError
from JSPWiki.storage.backends import memory


SQLA_PREFIX = "sqla:"
MEMORY_PREFIX = "memory:"


def create_simple_backend(backend_uri=MEMORY_PREFIX):
    """
    Create the backend a storage URI names.

    @param backend_uri: 'memory:' (volatile) or 'sqla:<SQLAlchemy database URL>'
    @raise ConfigurationError: unknown kind of backend
    """
    if backend_uri.startswith(SQLA_PREFIX):
        # sqlalchemy is only needed for this backend
        from JSPWiki.storage.backends import sqla
        db_uri = backend_uri[len(SQLA_PREFIX):] or None
        backend = sqla.SQLAlchemyBackend(db_uri)

    elif backend_uri == MEMORY_PREFIX:
        backend = memory.MemoryBackend()

    else:
        raise ConfigurationError("No proper backend uri provided. Given: %r" % backend_uri)

    logging.info("using storage backend %r for %s", backend, backend_uri)
    return backend
