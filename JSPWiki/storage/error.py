# -*- coding: utf-8 -*-
"""
    JSPWiki - storage errors

    @copyright: 2007 MoinMoin:HeinrichWendel,
                2008 MoinMoin:ChristopherDenter,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki.error import CompositeError


class StorageError(CompositeError):
    """ something went wrong in the storage layer """

class BackendError(StorageError):
    """ the backend could not do what it was asked to """

class NoSuchItemError(BackendError):
    pass

class ItemAlreadyExistsError(BackendError):
    pass

class NoSuchRevisionError(BackendError):
    pass

class RevisionAlreadyExistsError(BackendError):
    pass

class RevisionNumberMismatchError(BackendError):
    """
    Revision numbers start at 0 and have no gaps, the next revision of an
    item must be numbered latest + 1.
    """
