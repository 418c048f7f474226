# -*- coding: utf-8 -*-
"""
    JSPWiki - errors

    Error classes used all over the wiki code. Storage-specific errors live
    in JSPWiki.storage.error.

    @copyright: 2004-2005 Nir Soffer <nirs@freeshell.org>,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import sys


class Error(Exception):
    """ Base class for wiki errors

    Use this class when you raise errors or create sub classes that
    may be used to display an error message to the user.
    """
    def __init__(self, message=u''):
        Exception.__init__(self, message)
        self.message = message

    def __str__(self):
        return str(self.message)

    def __repr__(self):
        return '<%s: %r>' % (self.__class__.__name__, self.message)


class CompositeError(Error):
    """ Base class for exceptions containing an exception

    Do not use this class but its more specific sub classes.

    Useful for hiding low level error inside high level user error,
    while keeping the inner error information for debugging.
    """
    def __init__(self, message=u''):
        Error.__init__(self, message)
        self.innerException = sys.exc_info()

    def exceptions(self):
        """ Return a list of all inner exceptions """
        all = [self.innerException]
        while True:
            lastException = all[-1][1]
            try:
                all.append(lastException.innerException)
            except AttributeError:
                break
        return all


class FatalError(CompositeError):
    """ Base class for fatal errors we can't handle

    Do not use this class but its more specific sub classes.
    """


class ConfigurationError(FatalError):
    """ Raise when fatal misconfiguration is found """


class InternalError(FatalError):
    """ Raise when internal fatal error is found """


class WikiError(CompositeError):
    """ Raised when a wiki operation cannot be completed """


class ProviderError(WikiError):
    """ Raised when a content or service provider fails """


class ProviderNotFoundError(ProviderError):
    """ Raised when no service provider of the requested kind can be found """


class NoRequiredPropertyError(ConfigurationError):
    """ Raised when a required configuration property is missing """
    def __init__(self, key, message=None):
        if message is None:
            message = u"Required property '%s' is missing" % key
        ConfigurationError.__init__(self, message)
        self.key = key
