# -*- coding: utf-8 -*-
"""
    JSPWiki - logging facade

    Logging is done with the stdlib logging module, this module just wraps
    it a little: it loads a logging configuration once and hands out
    WikiLogger objects that delegate to the stdlib loggers.

    Usage (for wiki code)::

        from JSPWiki import log
        logging = log.getLogger(__name__)
        logging.info("page %s saved by %s", name, author)

    Arguments are only formatted if the level is enabled, so there is no
    need for guarding calls with is_debug_enabled() except when building the
    arguments themselves is expensive.

    If you want to use a custom logging configuration, put the name of a
    logging.config.fileConfig-style file into the JSPWIKI_LOGGING_CONF
    environment variable or call load_config(conf_fname) before using the
    wiki.

    @copyright: 2008 MoinMoin:ThomasWaldmann,
                2007 MoinMoin:JohannesBerg,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import os
import warnings
import logging
import logging.config
from io import StringIO

TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

# This is the "last resort" fallback logging configuration for the case
# that load_config() is either not called at all or with a non-working
# logging configuration.
logging_config = """\
[loggers]
keys=root

[handlers]
keys=stderr

[formatters]
keys=default

[logger_root]
level=%(loglevel)s
handlers=stderr

[handler_stderr]
class=StreamHandler
level=NOTSET
formatter=default
args=(sys.stderr, )

[formatter_default]
format=%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s
datefmt=
class=logging.Formatter
"""

logging_defaults = {
    'loglevel': 'INFO',
}

configured = False
fallback_config = False


def _log_warning(message, category, filename, lineno, file=None, line=None):
    # for warnings, we just want to use the logging system, not stderr or other files
    msg = "%s:%s: %s: %s" % (filename, lineno, category.__name__, message)
    logger = getLogger(__name__)
    logger.warning(msg) # Note: the warning will look like coming from here,
                        # but msg contains info about where it really comes from


def load_config(conf_fname=None):
    """ load logging config from conffile """
    global configured, fallback_config
    err_msg = None
    conf_fname = os.environ.get('JSPWIKI_LOGGING_CONF', conf_fname)
    if conf_fname:
        try:
            conf_fname = os.path.abspath(conf_fname)
            logging.config.fileConfig(conf_fname, disable_existing_loggers=False)
            configured = True
            fallback_config = False
            l = getLogger(__name__)
            l.info('using logging configuration read from "%s"', conf_fname)
            warnings.showwarning = _log_warning
        except Exception as err:
            err_msg = str(err)
    if not configured:
        # load builtin fallback logging config
        config_file = StringIO(logging_config)
        logging.config.fileConfig(config_file, logging_defaults, disable_existing_loggers=False)
        configured = True
        fallback_config = True
        l = getLogger(__name__)
        if err_msg:
            l.warning('load_config for "%s" failed with "%s".', conf_fname, err_msg)
        l.info('using logging configuration read from built-in fallback in JSPWiki.log module!')
        warnings.showwarning = _log_warning


def _logger_name(name):
    """ accept a dotted name, a class or a module and return a logger name """
    if isinstance(name, str):
        return name
    module = getattr(name, '__module__', None)
    qualname = getattr(name, '__qualname__', None) or getattr(name, '__name__', None)
    if module and qualname and module != qualname:
        return '%s.%s' % (module, qualname)
    return qualname or repr(name)


class WikiLogger(object):
    """
    Thin wrapper around a stdlib logger.

    All calls are passed through to the wrapped logger; the level checks
    are delegated to it as well, so whatever the logging configuration says
    is what happens.

    An exception given as the last argument that the message has no
    placeholder for is logged with its traceback, like exc_info::

        logging.error("could not save %s", name, err)
    """
    def __init__(self, logger):
        self._logger = logger

    @property
    def name(self):
        return self._logger.name

    @property
    def logger(self):
        """ the wrapped stdlib logger """
        return self._logger

    def is_trace_enabled(self):
        return self._logger.isEnabledFor(TRACE)

    def is_debug_enabled(self):
        return self._logger.isEnabledFor(logging.DEBUG)

    def is_info_enabled(self):
        return self._logger.isEnabledFor(logging.INFO)

    def is_warn_enabled(self):
        return self._logger.isEnabledFor(logging.WARNING)

    def is_error_enabled(self):
        return self._logger.isEnabledFor(logging.ERROR)

    def _log(self, level, msg, args, kw):
        if not self._logger.isEnabledFor(level):
            return
        if args and isinstance(args[-1], BaseException) and 'exc_info' not in kw:
            try:
                msg % args
            except TypeError:
                exc = args[-1]
                args = args[:-1]
                kw['exc_info'] = (type(exc), exc, exc.__traceback__)
        # report the caller of the public method, not this module
        kw.setdefault('stacklevel', 3)
        self._logger.log(level, msg, *args, **kw)

    def trace(self, msg, *args, **kw):
        self._log(TRACE, msg, args, kw)

    def debug(self, msg, *args, **kw):
        self._log(logging.DEBUG, msg, args, kw)

    def info(self, msg, *args, **kw):
        self._log(logging.INFO, msg, args, kw)

    def warning(self, msg, *args, **kw):
        self._log(logging.WARNING, msg, args, kw)

    warn = warning

    def error(self, msg, *args, **kw):
        self._log(logging.ERROR, msg, args, kw)

    def exception(self, msg, *args, **kw):
        kw.setdefault('exc_info', True)
        self._log(logging.ERROR, msg, args, kw)

    def critical(self, msg, *args, **kw):
        self._log(logging.CRITICAL, msg, args, kw)

    def log(self, level, msg, *args, **kw):
        self._log(level, msg, args, kw)

    def setLevel(self, level):
        self._logger.setLevel(level)

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.name)


def getLogger(name):
    """ wrapper around logging.getLogger, so we can do some more stuff:
        - make sure some logging configuration is loaded
        - accept classes, not only dotted names
        - hand out a WikiLogger
    """
    if not configured:
        load_config()
    return WikiLogger(logging.getLogger(_logger_name(name)))
