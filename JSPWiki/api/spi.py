# -*- coding: utf-8 -*-
"""
    JSPWiki - service provider interfaces

    The api module does not construct wiki objects itself, it asks the
    configured service providers to do it. A provider is a subclass of one
    of the SPI classes below; the DSL classes are the thin front the api
    module hands out to callers.

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""


class AclsSPI(object):
    """ creates access control lists and their entries """
    def acl(self):
        """ @return: a new, empty access control list """
        raise NotImplementedError()

    def entry(self):
        """ @return: a new, empty access control list entry """
        raise NotImplementedError()


class ContentsSPI(object):
    """ creates pages and attachments """
    def page(self, engine, name):
        raise NotImplementedError()

    def attachment(self, engine, parent, file_name):
        raise NotImplementedError()


class ContextSPI(object):
    """ creates wiki contexts """
    def create(self, engine, page):
        raise NotImplementedError()


class EngineSPI(object):
    """ finds (or creates) the wiki engine of an application """
    def find(self, app, properties=None):
        raise NotImplementedError()


class SessionSPI(object):
    """ finds the wiki session of a request """
    def find(self, engine, request):
        raise NotImplementedError()

    def guest(self, engine):
        raise NotImplementedError()


class AclsDSL(object):
    def __init__(self, spi):
        self._spi = spi

    def acl(self):
        return self._spi.acl()

    def entry(self):
        return self._spi.entry()


class ContentsDSL(object):
    def __init__(self, spi):
        self._spi = spi

    def page(self, engine, name):
        return self._spi.page(engine, name)

    def attachment(self, engine, parent, file_name):
        return self._spi.attachment(engine, parent, file_name)


class ContextDSL(object):
    def __init__(self, spi):
        self._spi = spi

    def create(self, engine, page):
        return self._spi.create(engine, page)


class EngineDSL(object):
    def __init__(self, spi):
        self._spi = spi

    def find(self, app, properties=None):
        return self._spi.find(app, properties)


class SessionDSL(object):
    def __init__(self, spi):
        self._spi = spi

    def find(self, engine, request):
        return self._spi.find(engine, request)

    def guest(self, engine):
        return self._spi.guest(engine)
