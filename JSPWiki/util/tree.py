"""
JSPWiki - Tree name and element generator

@copyright: 2008 MoinMoin:BastianBlank
@license: GNU GPL, see COPYING for details.
"""

from emeraldtree import ElementTree as ET


class Name(ET.QName):
    """
    QName and factory for elements with this QName
    """
    def __call__(self, attrib=None, children=(), **extra):
        return ET.Element(self, attrib=attrib, children=children, **extra)


class Namespace(str):
    def __getattr__(self, key):
        if key.startswith('__'):
            raise AttributeError(key)
        if key.endswith('_'):
            key = key[:-1]
        return Name(key.replace('_', '-'), self)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, str.__repr__(self))

    @property
    def namespace(self):
        return self


# Own namespaces
wiki_page = Namespace('http://jspwiki.apache.org/namespaces/page')

# Well-known namespaces
html = Namespace('http://www.w3.org/1999/xhtml')
xlink = Namespace('http://www.w3.org/1999/xlink')
