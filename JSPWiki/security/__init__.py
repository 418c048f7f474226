# -*- coding: utf-8 -*-
"""
    JSPWiki - Wiki Security Interface and Access Control Lists

    Page permissions
    ================

    A PagePermission grants actions on pages. The actions imply each other:

        delete  -> modify
        modify  -> edit, upload
        rename  -> edit
        edit    -> comment
        comment -> view
        upload  -> view

    so e.g. someone who may "modify" a page may also edit, upload, comment
    and view it. "*" stands for all actions. The page part of a permission
    may be "*" (all pages) or end with "*" to match all pages with that prefix.

    Access control lists
    ====================

    Pages carry their ACL in their text, one line per grant:

        [{ALLOW edit Alice, Bob}]
        [{ALLOW view All}]

    A page without ACL lines has no ACL; access to it is decided by the
    security policy alone. If a page has an ACL, a principal must be listed
    for an action implying the requested one.

    @copyright: 2000-2004 Juergen Hermann <jh@web.de>,
                2003-2008 MoinMoin:ThomasWaldmann,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import re

from JSPWiki import log
logging = log.getLogger(__name__)

VIEW_ACTION = 'view'
COMMENT_ACTION = 'comment'
EDIT_ACTION = 'edit'
MODIFY_ACTION = 'modify'
UPLOAD_ACTION = 'upload'
RENAME_ACTION = 'rename'
DELETE_ACTION = 'delete'
WILDCARD = '*'

# order matters, it is used for printing
ACTIONS = (VIEW_ACTION, COMMENT_ACTION, EDIT_ACTION, MODIFY_ACTION,
           UPLOAD_ACTION, RENAME_ACTION, DELETE_ACTION, )

_IMPLIES = {
    DELETE_ACTION: (MODIFY_ACTION, ),
    MODIFY_ACTION: (EDIT_ACTION, UPLOAD_ACTION, ),
    RENAME_ACTION: (EDIT_ACTION, ),
    EDIT_ACTION: (COMMENT_ACTION, ),
    COMMENT_ACTION: (VIEW_ACTION, ),
    UPLOAD_ACTION: (VIEW_ACTION, ),
    VIEW_ACTION: (),
}


def implied_actions(action):
    """ the set of actions granted by action (including itself) """
    if action == WILDCARD:
        return set(ACTIONS)
    if action not in _IMPLIES:
        raise ValueError("Unknown page action: %r" % action)
    result = set()
    todo = [action]
    while todo:
        current = todo.pop()
        if current not in result:
            result.add(current)
            todo.extend(_IMPLIES[current])
    return result


def _split_actions(actions):
    if isinstance(actions, str):
        actions = actions.split(',')
    return [a.strip().lower() for a in actions if a.strip()]


class PagePermission(object):
    """
    Permission to perform actions on a page (or on pages matching a pattern).

    @param page: page name, "*" or a "Prefix*" pattern
    @param actions: comma separated string or sequence of actions
    """
    def __init__(self, page, actions):
        self.page = page
        self.actions = tuple(a for a in ACTIONS + (WILDCARD, ) if a in set(_split_actions(actions)))
        unknown = set(_split_actions(actions)) - set(ACTIONS) - set([WILDCARD])
        if unknown:
            raise ValueError("Unknown page action(s): %s" % ', '.join(sorted(unknown)))
        granted = set()
        for action in self.actions:
            granted |= implied_actions(action)
        self.granted = frozenset(granted)

    def matches_page(self, page):
        if self.page == WILDCARD:
            return True
        if self.page.endswith(WILDCARD):
            return page.startswith(self.page[:-1])
        return self.page == page

    def implies(self, other):
        """
        Does this permission include other? True if the page matches and all
        actions of other are granted (directly or implied) by this one.
        """
        if not isinstance(other, PagePermission):
            return False
        if not self.matches_page(other.page):
            return False
        return other.granted <= self.granted

    def __eq__(self, other):
        if not isinstance(other, PagePermission):
            return NotImplemented
        return self.page == other.page and self.granted == other.granted

    def __hash__(self):
        return hash((self.page, self.granted))

    def __repr__(self):
        return '<%s %r %s>' % (self.__class__.__name__, self.page, ','.join(self.actions))


class AclEntry(object):
    """ the permissions one principal holds on a page """
    def __init__(self, principal=None):
        self.principal = principal
        self.permissions = []

    def add_permission(self, permission):
        if permission not in self.permissions:
            self.permissions.append(permission)

    def find_permission(self, permission):
        """ a held permission that implies permission, or None """
        for held in self.permissions:
            if held.implies(permission):
                return held
        return None

    def __repr__(self):
        return '<%s %s: %r>' % (self.__class__.__name__, self.principal, self.permissions)


class AccessControlList(object):
    """ principal -> AclEntry, in the order the principals were first mentioned """
    def __init__(self):
        self.entries = []

    def add_entry(self, entry):
        existing = self.get_entry(entry.principal)
        if existing is None:
            self.entries.append(entry)
            return entry
        for permission in entry.permissions:
            existing.add_permission(permission)
        return existing

    def get_entry(self, principal):
        for entry in self.entries:
            if entry.principal == principal:
                return entry
        return None

    def find_principals(self, permission):
        """ all principals holding a permission that implies permission """
        return [entry.principal for entry in self.entries
                if entry.find_permission(permission) is not None]

    def is_empty(self):
        return not self.entries

    def __iter__(self):
        return iter(self.entries)

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.entries)


# [{ALLOW actions principal, principal}] - one per line
acl_re = re.compile(r"""
    \[\{ \s* ALLOW \s+
    (?P<actions> [\w*,]+ ) \s+
    (?P<principals> [^}\]]+? ) \s*
    \}\]
""", re.X | re.UNICODE)

acl_line_re = re.compile(r'^[ \t]*' + acl_re.pattern + r'[ \t]*(\r?\n|$)', re.X | re.UNICODE | re.M)


def parse_acl(page_name, text):
    """
    Build the access control list of a page from its text.

    @param page_name: name of the page (used in the permissions)
    @param text: page text
    @rtype: AccessControlList or None
    @return: the ACL, None if the text contains no (valid) ACL lines
    """
    acl = AccessControlList()
    for m in acl_re.finditer(text or u''):
        try:
            permission = PagePermission(page_name, m.group('actions'))
        except ValueError as err:
            logging.warning("ignoring invalid ACL %r on page %s: %s", m.group(0), page_name, err)
            continue
        for principal in m.group('principals').split(','):
            principal = principal.strip()
            if principal:
                entry = AclEntry(principal)
                entry.add_permission(permission)
                acl.add_entry(entry)
    if acl.is_empty():
        return None
    return acl


def strip_acl_lines(text):
    """ remove the ACL lines from page text """
    return acl_line_re.sub(u'', text or u'')
