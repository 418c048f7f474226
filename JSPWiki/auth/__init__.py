# -*- coding: utf-8 -*-
"""
    JSPWiki - authentication and authorization

    Sessions
    ========

    Every request has a WikiSession. Its principals are the names the
    security policy and page ACLs grant permissions to:

    * All - everybody
    * Anonymous - nobody logged in and no name asserted
    * Asserted - the user claims a name (cookie), but did not log in
    * Authenticated - the user logged in with a password
    * the user name (asserted and authenticated users)
    * the names of the groups the user is a member of (authenticated users only)

    An asserted name may not be a built-in role, a group or a configured user.

    Authorization
    =============

    AuthorizationManager.check_permission() grants a permission only if the
    security policy grants it to one of the session's roles (the built-in
    roles and groups, never the user name) and, if the page carries an ACL,
    the ACL grants it to one of the session's principals as well.

    Authentication
    ==============

    Users log in with the login form against the "users" setting of the wiki
    configuration (werkzeug password hashes). XML-RPC clients may use HTTP
    Basic authentication.

    @copyright: 2005-2006 Bastian Blank, Florian Festi,
                2005-2010 MoinMoin:ThomasWaldmann,
                2010 MoinMoin:Nichita Utiu,
                2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from flask import session as flask_session
from werkzeug.security import check_password_hash

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki.security import PagePermission, WILDCARD

ALL = u'All'
ANONYMOUS = u'Anonymous'
ASSERTED = u'Asserted'
AUTHENTICATED = u'Authenticated'

BUILTIN_ROLES = (ALL, ANONYMOUS, ASSERTED, AUTHENTICATED, )

# flask session key of the logged in user
SESSION_USER_KEY = 'user_name'

# cookie holding the name an anonymous user claims to have
ASSERTED_NAME_COOKIE = 'JSPWikiAssertedName'


class WikiSession(object):
    """
    Who is making a request.

    @param engine: the WikiEngine
    @param user_name: login or asserted name, None for anonymous users
    @param authenticated: True if user_name was checked with a password
    @param remote_addr: address of the client
    """
    def __init__(self, engine, user_name=None, authenticated=False, remote_addr=None):
        self.engine = engine
        self.user_name = user_name or None
        self.authenticated = bool(authenticated and self.user_name)
        self.remote_addr = remote_addr

    @classmethod
    def find(cls, engine, request):
        """ The session of a request: logged in user, asserted name or anonymous """
        remote_addr = getattr(request, 'remote_addr', None)
        user_name = flask_session.get(SESSION_USER_KEY)
        if user_name and user_name in engine.cfg.users:
            return cls(engine, user_name, authenticated=True, remote_addr=remote_addr)
        asserted_name = request.cookies.get(ASSERTED_NAME_COOKIE) if request is not None else None
        if asserted_name and engine.authentication_manager.is_valid_asserted_name(asserted_name):
            return cls(engine, asserted_name.strip(), authenticated=False, remote_addr=remote_addr)
        return cls(engine, remote_addr=remote_addr)

    @classmethod
    def guest(cls, engine):
        """ a new anonymous session not bound to any request """
        return cls(engine)

    def is_anonymous(self):
        return self.user_name is None

    def is_asserted(self):
        return self.user_name is not None and not self.authenticated

    def is_authenticated(self):
        return self.authenticated

    def get_user_name(self):
        """ the name to record as author: user name or client address """
        if self.user_name is not None:
            return self.user_name
        if self.engine.cfg.show_hosts:
            return self.remote_addr
        return None

    def get_groups(self):
        """ names of the configured groups the user is a member of """
        if not self.authenticated:
            return []
        return sorted(name for name, members in self.engine.cfg.groups.items()
                      if self.user_name in members)

    def get_principals(self):
        principals = [ALL]
        if self.is_anonymous():
            principals.append(ANONYMOUS)
            return principals
        principals.append(AUTHENTICATED if self.authenticated else ASSERTED)
        principals.append(self.user_name)
        principals.extend(self.get_groups())
        return principals

    def get_roles(self):
        """ the principals the security policy applies to """
        roles = [ALL]
        if self.is_anonymous():
            roles.append(ANONYMOUS)
            return roles
        roles.append(AUTHENTICATED if self.authenticated else ASSERTED)
        roles.extend(self.get_groups())
        return roles

    def __repr__(self):
        return '<%s %s %r>' % (self.__class__.__name__,
                               self.authenticated and 'authenticated' or 'unauthenticated', self.user_name)


class AuthorizationManager(object):
    """
    Decides whether a session may do something.

    @param engine: the WikiEngine that owns this manager
    """
    def __init__(self, engine):
        self.engine = engine
        self.policy = {}
        for role, actions in engine.cfg.security_policy.items():
            self.policy[role] = PagePermission(WILDCARD, actions)

    def policy_grants(self, roles, permission):
        for role in roles:
            granted = self.policy.get(role)
            if granted is not None and granted.implies(permission):
                return True
        return False

    def check_permission(self, session, permission):
        """
        @param session: WikiSession
        @param permission: PagePermission to check
        @rtype: bool
        """
        if not self.policy_grants(session.get_roles(), permission):
            logging.debug("%r: security policy denies %r", session, permission)
            return False
        if not isinstance(permission, PagePermission) or permission.page == WILDCARD:
            return True
        acl = self.engine.page_manager.get_acl(permission.page)
        if acl is None:
            return True
        principals = session.get_principals()
        for principal in acl.find_principals(permission):
            if principal in principals:
                return True
        logging.debug("%r: ACL of page %s denies %r", session, permission.page, permission)
        return False

    def check_page_permission(self, session, page_name, action):
        """ shortcut: may session do action on page page_name? """
        return self.check_permission(session, PagePermission(page_name, action))


class AuthenticationManager(object):
    """
    Checks user names and passwords against the configured users.

    @param engine: the WikiEngine that owns this manager
    """
    def __init__(self, engine):
        self.engine = engine

    def authenticate(self, user_name, password):
        """
        @rtype: bool
        @return: True if password is the password of user_name
        """
        if not user_name or password is None:
            return False
        password_hash = self.engine.cfg.users.get(user_name)
        if not password_hash:
            return False
        return check_password_hash(password_hash, password)

    def is_valid_asserted_name(self, name):
        """
        May an anonymous user claim to be name? Role, group and user names
        are reserved.

        @rtype: bool
        """
        name = (name or u'').strip()
        if not name:
            return False
        cfg = self.engine.cfg
        reserved = set(BUILTIN_ROLES) | set(cfg.groups) | set(cfg.users) | set(cfg.security_policy)
        return name.lower() not in set(n.lower() for n in reserved)

    def login(self, user_name, password):
        """
        Log in the user of the current request.

        @rtype: bool
        @return: True if the login succeeded
        """
        if not self.authenticate(user_name, password):
            logging.info("login of %r failed", user_name)
            return False
        flask_session[SESSION_USER_KEY] = user_name
        logging.info("user %s logged in", user_name)
        return True

    def logout(self):
        user_name = flask_session.pop(SESSION_USER_KEY, None)
        if user_name:
            logging.info("user %s logged out", user_name)

    def basic_auth_session(self, request):
        """
        The session of a request using HTTP Basic authentication.

        @return: an authenticated WikiSession, a guest session if the request
                 has no credentials or None if the credentials are wrong
        """
        auth = request.authorization
        if auth is None or auth.type != 'basic':
            return WikiSession(self.engine, remote_addr=request.remote_addr)
        if self.authenticate(auth.username, auth.password):
            return WikiSession(self.engine, auth.username, authenticated=True, remote_addr=request.remote_addr)
        logging.info("HTTP basic authentication of %r failed", auth.username)
        return None
