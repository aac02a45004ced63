"""
Server-side sessions

Session data never leaves the process: the browser only holds an opaque
token, signed with the app secret. Records expire a fixed
``PERMANENT_SESSION_LIFETIME`` after they are created; later writes do not
push the expiry back. The store is in memory, so a restart logs everyone
out.
"""

import logging
import secrets
from datetime import datetime, timezone

from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

logger = logging.getLogger(__name__)

# Flask-Login session-protection markers; on their own they do not keep a session alive
_BOOKKEEPING_KEYS = frozenset({'_fresh', '_id'})


def _utcnow():
    return datetime.now(timezone.utc)


class _SessionRecord:
    __slots__ = ('data', 'expires_at')

    def __init__(self, data, expires_at):
        self.data = data
        self.expires_at = expires_at


class MemorySessionStore:
    """In-process session store keyed by opaque token."""

    def __init__(self, lifetime, clock=_utcnow):
        self.lifetime = lifetime
        self._clock = clock
        self._records = {}

    def create(self, data):
        """Bind ``data`` to a new token and return the token."""
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        self._records[token] = _SessionRecord(dict(data), self._clock() + self.lifetime)
        return token

    def read(self, token):
        """Return the data bound to ``token``, or None if unknown or expired."""
        record = self._records.get(token)
        if record is None:
            return None
        if record.expires_at <= self._clock():
            self._records.pop(token, None)
            return None
        return dict(record.data)

    def purge_expired(self):
        """Drop every record past its expiry."""
        now = self._clock()
        for token in [t for t, r in self._records.items() if r.expires_at <= now]:
            del self._records[token]

    def write(self, token, data):
        record = self._records.get(token)
        if record is not None:
            record.data = dict(data)

    def destroy(self, token):
        self._records.pop(token, None)

    def expires_at(self, token):
        record = self._records.get(token)
        return record.expires_at if record is not None else None

    def __len__(self):
        return len(self._records)


class ServerSideSession(CallbackDict, SessionMixin):
    """Session dict bound to a store token."""

    def __init__(self, initial=None, sid=None):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.previous_sid = None
        self.modified = False

    def regenerate(self):
        """Move the session data to a fresh token on the next save."""
        if self.sid is not None:
            self.previous_sid = self.sid
        self.sid = None
        self.modified = True


class ServerSideSessionInterface(SessionInterface):
    """Flask session interface backed by a :class:`MemorySessionStore`."""

    salt = 'typely-session'

    def __init__(self, store):
        self.store = store

    def get_signer(self, app):
        if not app.secret_key:
            return None
        return Signer(app.secret_key, salt=self.salt)

    def open_session(self, app, request):
        signer = self.get_signer(app)
        if signer is None:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        if not cookie:
            return ServerSideSession()

        try:
            sid = signer.unsign(cookie).decode('utf-8')
        except BadSignature:
            logger.debug('Rejected session cookie with a bad signature')
            return ServerSideSession()

        data = self.store.read(sid)
        if data is None:
            return ServerSideSession()
        return ServerSideSession(data, sid=sid)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.accessed:
            response.vary.add('Cookie')

        if session.previous_sid is not None:
            self.store.destroy(session.previous_sid)

        if not any(key not in _BOOKKEEPING_KEYS for key in session):
            if session.sid is not None or session.previous_sid is not None:
                self.store.destroy(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if session.sid is None:
            session.sid = self.store.create(dict(session))
        elif session.modified:
            self.store.write(session.sid, dict(session))
        else:
            return

        cookie = self.get_signer(app).sign(session.sid).decode('utf-8')
        response.set_cookie(
            name,
            cookie,
            expires=self.store.expires_at(session.sid),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
