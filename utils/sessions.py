# utils/sessions.py
"""
Server-side Flask sessions.

The cookie only carries a random session id; the data lives in the
storage's ``SessionStore`` and expires after ``PERMANENT_SESSION_LIFETIME``.
"""
import secrets

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from models.schemas import utcnow


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False


class StorageSessionInterface(SessionInterface):
    def __init__(self, store):
        self.store = store

    @staticmethod
    def _new_sid():
        return secrets.token_urlsafe(32)

    def open_session(self, app, request):
        sid = request.cookies.get(self.get_cookie_name(app))
        if sid:
            data = self.store.get(sid)
            if data is not None:
                return ServerSideSession(data, sid=sid)
        return ServerSideSession(sid=self._new_sid(), new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self.store.destroy(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not self.should_set_cookie(app, session):
            return

        self.store.set(session.sid, dict(session), utcnow() + app.permanent_session_lifetime)
        response.set_cookie(
            name,
            session.sid,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )

    def regenerate(self, session):
        """Move the session to a fresh id, e.g. after login."""
        if not session.new:
            self.store.destroy(session.sid)
        session.sid = self._new_sid()
        session.modified = True
