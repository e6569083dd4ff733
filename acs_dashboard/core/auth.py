"""
Session helpers shared by all components
"""
import uuid
from collections import OrderedDict
from functools import wraps

from flask import jsonify, redirect, request, session, url_for

from acs_dashboard.config.settings import DashboardConfig


class SessionStore(OrderedDict):
    """Server-side values keyed by browser session id

    Holds at most `max_sessions` entries; the least recently used session is
    dropped first, so sessions that expire without a logout do not pile up.
    """

    def __init__(self, max_sessions):
        super().__init__()
        self.max_sessions = max_sessions

    def __setitem__(self, key, value):
        super().__setitem__(key, value)
        self.move_to_end(key)
        while len(self) > self.max_sessions:
            self.popitem(last=False)

    def touch(self, key):
        """Return the value for `key`, marking the session as recently used"""
        value = self.get(key)
        if value is not None:
            self.move_to_end(key)
        return value


# Per-browser-session scratch state (import wizards), kept server side
# because row results do not fit in a cookie
session_state = SessionStore(DashboardConfig.MAX_SESSIONS)


def is_api_request():
    return request.path.startswith('/api/')


def login_required(view):
    """Redirect anonymous users to the login page (401 for API calls)"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get('token'):
            if is_api_request():
                return jsonify({'error': 'Authentication required'}), 401
            return redirect(url_for('auth.login', next=request.path))
        return view(*args, **kwargs)
    return wrapper


def drop_session_state():
    """Forget the server-side state of the current browser session"""
    from .app_data import AppDataService

    AppDataService().forget()
    session_state.pop(session.get('sid'), None)


def start_session(token, profile=None):
    drop_session_state()
    session.clear()
    session.permanent = True
    session['token'] = token
    session['sid'] = uuid.uuid4().hex
    session['profile'] = profile or {}


def end_session():
    drop_session_state()
    session.clear()


def current_profile():
    return session.get('profile') or {}


def user_state():
    """Server-side scratch dict for the current browser session"""
    sid = session.get('sid')
    if sid is None:
        sid = session['sid'] = uuid.uuid4().hex
    state = session_state.touch(sid)
    if state is None:
        state = session_state[sid] = {}
    return state
