"""
Shared fixtures: an app wired to an in-memory fake backend
"""
import pytest

from acs_dashboard.config.settings import TestingConfig
from acs_dashboard.core import BackendError, request_metrics, system_logs
from acs_dashboard.core import app_data as app_data_module
from acs_dashboard.core.auth import session_state
from acs_dashboard.dashboard_app import create_app


class FakeResponse:
    """Stand-in for a streamed requests.Response"""

    def __init__(self, content=b'', headers=None):
        self.content = content
        self.headers = headers or {}

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]


class FakeBackend:
    """Records calls and answers them from canned responses keyed by (method, path)

    A canned value that is an exception is raised, a callable is called with
    the request kwargs.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    def on(self, method, path, value):
        self.responses[(method, path)] = value
        return self

    def fail(self, method, path, message='Backend failure', status_code=500):
        return self.on(method, path, BackendError(message, status_code=status_code))

    def called(self, method, path):
        return [kwargs for m, p, kwargs in self.calls if (m, p) == (method, path)]

    def _answer(self, method, path, **kwargs):
        self.calls.append((method, path, kwargs))
        value = self.responses.get((method, path))
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value(**kwargs)
        return value

    def get(self, path, params=None):
        return self._answer('GET', path, params=params)

    def post(self, path, json=None, data=None, files=None, params=None):
        return self._answer('POST', path, json=json, data=data, files=files, params=params)

    def put(self, path, json=None):
        return self._answer('PUT', path, json=json)

    def patch(self, path, json=None):
        return self._answer('PATCH', path, json=json)

    def delete(self, path):
        return self._answer('DELETE', path)

    def get_raw(self, path, params=None):
        return self._answer('GET', path, params=params)

    def post_raw(self, path, json=None):
        return self._answer('POST', path, json=json)


@pytest.fixture(autouse=True)
def clean_state():
    system_logs.clear()
    request_metrics.clear()
    session_state.clear()
    app_data_module._last_good.clear()
    yield


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend):
    app = create_app(TestingConfig)
    app.extensions['backend'] = backend
    return app


@pytest.fixture
def anonymous(app):
    return app.test_client()


@pytest.fixture
def client(app):
    test_client = app.test_client()
    with test_client.session_transaction() as sess:
        sess['token'] = 'test-token'
        sess['sid'] = 'test-sid'
        sess['profile'] = {'username': 'asha', 'firstName': 'Asha', 'lastName': 'Rao'}
    return test_client


def flashes(test_client):
    """Flashed (category, message) pairs waiting in the session"""
    with test_client.session_transaction() as sess:
        return list(sess.get('_flashes', []))
