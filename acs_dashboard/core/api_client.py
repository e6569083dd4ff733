"""
Backend REST client

Every data operation of the dashboard goes through this client. It attaches
the bearer token of the signed-in user and turns HTTP failures into
BackendError so routes can surface them as toasts.
"""
import logging

import requests
from flask import Response, current_app, session, stream_with_context

logger = logging.getLogger(__name__)

UNAUTHENTICATED_PATHS = ('/auth/login', '/auth/register', '/auth/forgot-password')


class BackendError(Exception):
    """A failed call to the backend API"""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_auth_error(self):
        return self.status_code in (401, 403)

    def __str__(self):
        return self.message


def _error_message(response):
    """Pick the most useful error text out of a failed response"""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ('error', 'message'):
            if body.get(key):
                return str(body[key]), body
    text = (response.text or '').strip()
    if text and len(text) < 300:
        return text, body
    return f'HTTP {response.status_code}', body


class BackendClient:
    """Thin wrapper around requests.Session bound to the backend base URL"""

    def __init__(self, base_url, timeout=10, token_getter=None, on_unauthorized=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.token_getter = token_getter
        self.on_unauthorized = on_unauthorized
        self.http = requests.Session()

    def url_for(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, path):
        # Sign-in endpoints never carry a (possibly stale) token
        if path.startswith(UNAUTHENTICATED_PATHS):
            return {}
        token = self.token_getter() if self.token_getter else None
        if token:
            return {'Authorization': f'Bearer {token}'}
        return {}

    def request(self, method, path, stream=False, **kwargs):
        """Send a request and return the raw response, raising on failure"""
        from acs_dashboard.core import request_metrics

        group = path.strip('/').split('/')[0] or 'root'
        metrics = request_metrics[group]
        metrics['requests'] += 1

        headers = kwargs.pop('headers', {}) or {}
        headers.update(self._headers(path))
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.http.request(method, self.url_for(path), headers=headers,
                                         stream=stream, **kwargs)
        except requests.exceptions.RequestException as e:
            metrics['errors'] += 1
            metrics['last_error'] = str(e)
            logger.error(f"Backend {method} {path} failed: {e}")
            raise BackendError(f'Backend unavailable: {e}') from e

        if not response.ok:
            message, body = _error_message(response)
            metrics['errors'] += 1
            metrics['last_error'] = message
            logger.warning(f"Backend {method} {path} -> HTTP {response.status_code}: {message}")
            if response.status_code == 401 and self.on_unauthorized \
                    and not path.startswith(UNAUTHENTICATED_PATHS):
                self.on_unauthorized()
            raise BackendError(message, status_code=response.status_code, payload=body)

        logger.debug(f"Backend {method} {path} -> HTTP {response.status_code}")
        return response

    def _json(self, method, path, **kwargs):
        response = self.request(method, path, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path, params=None):
        return self._json('GET', path, params=params)

    def post(self, path, json=None, data=None, files=None, params=None):
        return self._json('POST', path, json=json, data=data, files=files, params=params)

    def put(self, path, json=None):
        return self._json('PUT', path, json=json)

    def patch(self, path, json=None):
        return self._json('PATCH', path, json=json)

    def delete(self, path):
        return self._json('DELETE', path)

    def get_raw(self, path, params=None):
        """GET returning the streamed response, for file downloads"""
        return self.request('GET', path, stream=True, params=params)

    def post_raw(self, path, json=None):
        """POST returning the streamed response, for generated files"""
        return self.request('POST', path, stream=True, json=json)


def session_token():
    return session.get('token')


def expire_session():
    """Drop a token the backend no longer accepts"""
    session.pop('token', None)


def create_backend(config):
    """Build the backend client for an app configuration"""
    return BackendClient(
        config['BACKEND_URL'],
        timeout=config.get('BACKEND_TIMEOUT', 10),
        token_getter=session_token,
        on_unauthorized=expire_session,
    )


def get_backend():
    """Get the backend client bound to the current app"""
    return current_app.extensions['backend']


def raise_if_session_expired(error):
    """Re-raise a 401 so the app error handler can send the user to sign in"""
    if error.status_code == 401:
        raise error


def proxy_download(upstream, filename=None, as_attachment=True):
    """Stream a backend file response back to the browser"""
    response = Response(
        stream_with_context(upstream.iter_content(chunk_size=65536)),
        mimetype=upstream.headers.get('Content-Type', 'application/octet-stream'),
    )
    disposition = upstream.headers.get('Content-Disposition')
    if filename:
        disposition = f'{"attachment" if as_attachment else "inline"}; filename="{filename}"'
    if disposition:
        response.headers['Content-Disposition'] = disposition
    return response
