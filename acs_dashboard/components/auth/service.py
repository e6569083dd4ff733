"""
Auth Service
"""
import logging

from acs_dashboard.components import register_component
from acs_dashboard.core import BackendError, get_backend

logger = logging.getLogger(__name__)


@register_component('auth')
class AuthService:
    """Service for the Auth component"""

    def login(self, form):
        """Exchange credentials for a bearer token"""
        result = get_backend().post('/auth/login', json=form.to_payload())
        token = (result or {}).get('token') if isinstance(result, dict) else None
        if not token:
            raise BackendError('Login failed: no token returned')
        logger.info(f"User {form.username} signed in")
        return token

    def get_profile(self):
        return get_backend().get('/auth/me') or {}

    def change_password(self, form):
        get_backend().post('/auth/change-password', json=form.to_payload())
