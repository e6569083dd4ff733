"""
Admin Service
User management against the backend admin API
"""
import logging

from acs_dashboard.components import register_component
from acs_dashboard.core import add_log, get_backend
from acs_dashboard.core.filtering import apply_filters

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'email')
RESET_METHODS = ('email', 'manual')


def is_active(user):
    return str(user.get('status', '')).upper() == 'ACTIVE'


@register_component('admin')
class AdminService:
    """Service for the Admin component"""

    def list_users(self):
        return get_backend().get('/admin/users') or []

    def filter_users(self, users, query='', role='all'):
        return apply_filters(users, query, SEARCH_FIELDS, role=role)

    def list_roles(self):
        return get_backend().get('/admin/roles') or []

    def create_user(self, form):
        user = get_backend().post('/admin/users', json=form.to_payload())
        add_log('INFO', f'User {form.email} created')
        return user

    def update_user(self, user_id, form):
        get_backend().put(f'/admin/users/{user_id}', json=form.to_payload())
        add_log('INFO', f'User {form.email} updated')

    def toggle_active(self, user_id, current_status):
        """Deactivate an active user, activate any other; returns the new state"""
        action = 'deactivate' if is_active({'status': current_status}) else 'activate'
        get_backend().patch(f'/admin/users/{user_id}/{action}')
        add_log('INFO', f'User {user_id} {action}d')
        return action == 'activate'

    def reset_password(self, user_id, method='email'):
        if method not in RESET_METHODS:
            raise ValueError(f'Unknown reset method: {method}')
        result = get_backend().post(f'/admin/users/{user_id}/reset-password', json={'method': method}) or {}
        add_log('INFO', f'Password reset ({method}) for user {user_id}')
        return result

    def delete_user(self, user_id):
        get_backend().delete(f'/admin/users/{user_id}')
        add_log('WARNING', f'User {user_id} deleted')
