"""
Admin Routes
"""
from flask import Blueprint, flash, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.forms import UserForm, UserUpdateForm, ValidationError, first_error, parse_form
from .service import AdminService

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

service = AdminService()


def _back():
    return redirect(url_for('admin.user_list'))


@admin_bp.route('/users')
@login_required
def user_list():
    query = request.args.get('q', '')
    role = request.args.get('role', 'all')

    users, roles = [], []
    try:
        users = service.list_users()
        roles = service.list_roles()
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load users', 'error')

    return render_template(
        'admin/users.html',
        users=service.filter_users(users, query, role),
        roles=roles,
        query=query,
        role=role,
    )


@admin_bp.route('/users', methods=['POST'])
@login_required
def create_user():
    try:
        form = parse_form(UserForm, request.form)
        service.create_user(form)
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to create user', 'error')
    else:
        invite = ' Invitation email sent.' if form.send_invite else ''
        flash(f'User {form.name} created successfully.{invite}', 'success')
    return _back()


@admin_bp.route('/users/<user_id>/edit', methods=['POST'])
@login_required
def edit_user(user_id):
    try:
        form = parse_form(UserUpdateForm, request.form)
        service.update_user(user_id, form)
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to update user', 'error')
    else:
        flash(f'User {form.name} updated successfully', 'success')
    return _back()


@admin_bp.route('/users/<user_id>/toggle-active', methods=['POST'])
@login_required
def toggle_user(user_id):
    name = request.form.get('name') or 'User'
    try:
        activated = service.toggle_active(user_id, request.form.get('status', ''))
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to change user status. Please try again.', 'error')
    else:
        state = 'activated' if activated else 'deactivated'
        flash(f'{name} has been {state} successfully.', 'success')
    return _back()


@admin_bp.route('/users/<user_id>/reset-password', methods=['POST'])
@login_required
def reset_password(user_id):
    method = request.form.get('method', 'email')
    try:
        result = service.reset_password(user_id, method)
    except ValueError as e:
        flash(str(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to reset password. Please try again.', 'error')
    else:
        if method == 'manual' and result.get('temporaryPassword'):
            flash(f"Temporary password: {result['temporaryPassword']}", 'success')
        else:
            flash('Password reset email sent', 'success')
    return _back()


@admin_bp.route('/users/<user_id>/delete', methods=['POST'])
@login_required
def delete_user(user_id):
    try:
        service.delete_user(user_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to delete user', 'error')
    else:
        flash('User deleted', 'success')
    return _back()


def init_admin(app):
    """Initialize admin component with Flask app"""
    app.register_blueprint(admin_bp)
    return admin_bp
