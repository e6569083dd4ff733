"""
Auth Routes
"""
import logging

from flask import Blueprint, flash, jsonify, redirect, render_template, request, session, url_for

from acs_dashboard.core import BackendError, add_log, raise_if_session_expired
from acs_dashboard.core.auth import current_profile, end_session, login_required, start_session
from acs_dashboard.core.forms import ChangePasswordForm, LoginForm, ValidationError, first_error, parse_form
from .service import AuthService

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

service = AuthService()


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Sign-in page"""
    if request.method == 'GET':
        return render_template('auth/login.html')

    try:
        form = parse_form(LoginForm, request.form)
        token = service.login(form)
    except ValidationError as e:
        flash(first_error(e), 'error')
        return render_template('auth/login.html'), 400
    except BackendError as e:
        logger.warning(f"Login failed: {e}")
        flash('Login failed. Please check your credentials and try again.', 'error')
        return render_template('auth/login.html'), 401

    start_session(token)
    try:
        session['profile'] = service.get_profile()
    except BackendError as e:
        logger.warning(f"Could not load profile after login: {e}")

    add_log('INFO', f'{form.username} signed in')
    flash('Welcome back!', 'success')
    next_url = request.args.get('next') or ''
    if not next_url.startswith('/') or next_url.startswith('//'):
        next_url = url_for('main.dashboard')
    return redirect(next_url)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    end_session()
    flash('You have been signed out.', 'info')
    return redirect(url_for('auth.login'))


@auth_bp.route('/account/password', methods=['GET', 'POST'])
@login_required
def change_password():
    if request.method == 'GET':
        return render_template('auth/change_password.html')

    try:
        service.change_password(parse_form(ChangePasswordForm, request.form))
    except ValidationError as e:
        flash(first_error(e), 'error')
        return render_template('auth/change_password.html'), 400
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to change password', 'error')
        return render_template('auth/change_password.html'), 400

    flash('Your password was updated successfully.', 'success')
    return redirect(url_for('main.dashboard'))


@auth_bp.route('/api/auth/me')
@login_required
def api_me():
    return jsonify(current_profile())


def init_auth(app):
    """Initialize auth component with Flask app"""
    app.register_blueprint(auth_bp)
    return auth_bp
