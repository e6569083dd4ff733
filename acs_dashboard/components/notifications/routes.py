"""
Notifications Routes
"""
from flask import Blueprint, flash, jsonify, redirect, render_template, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.auth import current_profile, login_required
from .service import NotificationsService, heading

notifications_bp = Blueprint('notifications', __name__)

service = NotificationsService()


@notifications_bp.route('/notifications')
@login_required
def notification_list():
    try:
        notifications = service.unread(current_profile().get('username'))
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load notifications', 'error')
        notifications = []
    return render_template('notifications/list.html', notifications=notifications,
                           heading=heading(len(notifications)))


@notifications_bp.route('/notifications/<notification_id>/read', methods=['POST'])
@login_required
def mark_read(notification_id):
    try:
        service.mark_read(notification_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to mark notification as read', 'error')
    return redirect(url_for('notifications.notification_list'))


@notifications_bp.route('/notifications/read-all', methods=['POST'])
@login_required
def mark_all_read():
    username = current_profile().get('username')
    if not username:
        flash('Your profile could not be loaded', 'error')
        return redirect(url_for('notifications.notification_list'))
    try:
        service.mark_all_read(username)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to mark notifications as read', 'error')
    else:
        flash('All notifications marked as read', 'success')
    return redirect(url_for('notifications.notification_list'))


@notifications_bp.route('/api/notifications')
@login_required
def api_notifications():
    notifications = service.unread(current_profile().get('username'))
    return jsonify({'heading': heading(len(notifications)), 'notifications': notifications})


def init_notifications(app):
    """Initialize notifications component with Flask app"""
    app.register_blueprint(notifications_bp)
    return notifications_bp
