"""
Audit Routes
"""
from flask import Blueprint, Response, flash, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.auth import login_required
from .service import FILTER_PARAMS, AuditService, performer_name

audit_bp = Blueprint('audit', __name__)

service = AuditService()


def _filters():
    return {name: request.args.get(name, 'all') for name in FILTER_PARAMS}


@audit_bp.route('/audit')
@login_required
def audit_log():
    filters = _filters()
    query = request.args.get('q', '')
    page = max(request.args.get('page', 0, type=int), 0)

    try:
        logs = service.get_logs(page, **filters)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load audit logs', 'error')
        logs = {'entries': [], 'totalElements': 0, 'totalPages': 0, 'page': 0}

    return render_template(
        'audit/list.html',
        logs=logs,
        entries=service.search(logs['entries'], query),
        options=service.get_filters(),
        filters=filters,
        query=query,
        performer_name=performer_name,
    )


@audit_bp.route('/audit/<int:entry_id>')
@login_required
def audit_detail(entry_id):
    try:
        entry = service.get_entry(entry_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Audit entry not found', 'error')
        return redirect(url_for('audit.audit_log'))
    return render_template('audit/detail.html', entry=entry, performer_name=performer_name)


@audit_bp.route('/audit/entity/<entity_table>/<entity_id>/history')
@login_required
def entity_history(entity_table, entity_id):
    try:
        history = service.entity_history(entity_table, entity_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load history', 'error')
        return redirect(url_for('audit.audit_log'))
    return render_template(
        'audit/history.html',
        title=f'{entity_table} #{entity_id}',
        history=history,
        performer_name=performer_name,
    )


@audit_bp.route('/audit/<int:entry_id>/revert', methods=['POST'])
@login_required
def revert(entry_id):
    try:
        message = service.revert(entry_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(f'Revert failed: {e.message}', 'error')
    else:
        flash(message, 'success')
    return redirect(url_for('audit.audit_log'))


@audit_bp.route('/audit/export.csv')
@login_required
def export_csv():
    try:
        content = service.export_csv(**_filters())
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Export failed', 'error')
        return redirect(url_for('audit.audit_log'))

    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{service.export_filename()}"'},
    )


def init_audit(app):
    """Initialize audit component with Flask app"""
    app.register_blueprint(audit_bp)
    return audit_bp
