"""
Site Imports Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.api_client import proxy_download
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.forms import TRUTHY, validate_file
from .service import SiteImportsService, parse_corrections

logger = logging.getLogger(__name__)

site_imports_bp = Blueprint(
    'site_imports', __name__,
    url_prefix='/projects/<int:project_id>/subprojects/<int:subproject_id>/imports',
)

service = SiteImportsService()


def _session_url(project_id, subproject_id, session_id):
    return url_for('site_imports.session_detail', project_id=project_id,
                   subproject_id=subproject_id, session_id=session_id)


@site_imports_bp.route('')
@login_required
def session_list(project_id, subproject_id):
    try:
        sessions = service.list_sessions(project_id, subproject_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to list imports', 'error')
        sessions = []
    return render_template('site_imports/list.html', sessions=sessions,
                           project_id=project_id, subproject_id=subproject_id)


@site_imports_bp.route('', methods=['POST'])
@login_required
def upload(project_id, subproject_id):
    upload_file = request.files.get('file')
    error = validate_file(upload_file, current_app.config)
    if error:
        flash(error, 'error')
        return redirect(url_for('site_imports.session_list',
                                project_id=project_id, subproject_id=subproject_id))

    mode = request.form.get('mode', 'sites')
    overwrite = request.form.get('overwrite', '').lower() in TRUTHY
    try:
        wizard = service.upload(project_id, subproject_id, upload_file, mode=mode, overwrite=overwrite)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Upload failed', 'error')
        return redirect(url_for('site_imports.session_list',
                                project_id=project_id, subproject_id=subproject_id))

    flash('Asset file uploaded and parsed' if mode == 'assets' else 'File uploaded and parsed', 'success')
    category, message = wizard.summary_message()
    flash(message, category)

    if wizard.session_id is None:
        return redirect(url_for('site_imports.session_list',
                                project_id=project_id, subproject_id=subproject_id))
    return redirect(_session_url(project_id, subproject_id, wizard.session_id))


@site_imports_bp.route('/<int:session_id>')
@login_required
def session_detail(project_id, subproject_id, session_id):
    try:
        upload_session = service.get_session(project_id, subproject_id, session_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to fetch session', 'error')
        return redirect(url_for('site_imports.session_list',
                                project_id=project_id, subproject_id=subproject_id))

    return render_template('site_imports/detail.html', upload=upload_session,
                           project_id=project_id, subproject_id=subproject_id, session_id=session_id)


@site_imports_bp.route('/<int:session_id>/process', methods=['POST'])
@login_required
def process(project_id, subproject_id, session_id):
    try:
        service.process(project_id, subproject_id, session_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Process failed', 'error')
    else:
        flash('Sites created successfully', 'success')
    return redirect(_session_url(project_id, subproject_id, session_id))


@site_imports_bp.route('/<int:session_id>/revert', methods=['POST'])
@login_required
def revert(project_id, subproject_id, session_id):
    try:
        service.revert(project_id, subproject_id, session_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Revert failed', 'error')
    else:
        flash('Import reverted', 'success')
    return redirect(_session_url(project_id, subproject_id, session_id))


@site_imports_bp.route('/<int:session_id>/correct', methods=['GET', 'POST'])
@login_required
def correct(project_id, subproject_id, session_id):
    """Edit failed rows and resubmit them"""
    if request.method == 'POST':
        corrections = parse_corrections(request.form)
        try:
            result = service.correct(project_id, subproject_id, session_id, corrections)
        except BackendError as e:
            raise_if_session_expired(e)
            flash(e.message or 'Failed to submit corrections', 'error')
        else:
            flash(f"Corrections submitted: {result.get('saved', 0)} site(s) created successfully", 'success')
            if (result.get('errors') or 0) > 0:
                flash(f"{result['errors']} row(s) still need correction", 'warning')
            else:
                flash('All corrections completed!', 'success')
                return redirect(_session_url(project_id, subproject_id, session_id))

    try:
        upload_session = service.get_session(project_id, subproject_id, session_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load session data. Please try again.', 'error')
        return redirect(url_for('site_imports.session_list',
                                project_id=project_id, subproject_id=subproject_id))

    rows = [row for row in upload_session['failedRows'] if row.get('rowData')]
    return render_template('site_imports/correct.html', upload=upload_session, rows=rows,
                           project_id=project_id, subproject_id=subproject_id, session_id=session_id)


@site_imports_bp.route('/<int:session_id>/discard-failed', methods=['POST'])
@login_required
def discard_failed(project_id, subproject_id, session_id):
    try:
        service.discard_failed(project_id, subproject_id, session_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to discard rows', 'error')
    else:
        flash('Failed rows discarded', 'success')
    return redirect(_session_url(project_id, subproject_id, session_id))


@site_imports_bp.route('/<int:session_id>/download')
@login_required
def download(project_id, subproject_id, session_id):
    try:
        upstream = service.download(project_id, subproject_id, session_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Download failed', 'error')
        return redirect(_session_url(project_id, subproject_id, session_id))
    return proxy_download(upstream)


def init_site_imports(app):
    """Initialize site imports component with Flask app"""
    app.register_blueprint(site_imports_bp)
    return site_imports_bp
