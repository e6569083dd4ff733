"""
Data Imports Routes
"""
import logging

from flask import (Blueprint, Response, current_app, flash, jsonify, redirect, render_template,
                   request, url_for)

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.app_data import AppDataService
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.forms import validate_file
from acs_dashboard.core.wizard import TABS
from .service import DataImportsService, UnknownImportKind

logger = logging.getLogger(__name__)

data_imports_bp = Blueprint('data_imports', __name__)

service = DataImportsService()
app_data = AppDataService()


@data_imports_bp.errorhandler(UnknownImportKind)
def unknown_kind(e):
    if request.path.startswith('/api/'):
        return jsonify({'error': f'Unknown import: {e}'}), 404
    return render_template('errors/404.html'), 404


def _wizard_url(kind):
    return url_for('data_imports.wizard_page', kind=kind)


def _target(form):
    """(projectId, subprojectId) from separate fields or a "project:subproject" choice"""
    if form.get('target'):
        project_id, _, subproject_id = form['target'].partition(':')
        return project_id or None, subproject_id or None
    return form.get('projectId'), form.get('subprojectId')


@data_imports_bp.route('/imports/<kind>')
@login_required
def wizard_page(kind):
    """Upload step, or the row review of the last upload"""
    wizard = service.load(kind, request.args.get('fileType'))
    if 'tab' in request.args:
        wizard.select_tab(request.args['tab'])
        service.save(wizard)

    projects = []
    if kind == 'financial' and wizard.step == 'upload':
        try:
            projects = service.project_options()
        except BackendError as e:
            raise_if_session_expired(e)
            flash(e.message or 'Failed to load projects', 'error')

    return render_template(
        'data_imports/wizard.html',
        kind=kind,
        kind_config=service.kind_config(kind),
        wizard=wizard,
        tabs=TABS,
        counts=wizard.counts(),
        rows=wizard.filtered_rows(),
        projects=projects,
        file_types=current_app.config['FINANCIAL_FILE_TYPES'],
    )


@data_imports_bp.route('/imports/<kind>', methods=['POST'])
@login_required
def upload(kind):
    wizard = service.load(kind, request.form.get('fileType'))
    upload_file = request.files.get('file')

    error = validate_file(upload_file, current_app.config)
    if error:
        flash(error, 'error')
        return redirect(_wizard_url(kind))

    try:
        project_id, subproject_id = _target(request.form)
        service.upload(wizard, upload_file, project_id=project_id, subproject_id=subproject_id)
    except ValueError as e:
        flash(str(e), 'error')
        return redirect(_wizard_url(kind))
    except BackendError as e:
        raise_if_session_expired(e)
        logger.error(f"[{kind}] upload failed: {e}")
        flash(e.message or 'Upload failed', 'error')
        return redirect(_wizard_url(kind))

    category, message = wizard.summary_message()
    flash(message, category)
    return redirect(_wizard_url(kind))


@data_imports_bp.route('/imports/<kind>/rows/<int:row_number>/toggle-edit', methods=['POST'])
@login_required
def toggle_edit(kind, row_number):
    wizard = service.load(kind)
    try:
        wizard.toggle_edit(row_number)
    except KeyError:
        flash(f'Row {row_number} is not part of this import', 'error')
    service.save(wizard)
    return redirect(_wizard_url(kind))


@data_imports_bp.route('/imports/<kind>/rows/<int:row_number>', methods=['POST'])
@login_required
def update_row(kind, row_number):
    """Store edited values of one row and close its editor"""
    wizard = service.load(kind)
    try:
        for key, value in request.form.items():
            wizard.update_field(row_number, key, value)
        wizard.toggle_edit(row_number)
    except KeyError:
        flash(f'Row {row_number} is not part of this import', 'error')
    service.save(wizard)
    return redirect(_wizard_url(kind))


@data_imports_bp.route('/imports/<kind>/rows/<int:row_number>/remove', methods=['POST'])
@login_required
def remove_row(kind, row_number):
    wizard = service.load(kind)
    try:
        wizard.remove_row(row_number)
    except KeyError:
        flash(f'Row {row_number} is not part of this import', 'error')
    else:
        flash(f'Row {row_number} removed from results', 'info')
    service.save(wizard)
    return redirect(_wizard_url(kind))


@data_imports_bp.route('/imports/<kind>/done', methods=['POST'])
@login_required
def done(kind):
    """Close the wizard and refresh the data it changed"""
    config = service.kind_config(kind)
    service.discard(service.load(kind))
    app_data.forget()
    flash(config['done_message'], 'success')
    return redirect(url_for(config['return_endpoint']))


@data_imports_bp.route('/imports/<kind>/reset', methods=['POST'])
@login_required
def reset(kind):
    service.discard(service.load(kind))
    return redirect(_wizard_url(kind))


@data_imports_bp.route('/imports/financial/samples/<file_type>.csv')
@login_required
def sample_file(file_type):
    content = service.sample_csv(file_type)
    if content is None:
        return render_template('errors/404.html'), 404
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="sample_{file_type.replace("-", "_")}.csv"'},
    )


# JSON mirrors of the wizard actions

def _state(wizard):
    return jsonify({
        **wizard.to_dict(),
        'counts': wizard.counts(),
        'rows': wizard.filtered_rows(),
    })


@data_imports_bp.route('/api/imports/<kind>')
@login_required
def api_state(kind):
    wizard = service.load(kind)
    if 'tab' in request.args:
        wizard.select_tab(request.args['tab'])
        service.save(wizard)
    return _state(wizard)


@data_imports_bp.route('/api/imports/<kind>', methods=['POST'])
@login_required
def api_upload(kind):
    wizard = service.load(kind, request.form.get('fileType'))
    upload_file = request.files.get('file')

    error = validate_file(upload_file, current_app.config)
    if error:
        return jsonify({'error': error}), 400
    try:
        project_id, subproject_id = _target(request.form)
        service.upload(wizard, upload_file, project_id=project_id, subproject_id=subproject_id)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    category, message = wizard.summary_message()
    response = _state(wizard)
    response.headers['X-Import-Message'] = message
    response.headers['X-Import-Category'] = category
    return response


@data_imports_bp.route('/api/imports/<kind>/rows/<int:row_number>/toggle-edit', methods=['POST'])
@login_required
def api_toggle_edit(kind, row_number):
    wizard = service.load(kind)
    try:
        wizard.toggle_edit(row_number)
    except KeyError as e:
        return jsonify({'error': e.args[0]}), 404
    service.save(wizard)
    return _state(wizard)


@data_imports_bp.route('/api/imports/<kind>/rows/<int:row_number>', methods=['PATCH'])
@login_required
def api_update_field(kind, row_number):
    data = request.get_json(silent=True) or {}
    if 'key' not in data:
        return jsonify({'error': 'key is required'}), 400

    wizard = service.load(kind)
    try:
        wizard.update_field(row_number, data['key'], data.get('value', ''))
    except KeyError as e:
        return jsonify({'error': e.args[0]}), 404
    service.save(wizard)
    return _state(wizard)


@data_imports_bp.route('/api/imports/<kind>/rows/<int:row_number>', methods=['DELETE'])
@login_required
def api_remove_row(kind, row_number):
    wizard = service.load(kind)
    try:
        wizard.remove_row(row_number)
    except KeyError as e:
        return jsonify({'error': e.args[0]}), 404
    service.save(wizard)
    return _state(wizard)


@data_imports_bp.route('/api/imports/<kind>/done', methods=['POST'])
@login_required
def api_done(kind):
    config = service.kind_config(kind)
    service.discard(service.load(kind))
    app_data.forget()
    return jsonify({'message': config['done_message']})


def init_data_imports(app):
    """Initialize data imports component with Flask app"""
    app.register_blueprint(data_imports_bp)
    return data_imports_bp
