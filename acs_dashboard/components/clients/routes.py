"""
Clients Routes
"""
import logging

from flask import Blueprint, current_app, flash, jsonify, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.api_client import proxy_download
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.forms import ClientForm, ValidationError, first_error, parse_form
from .service import ClientsService, is_excel

logger = logging.getLogger(__name__)

clients_bp = Blueprint('clients', __name__)

service = ClientsService()


@clients_bp.route('/clients')
@login_required
def client_list():
    query = request.args.get('q', '')
    client_type = request.args.get('type', 'all')
    status = request.args.get('status', 'all')

    try:
        clients = service.list_clients()
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load clients', 'error')
        clients = []

    return render_template(
        'clients/list.html',
        clients=service.filter_clients(clients, query, client_type, status),
        summary=service.summary(clients),
        client_types=current_app.config['CLIENT_TYPES'],
        query=query,
        client_type=client_type,
        status=status,
    )


@clients_bp.route('/clients', methods=['POST'])
@login_required
def create_client():
    try:
        form = parse_form(ClientForm, request.form)
        service.create_client(form)
    except ValidationError as e:
        flash(first_error(e), 'error')
        return redirect(url_for('clients.client_list'))
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to create client', 'error')
        return redirect(url_for('clients.client_list'))

    flash(f'Client {form.name} created successfully', 'success')
    return redirect(url_for('clients.client_list'))


@clients_bp.route('/clients/<client_id>')
@login_required
def client_detail(client_id):
    try:
        client = service.get_client(client_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Client not found', 'error')
        return redirect(url_for('clients.client_list'))

    documents, projects, uploads = [], [], []
    try:
        documents = service.get_documents(client_id)
        projects = service.get_projects(client_id)
        uploads = service.get_upload_sessions(projects)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load client details', 'error')

    return render_template(
        'clients/detail.html',
        client=client,
        documents=documents,
        projects=projects,
        uploads=uploads,
        client_types=current_app.config['CLIENT_TYPES'],
        is_excel=is_excel,
    )


@clients_bp.route('/clients/<client_id>/edit', methods=['POST'])
@login_required
def edit_client(client_id):
    try:
        form = parse_form(ClientForm, request.form)
        service.update_client(
            client_id,
            form,
            remove_documents=request.form.getlist('removeDocuments'),
            files=request.files.getlist('files'),
        )
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to update client', 'error')
    else:
        flash(f'Client {form.name} updated successfully', 'success')
    return redirect(url_for('clients.client_detail', client_id=client_id))


@clients_bp.route('/clients/<client_id>/toggle-active', methods=['POST'])
@login_required
def toggle_client(client_id):
    try:
        activated = service.toggle_active(client_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to change client status', 'error')
    else:
        flash('Client activated' if activated else 'Client deactivated', 'success')
    return redirect(url_for('clients.client_detail', client_id=client_id))


@clients_bp.route('/clients/<client_id>/delete', methods=['POST'])
@login_required
def delete_client(client_id):
    try:
        service.delete_client(client_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to delete client', 'error')
        return redirect(url_for('clients.client_detail', client_id=client_id))

    flash('Client deleted', 'success')
    return redirect(url_for('clients.client_list'))


@clients_bp.route('/clients/<client_id>/documents/<path:name>')
@login_required
def download_document(client_id, name):
    inline = request.args.get('action') == 'view'
    try:
        upstream = service.download_document(client_id, name)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to download document', 'error')
        return redirect(url_for('clients.client_detail', client_id=client_id))
    return proxy_download(upstream, filename=name, as_attachment=not inline)


@clients_bp.route('/clients/<client_id>/documents/<path:name>/preview')
@login_required
def preview_document(client_id, name):
    if not is_excel(name):
        flash('Only Excel documents can be previewed', 'error')
        return redirect(url_for('clients.client_detail', client_id=client_id))

    try:
        preview = service.preview_document(client_id, name)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load document', 'error')
        return redirect(url_for('clients.client_detail', client_id=client_id))
    except ValueError as e:
        flash(str(e), 'error')
        return redirect(url_for('clients.client_detail', client_id=client_id))

    return render_template('clients/preview.html', client_id=client_id, name=name, preview=preview)


@clients_bp.route('/api/clients')
@login_required
def api_clients():
    clients = service.list_clients()
    return jsonify(service.filter_clients(
        clients,
        request.args.get('q', ''),
        request.args.get('type', 'all'),
        request.args.get('status', 'all'),
    ))


def init_clients(app):
    """Initialize clients component with Flask app"""
    app.register_blueprint(clients_bp)
    return clients_bp
