"""
Clients Service
"""
import io
import logging

import pandas as pd

from acs_dashboard.components import register_component
from acs_dashboard.core import BackendError, add_log, get_backend, raise_if_session_expired
from acs_dashboard.core.filtering import apply_filters
from acs_dashboard.core.forms import normalize_client_id

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'contactPerson', 'location', 'address')
EXCEL_EXTENSIONS = ('.xlsx', '.xls')


def is_active(client):
    return str(client.get('status', '')).upper() == 'ACTIVE'


def is_excel(filename):
    return filename.lower().endswith(EXCEL_EXTENSIONS)


@register_component('clients')
class ClientsService:
    """Service for the Clients component"""

    def list_clients(self):
        return get_backend().get('/clients') or []

    def filter_clients(self, clients, query='', client_type='all', status='all'):
        clients = apply_filters(clients, query, SEARCH_FIELDS, type=client_type)
        if status in (None, '', 'all'):
            return clients
        return [c for c in clients if str(c.get('status', '')).upper() == status.upper()]

    def summary(self, clients):
        """Counters shown above the client table"""
        return {
            'activeClients': sum(1 for c in clients if is_active(c)),
            'totalSites': sum(c.get('sites') or 0 for c in clients),
            'activeRevenue': sum(c.get('monthlyRevenue') or 0 for c in clients if is_active(c)),
            'outstanding': sum(c.get('outstandingAmount') or 0 for c in clients),
        }

    def get_client(self, client_id):
        return get_backend().get(f'/clients/{normalize_client_id(client_id)}')

    def get_documents(self, client_id):
        return get_backend().get(f'/clients/{normalize_client_id(client_id)}/documents') or []

    def get_projects(self, client_id):
        return get_backend().get(f'/clients/{normalize_client_id(client_id)}/projects') or []

    def get_upload_sessions(self, projects):
        """Upload sessions of every subproject of the given projects

        Returns a list of (project, subproject, sessions) tuples. A subproject
        whose sessions cannot be loaded is listed with an empty list.
        """
        backend = get_backend()
        result = []
        for project in projects:
            subprojects = project.get('subprojects')
            if subprojects is None:
                subprojects = backend.get(f"/projects/{project['id']}/subprojects") or []
            for subproject in subprojects:
                try:
                    sessions = backend.get(
                        f"/projects/{project['id']}/subprojects/{subproject['id']}/uploads") or []
                except BackendError as e:
                    raise_if_session_expired(e)
                    logger.warning(f"Upload sessions of subproject {subproject['id']} unavailable: {e}")
                    sessions = []
                result.append((project, subproject, sessions))
        return result

    def create_client(self, form):
        client = get_backend().post('/clients', json=form.to_payload())
        add_log('INFO', f'Client {form.name} created')
        return client

    def update_client(self, client_id, form, remove_documents=(), files=()):
        """Save client fields, then drop removed documents, then upload new ones"""
        backend = get_backend()
        cid = normalize_client_id(client_id)
        backend.put(f'/clients/{cid}', json=form.to_payload())

        for name in remove_documents:
            backend.delete(f'/clients/{cid}/documents/{name}')

        uploads = [f for f in files if f and f.filename]
        if uploads:
            backend.post(
                '/documents/upload',
                data={'entityType': 'CLIENT', 'entityId': cid},
                files=[('files', (f.filename, f.stream, f.mimetype)) for f in uploads],
            )
        add_log('INFO', f'Client {form.name} updated')

    def toggle_active(self, client_id):
        """Deactivate an active client, activate any other; returns the new state"""
        cid = normalize_client_id(client_id)
        client = self.get_client(cid) or {}
        action = 'deactivate' if is_active(client) else 'activate'
        get_backend().patch(f'/clients/{cid}/{action}')
        add_log('INFO', f"Client {client.get('name', cid)} {action}d")
        return action == 'activate'

    def delete_client(self, client_id):
        cid = normalize_client_id(client_id)
        get_backend().delete(f'/clients/{cid}')
        add_log('WARNING', f'Client {cid} deleted')

    def download_document(self, client_id, name):
        return get_backend().get_raw(f'/clients/{normalize_client_id(client_id)}/documents/{name}')

    def preview_document(self, client_id, name):
        """First sheet of an Excel document as a list of rows"""
        response = self.download_document(client_id, name)
        sheets = pd.read_excel(io.BytesIO(response.content), sheet_name=None, header=None)
        if not sheets:
            raise ValueError('No sheets found in the Excel file.')

        sheet_name = next(iter(sheets))
        frame = sheets[sheet_name].fillna('').astype(str)
        return {'sheet': sheet_name, 'rows': frame.values.tolist()}
