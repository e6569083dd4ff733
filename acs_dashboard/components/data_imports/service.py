"""
Data Imports Service

Financial spreadsheets and installation bookings are imported through a
two-step wizard: the file is uploaded and parsed by the backend, then the
per-row results are reviewed. Wizard state is kept per browser session.
"""
import logging

from flask import current_app

from acs_dashboard.components import register_component
from acs_dashboard.core import add_log, get_backend
from acs_dashboard.core.auth import user_state
from acs_dashboard.core.wizard import ImportWizard

logger = logging.getLogger(__name__)

IMPORT_KINDS = {
    'financial': {
        'title': 'Import Financial Data',
        'done_message': 'Financial data refreshed',
        'return_endpoint': 'finance.finance_page',
    },
    'installations': {
        'title': 'Import Installations',
        'done_message': 'Installation data refreshed',
        'return_endpoint': 'operations.installation_list',
    },
}


class UnknownImportKind(LookupError):
    pass


@register_component('data_imports')
class DataImportsService:
    """Service for the financial and installation import wizards"""

    def kind_config(self, kind):
        if kind not in IMPORT_KINDS:
            raise UnknownImportKind(kind)
        return IMPORT_KINDS[kind]

    def load(self, kind, file_type=None):
        self.kind_config(kind)
        wizard = ImportWizard.load(user_state(), kind, file_type)
        if file_type and wizard.step == 'upload':
            wizard.file_type = file_type
        return wizard

    def save(self, wizard):
        wizard.save(user_state())

    def discard(self, wizard):
        wizard.discard(user_state())

    def endpoint_for(self, wizard, project_id=None, subproject_id=None):
        if wizard.kind == 'installations':
            return '/installations/import'

        file_type = current_app.config['FINANCIAL_FILE_TYPES'].get(wizard.file_type)
        if not file_type:
            raise ValueError('Please select a file type')
        if not project_id or not subproject_id:
            raise ValueError('Please select a project and subproject')
        return f"/projects/{project_id}/subprojects/{subproject_id}/financial/{file_type['endpoint']}"

    def upload(self, wizard, upload, project_id=None, subproject_id=None):
        """Send the file to the backend and move the wizard to its summary step"""
        endpoint = self.endpoint_for(wizard, project_id, subproject_id)
        payload = get_backend().post(
            endpoint,
            files={'file': (upload.filename, upload.stream, upload.mimetype)},
        ) or {}
        wizard.load_response(payload, upload.filename)
        self.save(wizard)

        logger.info(f"[{wizard.kind}] {upload.filename} -> session {wizard.session_id}: {wizard.result}")
        add_log('WARNING' if wizard.result['errors'] else 'INFO',
                f"{upload.filename} imported: {wizard.result['saved']} created, "
                f"{wizard.result['updated']} updated, {wizard.result['errors']} errors")
        return wizard

    def project_options(self):
        """Projects with their subprojects for the financial import target"""
        backend = get_backend()
        projects = backend.get('/projects') or []
        for project in projects:
            if project.get('subprojects') is None:
                project['subprojects'] = backend.get(f"/projects/{project['id']}/subprojects") or []
        return projects

    def sample_csv(self, file_type):
        config = current_app.config['FINANCIAL_FILE_TYPES'].get(file_type)
        if not config or not config.get('sample'):
            return None
        return '\n'.join(config['sample']) + '\n'
