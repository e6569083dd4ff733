"""
Site Imports Service

Upload sessions are tracked by the backend: a CSV/XLSX file is parsed into
rows, failed rows can be corrected or discarded, and a processed session
can be reverted as a whole.
"""
import logging
import re

from acs_dashboard.components import register_component
from acs_dashboard.core import add_log, get_backend
from acs_dashboard.core.wizard import ImportWizard

logger = logging.getLogger(__name__)

UPLOAD_MODES = {
    'sites': 'uploads',
    'assets': 'asset-uploads',
}

CORRECTION_FIELD = re.compile(r'^row-(\d+)-(.+)$')


def parse_corrections(form):
    """Collect `row-<rowNumber>-<key>` inputs into {rowNumber: {key: value}}"""
    corrections = {}
    for name, value in form.items():
        match = CORRECTION_FIELD.match(name)
        if match:
            row_number, key = match.groups()
            corrections.setdefault(row_number, {})[key] = value
    return corrections


@register_component('site_imports')
class SiteImportsService:
    """Service for subproject upload sessions"""

    def base_path(self, project_id, subproject_id):
        return f'/projects/{project_id}/subprojects/{subproject_id}/uploads'

    def session_path(self, project_id, subproject_id, session_id):
        return f'{self.base_path(project_id, subproject_id)}/{session_id}'

    def upload(self, project_id, subproject_id, upload, mode='sites', overwrite=True):
        """Send a file for parsing; returns a wizard holding the row results"""
        endpoint = UPLOAD_MODES.get(mode, UPLOAD_MODES['sites'])
        payload = get_backend().post(
            f'/projects/{project_id}/subprojects/{subproject_id}/{endpoint}',
            data={'overwrite': 'true' if overwrite else 'false'},
            files={'file': (upload.filename, upload.stream, upload.mimetype)},
        ) or {}

        wizard = ImportWizard(mode)
        wizard.load_response(payload, upload.filename)
        add_log('INFO', f'{upload.filename} uploaded to subproject {subproject_id} '
                        f'({wizard.result["errors"]} error rows)')
        return wizard

    def list_sessions(self, project_id, subproject_id):
        return get_backend().get(self.base_path(project_id, subproject_id)) or []

    def get_session(self, project_id, subproject_id, session_id):
        upload_session = get_backend().get(self.session_path(project_id, subproject_id, session_id)) or {}
        rows = upload_session.get('failedRows') or upload_session.get('rowResults') or []
        upload_session['failedRows'] = rows
        upload_session['hasErrors'] = any(row.get('status') == 'ERROR' or row.get('isError') for row in rows)
        return upload_session

    def process(self, project_id, subproject_id, session_id):
        result = get_backend().post(f'{self.session_path(project_id, subproject_id, session_id)}/process')
        add_log('INFO', f'Upload session {session_id} processed')
        return result

    def revert(self, project_id, subproject_id, session_id):
        result = get_backend().post(f'{self.session_path(project_id, subproject_id, session_id)}/revert')
        add_log('WARNING', f'Upload session {session_id} reverted')
        return result

    def correct(self, project_id, subproject_id, session_id, corrections):
        """Resubmit edited failed rows; returns the backend upload result"""
        response = get_backend().post(
            f'{self.session_path(project_id, subproject_id, session_id)}/correct',
            json=corrections,
        ) or {}
        result = response.get('uploadResult') or {}
        add_log('INFO', f"Upload session {session_id}: {len(corrections)} row(s) corrected, "
                        f"{result.get('errors', 0)} still failing")
        return result

    def discard_failed(self, project_id, subproject_id, session_id):
        get_backend().post(f'{self.session_path(project_id, subproject_id, session_id)}/discard-failed')
        add_log('INFO', f'Failed rows of upload session {session_id} discarded')

    def download(self, project_id, subproject_id, session_id):
        return get_backend().get_raw(f'{self.session_path(project_id, subproject_id, session_id)}/download')
