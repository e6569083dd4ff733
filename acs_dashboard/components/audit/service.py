"""
Audit Service

Paged audit trail with filters, per-entity history, revert with cascade,
and CSV export of the filtered trail.
"""
import csv
import io
import logging
from datetime import date

from flask import current_app

from acs_dashboard.components import register_component
from acs_dashboard.core import BackendError, add_log, get_backend, raise_if_session_expired
from acs_dashboard.core.filtering import search

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('description', 'performedBy.username', 'action', 'entityTable', 'entityId')
FILTER_PARAMS = ('entityTable', 'action', 'status')

CSV_COLUMNS = ('ID', 'Timestamp', 'Action', 'Entity', 'Entity ID', 'Description',
               'User', 'IP', 'Status', 'Revertable', 'Reverted')


def performer_name(entry):
    performer = entry.get('performedBy') or {}
    if performer.get('firstName'):
        return f"{performer['firstName']} {performer.get('lastName') or ''}".strip()
    return performer.get('username') or 'system'


def _flag(value):
    return 'true' if value else 'false'


@register_component('audit')
class AuditService:
    """Service for the Audit component"""

    def query_params(self, page=0, size=None, **filters):
        params = {'page': page, 'size': size or current_app.config['AUDIT_PAGE_SIZE']}
        for name in FILTER_PARAMS:
            value = filters.get(name)
            if value and value != 'all':
                params[name] = value
        return params

    def get_logs(self, page=0, **filters):
        """One page of the audit trail

        Falls back to the legacy admin log (a plain list, shown as a single
        page) when the paged endpoint fails.
        """
        backend = get_backend()
        try:
            data = backend.get('/audit/logs', params=self.query_params(page, **filters)) or {}
            return {
                'entries': data.get('content') or [],
                'totalElements': data.get('totalElements') or 0,
                'totalPages': data.get('totalPages') or 0,
                'page': page,
            }
        except BackendError as e:
            raise_if_session_expired(e)
            logger.warning(f"Paged audit log unavailable, using legacy log: {e}")

        entries = backend.get('/admin/logs') or []
        return {'entries': entries, 'totalElements': len(entries), 'totalPages': 1, 'page': 0}

    def get_filters(self):
        try:
            options = get_backend().get('/audit/filters') or {}
        except BackendError as e:
            raise_if_session_expired(e)
            logger.warning(f"Audit filter options unavailable: {e}")
            options = {}
        return {
            'entityTables': options.get('entityTables') or [],
            'actions': options.get('actions') or [],
        }

    def search(self, entries, query):
        return search(entries, query, SEARCH_FIELDS)

    def get_entry(self, entry_id):
        return get_backend().get(f'/audit/logs/{entry_id}')

    def entity_history(self, entity_table, entity_id):
        return get_backend().get(f'/audit/entity/{entity_table}/{entity_id}/history') or []

    def revert(self, entry_id):
        """Revert one action; returns the message to show"""
        data = get_backend().post(f'/audit/logs/{entry_id}/revert') or {}
        cascade = data.get('cascadeRevertedCount') or 0
        add_log('WARNING', f'Audit entry {entry_id} reverted ({cascade} dependent)')
        if cascade > 0:
            return f'Revert successful! {cascade} dependent action(s) were also reverted.'
        return 'Revert successful!'

    def export_csv(self, **filters):
        """The filtered trail as CSV text"""
        params = self.query_params(0, current_app.config['AUDIT_EXPORT_SIZE'], **filters)
        data = get_backend().get('/audit/logs', params=params) or {}

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(CSV_COLUMNS)
        for entry in data.get('content') or []:
            writer.writerow([
                entry.get('id'),
                entry.get('performedAt'),
                entry.get('action'),
                entry.get('entityTable'),
                entry.get('entityId') or '',
                entry.get('description') or '',
                (entry.get('performedBy') or {}).get('username') or '',
                entry.get('ipAddress') or '',
                entry.get('status') or '',
                _flag(entry.get('revertable')),
                _flag(entry.get('reverted')),
            ])
        return buffer.getvalue()

    def export_filename(self, today=None):
        return f'audit_log_{(today or date.today()).isoformat()}.csv'
