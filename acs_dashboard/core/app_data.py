"""
Application data service

The backend serves every collection the operations screens need in one
`/app-data` payload. Pages fetch it per request; the last good payload is
kept per browser session so a failed refresh still shows stale data.
"""
import copy
import logging

from flask import flash, session

from acs_dashboard.config.settings import DashboardConfig

from .api_client import BackendError, get_backend, raise_if_session_expired
from .auth import SessionStore

logger = logging.getLogger(__name__)

EMPTY_APP_DATA = {
    'dashboard': {'activeSites': 0, 'totalAcsUnits': 0, 'openTickets': 0, 'monthlyRevenue': 0},
    'sites': [],
    'assets': [],
    'installations': [],
    'maintenanceTickets': [],
    'finance': {'monthlyRevenue': 0, 'totalMaintenanceCost': 0, 'totalInstallationCost': 0, 'netProfit': 0},
    'financialTransactions': [],
}

# Last successful payload per browser session
_last_good = SessionStore(DashboardConfig.MAX_SESSIONS)


class AppDataService:
    """Fetches the aggregated collections behind the operations screens"""

    def fetch(self):
        sid = session.get('sid')
        try:
            data = get_backend().get('/app-data')
        except BackendError as e:
            raise_if_session_expired(e)
            logger.error(f"[AppData] fetch failed: {e}")
            flash(e.message or 'Failed to load application data', 'error')
            return copy.deepcopy(_last_good.touch(sid) or EMPTY_APP_DATA)

        merged = copy.deepcopy(EMPTY_APP_DATA)
        merged.update({key: value for key, value in (data or {}).items() if value is not None})
        _last_good[sid] = merged
        return copy.deepcopy(merged)

    def collection(self, name):
        return self.fetch().get(name, [])

    def forget(self):
        _last_good.pop(session.get('sid'), None)
