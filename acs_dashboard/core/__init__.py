"""
Core services for dashboard components
"""
from collections import defaultdict, deque

from acs_dashboard.config.settings import DashboardConfig

# Global state - shared across all components
system_logs = deque(maxlen=DashboardConfig.MAX_LOG_ENTRIES)
request_metrics = defaultdict(lambda: {'requests': 0, 'errors': 0, 'last_error': None})

from .api_client import BackendClient, BackendError, get_backend, raise_if_session_expired  # noqa: E402
from .monitoring import BackendMonitor, add_log  # noqa: E402

__all__ = [
    'BackendClient',
    'BackendError',
    'BackendMonitor',
    'add_log',
    'get_backend',
    'raise_if_session_expired',
    'system_logs',
    'request_metrics',
]
