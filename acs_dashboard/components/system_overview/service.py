"""
System Overview Service
"""

from flask import current_app

from acs_dashboard.components import register_component, registry


@register_component('system_overview')
class SystemOverviewService:
    """Service for System Overview component"""

    def get_request_metrics(self):
        """Backend call counters grouped by resource"""
        from acs_dashboard.core import request_metrics, system_logs

        total_requests = sum(m['requests'] for m in request_metrics.values())
        total_errors = sum(m['errors'] for m in request_metrics.values())

        return {
            'total_requests': total_requests,
            'total_errors': total_errors,
            'error_rate': (total_errors / max(total_requests, 1)) * 100,
            'resources': {name: dict(metrics) for name, metrics in request_metrics.items()},
            'logs_count': len(system_logs)
        }

    def get_backend_status(self):
        monitor = current_app.extensions.get('backend_monitor')
        if monitor is None:
            return {'status': 'unknown', 'url': current_app.config['BACKEND_URL'],
                    'last_check': None, 'uptime_seconds': 0}
        return monitor.get_status()

    def get_components(self):
        return registry.names()
