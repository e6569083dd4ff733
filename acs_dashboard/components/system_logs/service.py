"""
System Logs Service
"""

from acs_dashboard.components import register_component


@register_component('system_logs')
class SystemLogsService:
    """Service for System Logs component

    Reads the shared activity log kept in acs_dashboard.core
    """

    def get_logs(self, level_filter='ALL', limit=50):
        """Get activity log entries, newest last"""
        from acs_dashboard.core import system_logs

        logs = list(system_logs)

        if level_filter != 'ALL':
            logs = [log for log in logs if log.get('level') == level_filter]

        if limit and len(logs) > limit:
            logs = logs[-limit:]

        return logs

    def recent_activity(self, limit=8):
        """Newest entries first, for the dashboard feed"""
        return list(reversed(self.get_logs(limit=limit)))
