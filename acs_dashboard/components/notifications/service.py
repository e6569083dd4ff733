"""
Notifications Service
"""
from acs_dashboard.components import register_component
from acs_dashboard.core import get_backend


def heading(count):
    if not count:
        return "You're all caught up"
    return f"{count} unread notification{'s' if count > 1 else ''}"


@register_component('notifications')
class NotificationsService:
    """Service for the Notifications component"""

    def unread(self, username):
        if not username:
            return []
        return get_backend().get(f'/notifications/unread/{username}') or []

    def mark_read(self, notification_id):
        get_backend().post(f'/notifications/{notification_id}/read')

    def mark_all_read(self, username):
        get_backend().post(f'/notifications/read-all/{username}')
