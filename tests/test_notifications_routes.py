from acs_dashboard.components.notifications.service import heading

from tests.conftest import flashes

NOTIFICATIONS = [
    {'id': 5, 'message': 'Site Andheri went live', 'createdAt': '2024-06-01T10:00:00'},
    {'id': 6, 'message': 'Invoice INV-002 is overdue', 'createdAt': '2024-06-02T10:00:00'},
]


def test_heading():
    assert heading(0) == "You're all caught up"
    assert heading(1) == '1 unread notification'
    assert heading(3) == '3 unread notifications'


def test_notification_list(client, backend):
    backend.on('GET', '/notifications/unread/asha', NOTIFICATIONS)
    response = client.get('/notifications')
    assert b'2 unread notifications' in response.data
    assert b'Invoice INV-002 is overdue' in response.data


def test_mark_read(client, backend):
    client.post('/notifications/5/read')
    assert backend.called('POST', '/notifications/5/read')


def test_mark_all_read(client, backend):
    client.post('/notifications/read-all')
    assert backend.called('POST', '/notifications/read-all/asha')
    assert ('success', 'All notifications marked as read') in flashes(client)


def test_api_notifications(client, backend):
    backend.on('GET', '/notifications/unread/asha', NOTIFICATIONS[:1])
    data = client.get('/api/notifications').get_json()
    assert data['heading'] == '1 unread notification'
    assert data['notifications'][0]['id'] == 5
