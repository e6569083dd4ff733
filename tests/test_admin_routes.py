from tests.conftest import flashes

USERS = [
    {'id': 1, 'name': 'Asha Rao', 'email': 'asha@example.com', 'role': 'ADMIN', 'status': 'ACTIVE'},
    {'id': 2, 'name': 'Ravi Kumar', 'email': 'ravi@example.com', 'role': 'OPERATOR', 'status': 'INACTIVE'},
]


def test_user_list(client, backend):
    backend.on('GET', '/admin/users', USERS)
    backend.on('GET', '/admin/roles', [{'name': 'ADMIN'}, {'name': 'OPERATOR'}])
    response = client.get('/admin/users?role=OPERATOR')
    assert response.status_code == 200
    assert b'ravi@example.com' in response.data
    assert b'asha@example.com' not in response.data


def test_create_user(client, backend):
    client.post('/admin/users', data={'name': 'Meera Shah', 'email': 'meera@example.com', 'role': 'OPERATOR',
                                      'department': 'Field Ops', 'sendInvite': 'on'})
    assert backend.called('POST', '/admin/users')[0]['json'] == {
        'name': 'Meera Shah', 'email': 'meera@example.com', 'role': 'OPERATOR', 'department': 'Field Ops',
        'sendInvite': True, 'requirePasswordReset': False}
    assert ('success', 'User Meera Shah created successfully. Invitation email sent.') in flashes(client)


def test_edit_user(client, backend):
    client.post('/admin/users/2/edit', data={'name': 'Ravi K', 'email': 'ravi@example.com', 'role': 'ADMIN'})
    assert backend.called('PUT', '/admin/users/2')[0]['json'] == {
        'name': 'Ravi K', 'email': 'ravi@example.com', 'role': 'ADMIN'}


def test_toggle_user(client, backend):
    client.post('/admin/users/2/toggle-active', data={'status': 'INACTIVE', 'name': 'Ravi Kumar'})
    assert backend.called('PATCH', '/admin/users/2/activate')
    assert ('success', 'Ravi Kumar has been activated successfully.') in flashes(client)


def test_manual_password_reset(client, backend):
    backend.on('POST', '/admin/users/2/reset-password', {'temporaryPassword': 'Tmp#1234'})
    client.post('/admin/users/2/reset-password', data={'method': 'manual'})
    assert backend.called('POST', '/admin/users/2/reset-password')[0]['json'] == {'method': 'manual'}
    assert ('success', 'Temporary password: Tmp#1234') in flashes(client)


def test_unknown_reset_method(client, backend):
    client.post('/admin/users/2/reset-password', data={'method': 'sms'})
    assert backend.calls == []
    assert ('error', 'Unknown reset method: sms') in flashes(client)


def test_delete_user_failure(client, backend):
    backend.fail('DELETE', '/admin/users/1', 'Cannot delete yourself', status_code=400)
    client.post('/admin/users/1/delete')
    assert ('error', 'Cannot delete yourself') in flashes(client)
