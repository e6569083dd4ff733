from datetime import date

from acs_dashboard.components.audit.routes import service
from acs_dashboard.components.audit.service import performer_name

from tests.conftest import flashes

ENTRIES = [
    {'id': 1, 'action': 'CREATE', 'entityTable': 'clients', 'entityId': '7', 'description': 'Created client',
     'performedBy': {'username': 'asha', 'firstName': 'Asha', 'lastName': 'Rao'}, 'performedAt': '2024-06-01T10:00:00',
     'ipAddress': '10.0.0.1', 'status': 'SUCCESS', 'revertable': True, 'reverted': False},
    {'id': 2, 'action': 'DELETE', 'entityTable': 'sites', 'entityId': '3', 'description': 'Removed site',
     'performedBy': {'username': 'ravi'}, 'performedAt': '2024-06-02T11:00:00', 'status': 'FAILED',
     'revertable': False, 'reverted': True},
]

PAGE = {'content': ENTRIES, 'totalElements': 60, 'totalPages': 3}


def test_performer_name():
    assert performer_name(ENTRIES[0]) == 'Asha Rao'
    assert performer_name(ENTRIES[1]) == 'ravi'
    assert performer_name({}) == 'system'


def test_query_params_skip_all(app):
    with app.app_context():
        assert service.query_params(2, action='DELETE', status='all') == {'page': 2, 'size': 25, 'action': 'DELETE'}


def test_audit_log_page(client, backend):
    backend.on('GET', '/audit/logs', PAGE)
    backend.on('GET', '/audit/filters', {'entityTables': ['clients', 'sites'], 'actions': ['CREATE', 'DELETE']})

    response = client.get('/audit?page=1&action=DELETE&q=ravi')
    assert response.status_code == 200
    assert backend.called('GET', '/audit/logs')[0]['params'] == {'page': 1, 'size': 25, 'action': 'DELETE'}
    assert b'Removed site' in response.data
    assert b'Created client' not in response.data
    assert b'Page 2 of 3' in response.data


def test_audit_log_falls_back_to_legacy_log(client, backend):
    backend.fail('GET', '/audit/logs', 'Not found', status_code=404)
    backend.fail('GET', '/audit/filters', 'Not found', status_code=404)
    backend.on('GET', '/admin/logs', ENTRIES)

    response = client.get('/audit')
    assert response.status_code == 200
    assert b'Created client' in response.data
    assert b'Removed site' in response.data


def test_entry_detail_and_history(client, backend):
    backend.on('GET', '/audit/logs/1', dict(ENTRIES[0], oldData=None, newData='{"name":"Reliance"}'))
    response = client.get('/audit/1')
    assert response.status_code == 200
    assert b'&#34;name&#34;: &#34;Reliance&#34;' in response.data

    backend.on('GET', '/audit/entity/clients/7/history', ENTRIES[:1])
    response = client.get('/audit/entity/clients/7/history')
    assert b'History of clients #7' in response.data


def test_revert_reports_cascade(client, backend):
    backend.on('POST', '/audit/logs/1/revert', {'cascadeRevertedCount': 2})
    response = client.post('/audit/1/revert')
    assert response.headers['Location'].endswith('/audit')
    assert ('success', 'Revert successful! 2 dependent action(s) were also reverted.') in flashes(client)


def test_revert_failure(client, backend):
    backend.fail('POST', '/audit/logs/2/revert', 'Entry already reverted', status_code=409)
    client.post('/audit/2/revert')
    assert ('error', 'Revert failed: Entry already reverted') in flashes(client)


def test_csv_export(client, backend):
    backend.on('GET', '/audit/logs', PAGE)
    response = client.get('/audit/export.csv?entityTable=clients')

    assert backend.called('GET', '/audit/logs')[0]['params'] == {'page': 0, 'size': 10000, 'entityTable': 'clients'}
    assert response.mimetype == 'text/csv'
    assert f'audit_log_{date.today().isoformat()}.csv' in response.headers['Content-Disposition']

    lines = response.data.decode().splitlines()
    assert lines[0] == 'ID,Timestamp,Action,Entity,Entity ID,Description,User,IP,Status,Revertable,Reverted'
    assert lines[1] == '1,2024-06-01T10:00:00,CREATE,clients,7,Created client,asha,10.0.0.1,SUCCESS,true,false'
    assert lines[2].endswith('FAILED,false,true')
