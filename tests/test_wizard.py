import pytest

from acs_dashboard.core.wizard import ImportWizard

RESPONSE = {
    'sessionId': 42,
    'uploadResult': {
        'processed': 3, 'saved': 1, 'updated': 0, 'warnings': 1, 'errors': 1,
        'rowResults': [
            {'rowNumber': 2, 'status': 'OK', 'rowData': {'siteName': 'Andheri'}},
            {'rowNumber': 3, 'status': 'WARN', 'rowData': {'siteName': 'Bandra'}, 'messages': ['Duplicate']},
            {'rowNumber': 4, 'status': 'ERROR', 'rowData': {'siteName': ''}, 'messages': ['Name required']},
        ],
    },
}


@pytest.fixture
def wizard():
    wizard = ImportWizard('installations')
    wizard.load_response(RESPONSE, 'bookings.csv')
    return wizard


def test_load_response_enters_summary(wizard):
    assert wizard.step == 'summary'
    assert wizard.session_id == 42
    assert wizard.result == {'processed': 3, 'saved': 1, 'updated': 0, 'warnings': 1, 'errors': 1}
    assert all(row['editedData'] == row['rowData'] and not row['isEditing'] for row in wizard.rows)


def test_edited_data_is_a_copy(wizard):
    wizard.update_field(4, 'siteName', 'Colaba')
    assert wizard.rows[2]['editedData']['siteName'] == 'Colaba'
    assert wizard.rows[2]['rowData']['siteName'] == ''


def test_tabs_and_counts(wizard):
    assert wizard.counts() == {'all': 3, 'success': 1, 'warnings': 1, 'errors': 1}
    wizard.select_tab('errors')
    assert [row['rowNumber'] for row in wizard.filtered_rows()] == [4]
    wizard.select_tab('bogus')
    assert wizard.active_tab == 'all'


def test_toggle_and_remove(wizard):
    wizard.toggle_edit(3)
    assert wizard.rows[1]['isEditing'] is True
    wizard.remove_row(3)
    assert [row['rowNumber'] for row in wizard.rows] == [2, 4]
    with pytest.raises(KeyError):
        wizard.remove_row(3)


def test_corrections_cover_failed_rows(wizard):
    wizard.update_field(4, 'siteName', 'Colaba')
    assert wizard.corrections() == {'3': {'siteName': 'Bandra'}, '4': {'siteName': 'Colaba'}}


def test_summary_message(wizard):
    assert wizard.summary_message() == ('warning', 'Import completed with 1 error(s). Review below.')
    wizard.result['errors'] = 0
    assert wizard.summary_message() == ('success', 'Import successful! 1 created, 0 updated.')


def test_state_survives_the_store(wizard):
    store = {}
    wizard.toggle_edit(2)
    wizard.save(store)
    restored = ImportWizard.load(store, 'installations')
    assert restored.to_dict() == wizard.to_dict()

    restored.discard(store)
    assert ImportWizard.load(store, 'installations').step == 'upload'
