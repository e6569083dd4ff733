from acs_dashboard.core.filtering import apply_filters, count_by, filter_equals, resolve, search

ENTRIES = [
    {'id': 1, 'action': 'CREATE', 'performedBy': {'username': 'asha'}},
    {'id': 2, 'action': 'DELETE', 'performedBy': {'username': 'ravi'}},
    {'id': 3, 'action': 'CREATE', 'performedBy': None},
]


def test_resolve_reads_nested_paths():
    assert resolve(ENTRIES[0], 'performedBy.username') == 'asha'
    assert resolve(ENTRIES[2], 'performedBy.username') is None


def test_search_is_case_insensitive_over_fields():
    assert [e['id'] for e in search(ENTRIES, 'RAVI', ('performedBy.username',))] == [2]
    assert len(search(ENTRIES, '  ', ('action',))) == 3


def test_all_disables_a_filter():
    assert len(filter_equals(ENTRIES, 'action', 'all')) == 3
    assert [e['id'] for e in filter_equals(ENTRIES, 'action', 'CREATE')] == [1, 3]


def test_apply_filters_combines_search_and_equality():
    result = apply_filters(ENTRIES, 'asha', ('performedBy.username',), action='CREATE')
    assert [e['id'] for e in result] == [1]


def test_count_by():
    assert count_by(ENTRIES, 'action') == {'CREATE': 2, 'DELETE': 1}
