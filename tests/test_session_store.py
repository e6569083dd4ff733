from acs_dashboard.core.auth import SessionStore


def test_oldest_session_is_dropped_when_full():
    store = SessionStore(max_sessions=2)
    store['a'] = {'n': 1}
    store['b'] = {'n': 2}
    store['c'] = {'n': 3}
    assert list(store) == ['b', 'c']


def test_touch_keeps_session_alive():
    store = SessionStore(max_sessions=2)
    store['a'] = {}
    store['b'] = {}
    assert store.touch('a') == {}
    store['c'] = {}
    assert list(store) == ['a', 'c']


def test_touch_missing_session():
    store = SessionStore(max_sessions=2)
    assert store.touch('nope') is None
    assert len(store) == 0
