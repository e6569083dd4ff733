"""
Client-side search and filters over already-fetched collections
"""
from collections import Counter


def resolve(item, path):
    """Read a dotted path ("performedBy.username") out of nested dicts"""
    value = item
    for part in path.split('.'):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def search(items, query, fields):
    query = (query or '').strip().lower()
    if not query:
        return list(items)
    return [
        item for item in items
        if any(query in str(resolve(item, field) or '').lower() for field in fields)
    ]


def filter_equals(items, field, value):
    if value in (None, '', 'all'):
        return list(items)
    return [item for item in items if str(resolve(item, field)) == str(value)]


def apply_filters(items, query='', fields=(), **equals):
    """Search then narrow by exact-match filters; "all" disables a filter"""
    result = search(items, query, fields)
    for field, value in equals.items():
        result = filter_equals(result, field, value)
    return result


def count_by(items, field):
    return dict(Counter(resolve(item, field) for item in items))
