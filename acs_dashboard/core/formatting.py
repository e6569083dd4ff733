"""
Presentation formatting helpers

All of these are registered as Jinja filters by the app factory.
"""
import json
from datetime import date, datetime

RUPEE = '₹'
LAKH = 100000
CRORE = 10000000


def group_indian(number):
    """Group digits the Indian way: 1234567 -> 12,34,567"""
    number = int(round(number or 0))
    sign = '-' if number < 0 else ''
    digits = str(abs(number))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ','.join(groups + [tail])


def format_inr(amount):
    """Full rupee amount without decimals"""
    return f'{RUPEE}{group_indian(amount or 0)}'


def format_currency_short(amount):
    """Compact rupee amount used on cards: Cr, L or grouped"""
    amount = amount or 0
    if abs(amount) >= CRORE:
        return f'{RUPEE}{amount / CRORE:.2f}Cr'
    if abs(amount) >= LAKH:
        return f'{RUPEE}{amount / LAKH:.1f}L'
    return f'{RUPEE}{group_indian(amount)}'


def format_file_size(size):
    if size < 1024:
        return f'{size} B'
    if size < 1024 * 1024:
        return f'{size / 1024:.1f} KB'
    return f'{size / (1024 * 1024):.1f} MB'


def parse_datetime(value):
    """Parse an ISO date or datetime string from the backend, None if invalid"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value):
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def format_datetime(value):
    if not value:
        return '-'
    parsed = parse_datetime(value)
    if parsed is None:
        return str(value)
    return parsed.strftime('%d %b %Y, %H:%M:%S')


def format_date(value):
    if not value:
        return '-'
    parsed = parse_datetime(value)
    if parsed is None:
        return str(value)
    return parsed.strftime('%b %d, %Y')


def pretty_json(text):
    """Re-indent a JSON document, returning the input untouched if invalid"""
    if not text:
        return ''
    try:
        return json.dumps(json.loads(text), indent=2)
    except (TypeError, ValueError):
        return text


def initials(name):
    parts = (name or '').split()
    return ''.join(part[0] for part in parts[:2]).upper()


def humanize_key(key):
    return str(key).replace('_', ' ')


FILTERS = {
    'inr': format_inr,
    'currency_short': format_currency_short,
    'file_size': format_file_size,
    'datetime': format_datetime,
    'date': format_date,
    'pretty_json': pretty_json,
    'initials': initials,
    'humanize_key': humanize_key,
}


def register_filters(app):
    """Register formatting helpers as Jinja filters"""
    app.jinja_env.filters.update(FILTERS)
