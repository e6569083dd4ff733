from datetime import date

from acs_dashboard.core import formatting


def test_group_indian_uses_lakh_grouping():
    assert formatting.group_indian(999) == '999'
    assert formatting.group_indian(1234567) == '12,34,567'
    assert formatting.group_indian(-123456) == '-1,23,456'


def test_format_inr():
    assert formatting.format_inr(250000) == '₹2,50,000'
    assert formatting.format_inr(None) == '₹0'


def test_format_currency_short_thresholds():
    assert formatting.format_currency_short(25000000) == '₹2.50Cr'
    assert formatting.format_currency_short(150000) == '₹1.5L'
    assert formatting.format_currency_short(99999) == '₹99,999'


def test_format_file_size():
    assert formatting.format_file_size(512) == '512 B'
    assert formatting.format_file_size(2048) == '2.0 KB'
    assert formatting.format_file_size(3 * 1024 * 1024) == '3.0 MB'


def test_dates_accept_iso_strings_with_zulu_suffix():
    assert formatting.format_date('2024-03-05T10:00:00Z') == 'Mar 05, 2024'
    assert formatting.format_datetime('2024-03-05T10:11:12') == '05 Mar 2024, 10:11:12'
    assert formatting.parse_date('2024-03-05') == date(2024, 3, 5)


def test_invalid_dates_are_shown_as_is():
    assert formatting.parse_datetime('yesterday') is None
    assert formatting.format_date('yesterday') == 'yesterday'
    assert formatting.format_date(None) == '-'


def test_pretty_json():
    assert formatting.pretty_json('{"a":1}') == '{\n  "a": 1\n}'
    assert formatting.pretty_json('not json') == 'not json'
    assert formatting.pretty_json(None) == ''


def test_initials_and_keys():
    assert formatting.initials('asha rao kumar') == 'AR'
    assert formatting.initials(None) == ''
    assert formatting.humanize_key('extra_materials') == 'extra materials'
