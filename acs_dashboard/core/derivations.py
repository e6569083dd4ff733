"""
Display-only derivations over backend payloads

Nothing here changes data: timelines, contract progress and finance figures
are computed from already-normalized API responses for rendering.
"""
import calendar
from datetime import date, timedelta

from .formatting import parse_date

STAGES = ('Started', 'WTS', 'WIP', 'TIS', 'Installed', 'Live')

STAGE_LABELS = {
    'Started': 'Project Started',
    'WTS': 'Work To Start',
    'WIP': 'Work In Progress',
    'TIS': 'Testing In Service',
    'Installed': 'Installation Complete',
    'Live': 'Site is Live',
}

ACTION_TONES = {
    'CREATE': 'success',
    'UPDATE': 'info',
    'DELETE': 'error',
    'ACTIVATE': 'success',
    'DEACTIVATE': 'warning',
    'LOGIN_SUCCESS': 'success',
    'LOGIN_FAILED': 'error',
    'LOGIN_PENDING': 'warning',
    'REGISTER': 'accent',
    'APPROVE': 'success',
    'DECLINE': 'error',
    'IMPORT': 'accent',
    'FILE_UPLOAD': 'info',
    'FILE_DELETE': 'error',
    'REVERT': 'warning',
    'CHANGE_PASSWORD': 'accent',
}


def _today(today):
    return today or date.today()


def normalize_stage(stage):
    """Match a backend stage name case-insensitively, None if unknown"""
    if not stage:
        return None
    for known in STAGES:
        if known.lower() == str(stage).strip().lower():
            return known
    return None


def build_site_timeline(site):
    """One event per stage, marked completed / current / upcoming"""
    current = normalize_stage(site.get('currentStage') or site.get('stage'))
    current_index = STAGES.index(current) if current else None

    events = []
    for index, stage in enumerate(STAGES):
        if current_index is None or index > current_index:
            status = 'upcoming'
        elif index == current_index:
            status = 'current'
        else:
            status = 'completed'

        event = {
            'id': str(index + 1),
            'stage': stage,
            'label': STAGE_LABELS[stage],
            'status': status,
            'date': None,
        }
        if status == 'current':
            event['date'] = site.get('stageChangedAt')
        if stage == 'Live' and site.get('actualLiveDate'):
            event['date'] = site['actualLiveDate']
        events.append(event)
    return events


def add_months(start, months):
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def rent_end_date(start, tenure_months):
    """Last rent day for a tenure starting on `start`"""
    start = parse_date(start)
    if start is None or not tenure_months:
        return None
    return add_months(start, int(tenure_months)) - timedelta(days=1)


def contract_progress(start, end, today=None):
    start, end = parse_date(start), parse_date(end)
    if start is None or end is None:
        return 0
    today = _today(today)
    if today < start:
        return 0
    if today > end:
        return 100
    span = (end - start).days
    if span <= 0:
        return 100
    return round((today - start).days / span * 100)


def days_remaining(end, today=None):
    end = parse_date(end)
    if end is None:
        return None
    return max((end - _today(today)).days, 0)


def contract_status(start, end, today=None, expiring_days=90):
    start, end = parse_date(start), parse_date(end)
    today = _today(today)
    if start is None or today < start:
        return 'not-started'
    if end is not None and today > end:
        return 'expired'
    if end is not None and (end - today).days <= expiring_days:
        return 'expiring-soon'
    return 'active'


def unit_contract(unit, tenure_months=None, today=None, expiring_days=90):
    """Contract figures for one ACS unit, end date derived from tenure when absent"""
    start = unit.get('rentStartDate') or unit.get('activationDate')
    tenure = unit.get('tenureMonths') or tenure_months
    end = unit.get('rentEndDate') or rent_end_date(start, tenure)
    return {
        'rentStartDate': parse_date(start),
        'rentEndDate': parse_date(end),
        'tenureMonths': tenure,
        'progress': contract_progress(start, end, today),
        'status': contract_status(start, end, today, expiring_days),
        'daysRemaining': days_remaining(end, today),
    }


def delay_days(expected, actual=None, today=None):
    expected = parse_date(expected)
    if expected is None:
        return 0
    reference = parse_date(actual) or _today(today)
    return max((reference - expected).days, 0)


def site_progress(site):
    if site.get('progress') is not None:
        return min(int(site['progress']), 100)
    planned = site.get('acsPlanned') or site.get('plannedAcsCount') or 0
    installed = site.get('acsInstalled') or 0
    if not planned:
        return 0
    return min(round(installed / planned * 100), 100)


def finance_summary(finance, collection_rate=0.9):
    """Headline figures for the finance page"""
    finance = finance or {}
    revenue = finance.get('monthlyRevenue') or 0
    costs = (finance.get('totalMaintenanceCost') or 0) + (finance.get('totalInstallationCost') or 0)
    net = finance.get('netProfit')
    if net is None:
        net = revenue - costs

    collected = finance.get('collected')
    if collected is None:
        collected = revenue * collection_rate if revenue > 0 else 0
    outstanding = finance.get('outstanding')
    if outstanding is None:
        outstanding = revenue - collected

    return {
        'monthlyRevenue': revenue,
        'costs': costs,
        'netProfit': net,
        'collected': collected,
        'outstanding': outstanding,
        'profitMargin': round(net / revenue * 100, 1) if revenue > 0 else 0,
    }


def profit_bar_width(margin):
    return min(abs(margin or 0), 100)


def transaction_status(transaction, today=None):
    payment_status = (transaction.get('paymentStatus') or '').upper()
    if payment_status == 'PAID':
        return 'Paid'
    due = parse_date(transaction.get('dueDate'))
    if payment_status == 'OVERDUE' or (due is not None and due < _today(today)):
        return 'Overdue'
    return 'Pending'


def dashboard_alerts(sites, today=None):
    """Delayed sites, most delayed first"""
    alerts = []
    for site in sites:
        if not site.get('hasDelay'):
            continue
        days = site.get('delayDays')
        if days is None:
            days = delay_days(site.get('expectedLiveDate'), site.get('actualLiveDate'), today)
        if days >= 7:
            severity = 'high'
        elif days >= 3:
            severity = 'medium'
        else:
            severity = 'low'
        alerts.append({
            'name': site.get('name'),
            'siteId': site.get('id'),
            'issue': f'{days} days delayed' if days else 'Delayed',
            'days': days,
            'severity': severity,
        })
    return sorted(alerts, key=lambda alert: alert['days'], reverse=True)


def action_tone(action):
    return ACTION_TONES.get(action, 'neutral')


def status_tone(status):
    if not status:
        return 'neutral'
    return {'SUCCESS': 'success', 'FAILED': 'error'}.get(status.upper(), 'neutral')
