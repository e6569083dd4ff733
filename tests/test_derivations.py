from datetime import date

from acs_dashboard.core import derivations

TODAY = date(2024, 6, 15)


def test_normalize_stage_is_case_insensitive():
    assert derivations.normalize_stage('wip') == 'WIP'
    assert derivations.normalize_stage(' live ') == 'Live'
    assert derivations.normalize_stage('unknown') is None


def test_timeline_marks_stages_relative_to_current():
    timeline = derivations.build_site_timeline({'currentStage': 'wip', 'stageChangedAt': '2024-05-01'})
    assert [e['status'] for e in timeline] == [
        'completed', 'completed', 'current', 'upcoming', 'upcoming', 'upcoming']
    assert timeline[2]['date'] == '2024-05-01'


def test_timeline_without_stage_is_all_upcoming():
    timeline = derivations.build_site_timeline({})
    assert {e['status'] for e in timeline} == {'upcoming'}


def test_live_stage_carries_the_go_live_date():
    timeline = derivations.build_site_timeline({'currentStage': 'Live', 'actualLiveDate': '2024-04-10'})
    assert timeline[-1]['status'] == 'current'
    assert timeline[-1]['date'] == '2024-04-10'


def test_rent_end_date_clamps_month_end():
    assert derivations.rent_end_date('2024-01-31', 1) == date(2024, 2, 28)
    assert derivations.rent_end_date('2024-01-01', 12) == date(2024, 12, 31)
    assert derivations.rent_end_date(None, 12) is None


def test_contract_progress_and_status():
    assert derivations.contract_progress('2024-01-01', '2024-12-31', TODAY) == 45
    assert derivations.contract_progress('2025-01-01', '2025-12-31', TODAY) == 0
    assert derivations.contract_progress('2023-01-01', '2023-12-31', TODAY) == 100

    assert derivations.contract_status('2025-01-01', '2025-12-31', TODAY) == 'not-started'
    assert derivations.contract_status('2023-01-01', '2023-12-31', TODAY) == 'expired'
    assert derivations.contract_status('2024-01-01', '2024-07-31', TODAY) == 'expiring-soon'
    assert derivations.contract_status('2024-01-01', '2025-12-31', TODAY) == 'active'


def test_unit_contract_derives_end_from_tenure():
    contract = derivations.unit_contract({'rentStartDate': '2024-01-01'}, tenure_months=24, today=TODAY)
    assert contract['rentEndDate'] == date(2025, 12, 31)
    assert contract['status'] == 'active'
    assert contract['daysRemaining'] == (date(2025, 12, 31) - TODAY).days


def test_delay_days():
    assert derivations.delay_days('2024-06-10', today=TODAY) == 5
    assert derivations.delay_days('2024-06-10', '2024-06-12', TODAY) == 2
    assert derivations.delay_days('2024-07-01', today=TODAY) == 0


def test_site_progress():
    assert derivations.site_progress({'acsPlanned': 4, 'acsInstalled': 3}) == 75
    assert derivations.site_progress({'progress': 140}) == 100
    assert derivations.site_progress({}) == 0


def test_finance_summary_estimates_collections():
    summary = derivations.finance_summary(
        {'monthlyRevenue': 100000, 'totalMaintenanceCost': 10000, 'totalInstallationCost': 20000})
    assert summary['netProfit'] == 70000
    assert summary['collected'] == 90000
    assert summary['outstanding'] == 10000
    assert summary['profitMargin'] == 70.0


def test_finance_summary_without_revenue():
    summary = derivations.finance_summary({})
    assert summary['profitMargin'] == 0
    assert summary['collected'] == 0


def test_profit_bar_width_is_capped():
    assert derivations.profit_bar_width(-35.5) == 35.5
    assert derivations.profit_bar_width(250) == 100


def test_transaction_status():
    assert derivations.transaction_status({'paymentStatus': 'paid', 'dueDate': '2024-01-01'}, TODAY) == 'Paid'
    assert derivations.transaction_status({'paymentStatus': 'PENDING', 'dueDate': '2024-06-01'}, TODAY) == 'Overdue'
    assert derivations.transaction_status({'paymentStatus': 'PENDING', 'dueDate': '2024-07-01'}, TODAY) == 'Pending'


def test_dashboard_alerts_sorted_by_delay():
    sites = [
        {'id': 1, 'name': 'Andheri', 'hasDelay': True, 'delayDays': 2},
        {'id': 2, 'name': 'Bandra', 'hasDelay': True, 'delayDays': 9},
        {'id': 3, 'name': 'Colaba', 'hasDelay': False, 'delayDays': 30},
        {'id': 4, 'name': 'Dadar', 'hasDelay': True, 'expectedLiveDate': '2024-06-11'},
    ]
    alerts = derivations.dashboard_alerts(sites, TODAY)
    assert [a['name'] for a in alerts] == ['Bandra', 'Dadar', 'Andheri']
    assert [a['severity'] for a in alerts] == ['high', 'medium', 'low']
    assert alerts[0]['issue'] == '9 days delayed'


def test_tones():
    assert derivations.action_tone('DELETE') == 'error'
    assert derivations.action_tone('SOMETHING') == 'neutral'
    assert derivations.status_tone('failed') == 'error'
    assert derivations.status_tone(None) == 'neutral'
