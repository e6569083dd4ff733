"""
Operations Service

Read views over the aggregated application data: sites, ACS assets,
installations and maintenance tickets. All derived figures are computed
here for display only.
"""
from flask import current_app

from acs_dashboard.components import register_component
from acs_dashboard.core import add_log, get_backend
from acs_dashboard.core import derivations
from acs_dashboard.core.app_data import AppDataService
from acs_dashboard.core.filtering import apply_filters, count_by, filter_equals

SITE_SEARCH = ('name', 'siteCode', 'clientName')
ASSET_SEARCH = ('serialNumber', 'model', 'manufacturer', 'siteName')
INSTALLATION_SEARCH = ('siteName', 'acAssetSerial', 'bookingId')
TICKET_SEARCH = ('title', 'siteName', 'acAssetSerial')

OPEN_TICKET_STATUSES = ('OPEN', 'IN_PROGRESS', 'ASSIGNED')


def _same(left, right):
    return left is not None and str(left) == str(right)


@register_component('operations')
class OperationsService:
    """Service for sites, assets, installations and maintenance"""

    def __init__(self):
        self.app_data = AppDataService()

    # Sites

    def sites(self, data, query='', stage='all', delay='all'):
        sites = apply_filters(data['sites'], query, SITE_SEARCH)
        if stage != 'all':
            wanted = derivations.normalize_stage(stage)
            sites = [s for s in sites
                     if derivations.normalize_stage(s.get('currentStage') or s.get('stage')) == wanted]
        if delay == 'delayed':
            sites = [s for s in sites if s.get('hasDelay')]
        elif delay == 'on-track':
            sites = [s for s in sites if not s.get('hasDelay')]

        for site in sites:
            site['progressPercent'] = derivations.site_progress(site)
        return sites

    def site_detail(self, data, site_id, today=None):
        site = next((s for s in data['sites'] if _same(s.get('id'), site_id)), None)
        if site is None:
            return None

        expiring_days = current_app.config['CONTRACT_EXPIRING_DAYS']
        units = [a for a in data['assets'] if _same(a.get('siteId'), site_id)]
        for unit in units:
            unit['contract'] = derivations.unit_contract(
                unit, site.get('configuredTenure'), today, expiring_days)

        tickets = [t for t in data['maintenanceTickets'] if _same(t.get('siteId'), site_id)]
        installations = [i for i in data['installations'] if _same(i.get('siteId'), site_id)]

        return {
            'site': site,
            'timeline': derivations.build_site_timeline(site),
            'progress': derivations.site_progress(site),
            'delayDays': site.get('delayDays') if site.get('delayDays') is not None else derivations.delay_days(
                site.get('expectedLiveDate'), site.get('actualLiveDate'), today),
            'units': units,
            'installations': installations,
            'tickets': tickets,
            'finance': self.site_finance(site, units, tickets),
        }

    def site_finance(self, site, units, tickets):
        """Rent and maintenance snapshot for one site"""
        monthly_rent = sum(u.get('monthlyRent') or 0 for u in units)
        if not monthly_rent and site.get('configuredRent'):
            monthly_rent = site['configuredRent'] * len(units)
        maintenance_cost = sum(t.get('visitingCharge') or 0 for t in tickets)
        return {
            'monthlyRent': monthly_rent,
            'maintenanceCost': maintenance_cost,
            'units': len(units),
            'openTickets': sum(1 for t in tickets if str(t.get('status', '')).upper() in OPEN_TICKET_STATUSES),
        }

    # Assets

    def assets(self, data, query='', status='all'):
        return apply_filters(data['assets'], query, ASSET_SEARCH, status=status)

    def asset_detail(self, data, asset_id, today=None):
        asset = next((a for a in data['assets'] if _same(a.get('id'), asset_id)), None)
        if asset is None:
            return None

        installation = next(
            (i for i in data['installations'] if _same(i.get('acAssetId'), asset_id)), None)
        tickets = [t for t in data['maintenanceTickets'] if _same(t.get('acAssetId'), asset_id)]
        return {
            'asset': asset,
            'installation': installation,
            'tickets': tickets,
            'warrantyDaysLeft': derivations.days_remaining(asset.get('warrantyExpiryDate'), today),
            'contract': derivations.unit_contract(
                asset, today=today, expiring_days=current_app.config['CONTRACT_EXPIRING_DAYS']),
        }

    # Installations

    def installations(self, data, query='', shipment='all'):
        return apply_filters(data['installations'], query, INSTALLATION_SEARCH, shipmentStatus=shipment)

    # Maintenance

    def tickets(self, data, query='', status='all', priority='all'):
        tickets = apply_filters(data['maintenanceTickets'], query, TICKET_SEARCH)
        tickets = filter_equals(tickets, 'status', status)
        return filter_equals(tickets, 'priority', priority)

    def ticket_counts(self, data):
        counts = count_by(data['maintenanceTickets'], 'status')
        counts['total'] = len(data['maintenanceTickets'])
        return counts

    def create_ticket(self, form):
        ticket = get_backend().post('/maintenance/tickets', json=form.to_payload())
        self.app_data.forget()
        add_log('INFO', f'Maintenance ticket "{form.title}" raised for site {form.site_id}')
        return ticket
