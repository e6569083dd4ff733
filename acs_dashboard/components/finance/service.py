"""
Finance Service
"""
from flask import current_app

from acs_dashboard.components import register_component
from acs_dashboard.core import add_log, get_backend
from acs_dashboard.core import derivations
from acs_dashboard.core.filtering import filter_equals, search

TRANSACTION_SEARCH = ('invoiceNumber', 'transactionRef', 'siteName')


@register_component('finance')
class FinanceService:
    """Service for the Finance component"""

    def summary(self, data):
        summary = derivations.finance_summary(data['finance'], current_app.config['COLLECTION_RATE_ESTIMATE'])
        summary['profitBarWidth'] = derivations.profit_bar_width(summary['profitMargin'])
        return summary

    def transactions(self, data, query='', status='all', today=None):
        transactions = search(data['financialTransactions'], query, TRANSACTION_SEARCH)
        for transaction in transactions:
            transaction['derivedStatus'] = derivations.transaction_status(transaction, today)
        return filter_equals(transactions, 'derivedStatus', status)

    def invoice_options(self):
        """Clients and projects (with subprojects) for the invoice form"""
        backend = get_backend()
        projects = backend.get('/projects') or []
        for project in projects:
            if project.get('subprojects') is None:
                project['subprojects'] = backend.get(f"/projects/{project['id']}/subprojects") or []
        return {'clients': backend.get('/clients') or [], 'projects': projects}

    def generate_invoice(self, form):
        """Ask the backend for an invoice workbook; returns the streamed response"""
        response = get_backend().post_raw('/finance/generate-invoice', json=form.to_payload())
        add_log('INFO', f'Invoice generated for {form.billing_month} '
                        f'({len(form.subproject_ids)} subproject(s))')
        return response

    def invoice_filename(self, form):
        return f'invoice_{form.client_id}_{form.billing_month}.xlsx'
