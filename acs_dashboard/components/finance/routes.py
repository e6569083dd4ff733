"""
Finance Routes
"""
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.api_client import proxy_download
from acs_dashboard.core.app_data import AppDataService
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.forms import InvoiceRequestForm, ValidationError, first_error, parse_form
from .service import FinanceService

finance_bp = Blueprint('finance', __name__)

service = FinanceService()
app_data = AppDataService()


@finance_bp.route('/finance')
@login_required
def finance_page():
    query = request.args.get('q', '')
    status = request.args.get('status', 'all')
    data = app_data.fetch()

    options = {'clients': [], 'projects': []}
    try:
        options = service.invoice_options()
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load invoice options', 'error')

    return render_template(
        'finance/index.html',
        summary=service.summary(data),
        transactions=service.transactions(data, query, status),
        invoice_options=options,
        categories=current_app.config['INVOICE_CATEGORIES'],
        file_types=current_app.config['FINANCIAL_FILE_TYPES'],
        query=query,
        status=status,
    )


@finance_bp.route('/finance/invoices', methods=['POST'])
@login_required
def generate_invoice():
    try:
        form = parse_form(InvoiceRequestForm, request.form)
        upstream = service.generate_invoice(form)
    except ValidationError as e:
        flash(first_error(e), 'error')
        return redirect(url_for('finance.finance_page'))
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to generate invoice', 'error')
        return redirect(url_for('finance.finance_page'))

    return proxy_download(upstream, filename=service.invoice_filename(form))


def init_finance(app):
    """Initialize finance component with Flask app"""
    app.register_blueprint(finance_bp)
    return finance_bp
