"""
Operations Routes
"""
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.derivations import STAGES
from acs_dashboard.core.forms import TicketForm, ValidationError, first_error, parse_form
from .service import OperationsService

operations_bp = Blueprint('operations', __name__)

service = OperationsService()


@operations_bp.route('/sites')
@login_required
def site_list():
    query = request.args.get('q', '')
    stage = request.args.get('stage', 'all')
    delay = request.args.get('delay', 'all')
    data = service.app_data.fetch()

    return render_template(
        'operations/sites.html',
        sites=service.sites(data, query, stage, delay),
        stages=STAGES,
        query=query,
        stage=stage,
        delay=delay,
    )


@operations_bp.route('/sites/<site_id>')
@login_required
def site_detail(site_id):
    detail = service.site_detail(service.app_data.fetch(), site_id)
    if detail is None:
        flash('Site not found', 'error')
        return redirect(url_for('operations.site_list'))
    return render_template('operations/site_detail.html', **detail)


@operations_bp.route('/assets')
@login_required
def asset_list():
    query = request.args.get('q', '')
    status = request.args.get('status', 'all')
    data = service.app_data.fetch()

    return render_template(
        'operations/assets.html',
        assets=service.assets(data, query, status),
        statuses=sorted({a.get('status') for a in data['assets'] if a.get('status')}),
        query=query,
        status=status,
    )


@operations_bp.route('/assets/<asset_id>')
@login_required
def asset_detail(asset_id):
    detail = service.asset_detail(service.app_data.fetch(), asset_id)
    if detail is None:
        flash('Asset not found', 'error')
        return redirect(url_for('operations.asset_list'))
    return render_template('operations/asset_detail.html', **detail)


@operations_bp.route('/installations')
@login_required
def installation_list():
    query = request.args.get('q', '')
    shipment = request.args.get('shipment', 'all')
    data = service.app_data.fetch()

    return render_template(
        'operations/installations.html',
        installations=service.installations(data, query, shipment),
        shipment_statuses=sorted({i.get('shipmentStatus') for i in data['installations']
                                  if i.get('shipmentStatus')}),
        query=query,
        shipment=shipment,
    )


@operations_bp.route('/maintenance')
@login_required
def maintenance_list():
    query = request.args.get('q', '')
    status = request.args.get('status', 'all')
    priority = request.args.get('priority', 'all')
    data = service.app_data.fetch()

    return render_template(
        'operations/maintenance.html',
        tickets=service.tickets(data, query, status, priority),
        counts=service.ticket_counts(data),
        sites=data['sites'],
        priorities=current_app.config['TICKET_PRIORITIES'],
        query=query,
        status=status,
        priority=priority,
    )


@operations_bp.route('/maintenance/tickets', methods=['POST'])
@login_required
def create_ticket():
    try:
        form = parse_form(TicketForm, request.form)
        service.create_ticket(form)
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to create ticket', 'error')
    else:
        flash('Maintenance ticket created', 'success')
    return redirect(url_for('operations.maintenance_list'))


def init_operations(app):
    """Initialize operations component with Flask app"""
    app.register_blueprint(operations_bp)
    return operations_bp
