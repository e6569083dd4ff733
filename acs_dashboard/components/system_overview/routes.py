"""
System Overview Routes
"""

from flask import Blueprint, jsonify

from acs_dashboard.core.app_data import AppDataService
from acs_dashboard.core.auth import login_required
from .service import SystemOverviewService

system_overview_bp = Blueprint('system_overview', __name__)

service = SystemOverviewService()
app_data = AppDataService()


@system_overview_bp.route('/api/system/metrics')
@login_required
def api_system_metrics():
    """Backend request and error counters"""
    return jsonify(service.get_request_metrics())


@system_overview_bp.route('/api/system/status')
def api_system_status():
    """Backend connectivity as seen by the monitor thread"""
    status = service.get_backend_status()
    status['components'] = service.get_components()
    return jsonify(status)


@system_overview_bp.route('/api/app-data')
@login_required
def api_app_data():
    return jsonify(app_data.fetch())


def init_system_overview(app):
    """Initialize system overview component with Flask app"""
    app.register_blueprint(system_overview_bp, url_prefix='')
    return system_overview_bp
