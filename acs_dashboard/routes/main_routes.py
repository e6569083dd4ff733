"""
Main page routes for dashboard
"""
from datetime import datetime

from flask import Blueprint, current_app, render_template

from acs_dashboard.components.system_logs.service import SystemLogsService
from acs_dashboard.components.system_overview.service import SystemOverviewService
from acs_dashboard.core.app_data import AppDataService
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.derivations import dashboard_alerts

# Create main blueprint
main_bp = Blueprint('main', __name__)

app_data = AppDataService()
logs = SystemLogsService()
overview = SystemOverviewService()


@main_bp.route('/')
@login_required
def dashboard():
    """Main dashboard page"""
    data = app_data.fetch()

    return render_template(
        'dashboard.html',
        metrics=data['dashboard'],
        alerts=dashboard_alerts(data['sites']),
        recent_activity=logs.recent_activity(current_app.config['MAX_RECENT_ACTIVITY']),
        backend_status=overview.get_backend_status(),
        current_time=datetime.now(),
    )
