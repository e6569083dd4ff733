"""
System Logs Component Routes
"""

from flask import Blueprint, jsonify, request

from acs_dashboard.core.auth import login_required
from .service import SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__)

service = SystemLogsService()


@system_logs_bp.route('/api/logs')
@login_required
def api_logs():
    """Get activity logs with filtering"""
    level_filter = request.args.get('level', 'ALL').upper()
    try:
        limit = int(request.args.get('limit', 50))
    except ValueError:
        return jsonify({'error': 'limit must be an integer'}), 400

    return jsonify(service.get_logs(level_filter=level_filter, limit=limit))
