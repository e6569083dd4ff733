"""
ACS Operations Dashboard
Flask front end for the ACS installation, billing and audit backend
"""
import logging
import os

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from acs_dashboard.config.settings import DashboardConfig
from acs_dashboard.core import BackendError, BackendMonitor, add_log
from acs_dashboard.core.api_client import create_backend
from acs_dashboard.core.auth import current_profile, end_session, is_api_request
from acs_dashboard.core.derivations import action_tone, status_tone
from acs_dashboard.core.formatting import register_filters
from acs_dashboard.routes.main_routes import main_bp

from acs_dashboard.components.admin import init_admin
from acs_dashboard.components.audit import init_audit
from acs_dashboard.components.auth import init_auth
from acs_dashboard.components.clients import init_clients
from acs_dashboard.components.data_imports import init_data_imports
from acs_dashboard.components.finance import init_finance
from acs_dashboard.components.notifications import init_notifications
from acs_dashboard.components.operations import init_operations
from acs_dashboard.components.projects import init_projects
from acs_dashboard.components.site_imports import init_site_imports
from acs_dashboard.components.system_logs import init_system_logs
from acs_dashboard.components.system_overview import init_system_overview

logger = logging.getLogger(__name__)


class DashboardApp:
    """Main dashboard application class"""

    def __init__(self):
        self.app = None
        self.monitor = None

    def create_app(self, config=DashboardConfig):
        """Create and configure Flask application"""
        package_dir = os.path.dirname(os.path.abspath(__file__))
        self.app = Flask(
            __name__,
            template_folder=os.path.join(package_dir, 'templates'),
            static_folder=os.path.join(package_dir, 'static'),
        )

        # Load configuration
        self.app.config.from_object(config)

        logging.basicConfig(
            level=self.app.config['LOG_LEVEL'],
            format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        )

        # Initialize extensions
        Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URL'],
        )

        # Backend client and monitoring
        self.app.extensions['backend'] = create_backend(self.app.config)
        self.monitor = BackendMonitor(
            self.app.config['BACKEND_URL'],
            health_path=self.app.config['BACKEND_HEALTH_PATH'],
            interval=self.app.config['HEALTH_CHECK_INTERVAL'],
        )
        self.app.extensions['backend_monitor'] = self.monitor

        register_filters(self.app)
        self.app.jinja_env.globals.update(action_tone=action_tone, status_tone=status_tone)
        self._register_error_handlers()

        @self.app.context_processor
        def inject_profile():
            return {'profile': current_profile()}

        # Initialize components
        init_auth(self.app)
        init_system_overview(self.app)
        init_system_logs(self.app)
        init_clients(self.app)
        init_projects(self.app)
        init_site_imports(self.app)
        init_data_imports(self.app)
        init_operations(self.app)
        init_finance(self.app)
        init_audit(self.app)
        init_notifications(self.app)
        init_admin(self.app)

        # Register main blueprint
        self.app.register_blueprint(main_bp)

        return self.app

    def _register_error_handlers(self):
        app = self.app

        @app.errorhandler(BackendError)
        def handle_backend_error(e):
            """Backend failures not handled by a view"""
            if e.is_auth_error and e.status_code == 401:
                end_session()
                if is_api_request():
                    return jsonify({'error': 'Session expired'}), 401
                flash('Your session has expired. Please sign in again.', 'error')
                return redirect(url_for('auth.login', next=request.path))

            logger.error(f"Unhandled backend error on {request.path}: {e}")
            if is_api_request():
                return jsonify({'error': e.message}), e.status_code or 502
            flash(e.message or 'The backend request failed', 'error')
            return render_template('errors/backend.html', error=e), 502

        @app.errorhandler(404)
        def not_found(e):
            if is_api_request():
                return jsonify({'error': 'Not found'}), 404
            return render_template('errors/404.html'), 404

    def run(self, host='0.0.0.0', port=None):
        """Start the dashboard application"""
        port = port or int(os.environ.get('PORT', 8081))

        # Start monitoring
        self.monitor.start()
        add_log('INFO', 'Dashboard started')

        logger.info(f"ACS Operations Dashboard starting on http://localhost:{port}")
        logger.info(f"Backend API: {self.app.config['BACKEND_URL']}")

        # Run the application
        try:
            self.app.run(host=host, port=port, debug=False)
        finally:
            self.monitor.stop()



def create_app(config=DashboardConfig):
    """Application factory"""
    return DashboardApp().create_app(config)


def main():
    """Main entry point"""
    dashboard = DashboardApp()
    dashboard.create_app()
    dashboard.run()


if __name__ == '__main__':
    main()
