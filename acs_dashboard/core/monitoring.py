"""
Backend monitoring service
"""
import logging
import threading
import time
from datetime import datetime

import requests

logger = logging.getLogger(__name__)


def add_log(level, message):
    """Add an entry to the shared activity log"""
    from acs_dashboard.core import system_logs

    system_logs.append({
        'timestamp': datetime.now().isoformat(),
        'level': level,
        'message': message
    })


class BackendMonitor:
    """Polls the backend health endpoint in a background thread"""

    def __init__(self, base_url, health_path='/health', interval=15):
        self.health_url = base_url.rstrip('/') + health_path
        self.interval = interval
        self.running = False
        self.thread = None
        self.status = 'unknown'
        self.last_check = None
        self.healthy_since = None

    def start(self):
        """Start monitoring thread"""
        if self.thread is None or not self.thread.is_alive():
            self.running = True
            self.thread = threading.Thread(target=self._monitor_loop, daemon=True)
            self.thread.start()
            logger.info(f"Backend monitor started for {self.health_url}")

    def stop(self):
        """Stop monitoring thread"""
        self.running = False
        if self.thread:
            self.thread.join(timeout=2)

    def _monitor_loop(self):
        while self.running:
            try:
                self.check()
            except Exception as e:
                add_log('ERROR', f'Monitor loop error: {e}')
            time.sleep(self.interval)

    def check(self):
        """Run one health check and record status transitions"""
        status = self._check_health()
        if status != self.status:
            add_log('INFO' if status == 'healthy' else 'WARNING',
                    f'Backend status changed: {self.status} -> {status}')
            logger.info(f"Backend status changed: {self.status} -> {status}")

        if status == 'healthy' and self.healthy_since is None:
            self.healthy_since = datetime.now()
        elif status != 'healthy':
            self.healthy_since = None

        self.status = status
        self.last_check = datetime.now()
        return status

    def _check_health(self):
        try:
            response = requests.get(self.health_url, timeout=3)
        except requests.exceptions.RequestException as e:
            logger.debug(f"Backend health check failed: {e}")
            return 'down'
        return 'healthy' if response.status_code == 200 else 'unhealthy'

    def get_status(self):
        """Get current backend status"""
        uptime_seconds = 0
        if self.healthy_since is not None:
            uptime_seconds = int((datetime.now() - self.healthy_since).total_seconds())
        return {
            'status': self.status,
            'url': self.health_url,
            'last_check': self.last_check.isoformat() if self.last_check else None,
            'uptime_seconds': uptime_seconds
        }
