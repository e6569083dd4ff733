"""
System Overview Component
Backend connectivity, request metrics and the aggregated app data
"""

from .routes import system_overview_bp, init_system_overview
from .service import SystemOverviewService

__all__ = ['system_overview_bp', 'init_system_overview', 'SystemOverviewService']
