"""
Admin Component
"""
from .routes import admin_bp, init_admin
from .service import AdminService

__all__ = ['admin_bp', 'init_admin', 'AdminService']
