"""
Audit Component
"""
from .routes import audit_bp, init_audit
from .service import AuditService

__all__ = ['audit_bp', 'init_audit', 'AuditService']
