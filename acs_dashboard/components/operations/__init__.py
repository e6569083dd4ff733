"""
Operations Component
Sites, ACS assets, installations and maintenance tickets
"""
from .routes import operations_bp, init_operations
from .service import OperationsService

__all__ = ['operations_bp', 'init_operations', 'OperationsService']
