"""
Data Imports Component
Financial and installation import wizards
"""
from .routes import data_imports_bp, init_data_imports
from .service import DataImportsService

__all__ = ['data_imports_bp', 'init_data_imports', 'DataImportsService']
