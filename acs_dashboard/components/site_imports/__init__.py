"""
Site Imports Component
Upload sessions of a subproject: upload, review, correct, process, revert
"""
from .routes import site_imports_bp, init_site_imports
from .service import SiteImportsService

__all__ = ['site_imports_bp', 'init_site_imports', 'SiteImportsService']
