"""
Finance Component
"""
from .routes import finance_bp, init_finance
from .service import FinanceService

__all__ = ['finance_bp', 'init_finance', 'FinanceService']
