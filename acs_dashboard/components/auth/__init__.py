"""
Auth Component
Handles sign-in, sign-out and password changes against the backend
"""
from .routes import auth_bp, init_auth
from .service import AuthService

__all__ = ['auth_bp', 'init_auth', 'AuthService']
