"""
Clients Component
"""
from .routes import clients_bp, init_clients
from .service import ClientsService, normalize_client_id

__all__ = ['clients_bp', 'init_clients', 'ClientsService', 'normalize_client_id']
