"""
Projects Component
Projects, subprojects with locked pricing configuration, and their sites
"""
from .routes import projects_bp, init_projects
from .service import ProjectsService

__all__ = ['projects_bp', 'init_projects', 'ProjectsService']
