"""
Projects Service
"""
import logging

from acs_dashboard.components import register_component
from acs_dashboard.core import add_log, get_backend
from acs_dashboard.core.filtering import apply_filters

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'clientName', 'description')


def configuration_badges(configuration):
    """Short labels describing a locked subproject configuration"""
    configuration = configuration or {}
    badges = []
    if configuration.get('version'):
        badges.append(f"v{configuration['version']}")
    if configuration.get('tenureMonths'):
        badges.append(f"{configuration['tenureMonths']} months")
    if configuration.get('installationChargeable'):
        badges.append('Installation chargeable')
    else:
        badges.append('Free installation')
    if configuration.get('maintenanceIncluded', True):
        badges.append('Maintenance included')
    else:
        badges.append('Maintenance charged')
    return badges


@register_component('projects')
class ProjectsService:
    """Service for the Projects component"""

    def list_projects(self):
        return get_backend().get('/projects') or []

    def filter_projects(self, projects, query='', status='all'):
        return apply_filters(projects, query, SEARCH_FIELDS, status=status)

    def totals(self, projects):
        return {
            'projects': len(projects),
            'sites': sum(p.get('totalSites') or 0 for p in projects),
            'acs': sum(p.get('totalACS') or 0 for p in projects),
            'monthlyRevenue': sum(p.get('monthlyRevenue') or 0 for p in projects),
        }

    def client_options(self):
        return [
            {'id': client.get('id'), 'name': client.get('name')}
            for client in get_backend().get('/clients') or []
        ]

    def get_project(self, project_id):
        """Project from the project list with its subprojects, None if unknown"""
        for project in self.list_projects():
            if str(project.get('id')) == str(project_id):
                project['subprojects'] = self.get_subprojects(project_id)
                return project
        return None

    def get_subprojects(self, project_id):
        return get_backend().get(f'/projects/{project_id}/subprojects') or []

    def create_project(self, form):
        project = get_backend().post('/projects', json=form.to_payload())
        add_log('INFO', f'Project {form.name} created')
        return project

    def create_subproject(self, project_id, form):
        subproject = get_backend().post(f'/projects/{project_id}/subprojects', json=form.to_payload())
        add_log('INFO', f'Subproject {form.name} created in project {project_id}')
        return subproject

    def create_site(self, project_id, subproject_id, form):
        site = get_backend().post(
            f'/projects/{project_id}/subprojects/{subproject_id}/sites',
            json=form.to_payload(),
        )
        add_log('INFO', f'Site {form.name} created in subproject {subproject_id}')
        return site
