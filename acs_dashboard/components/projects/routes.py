"""
Projects Routes
"""
from flask import Blueprint, flash, redirect, render_template, request, url_for

from acs_dashboard.core import BackendError, raise_if_session_expired
from acs_dashboard.core.auth import login_required
from acs_dashboard.core.forms import (ProjectForm, SiteForm, SubprojectForm, ValidationError,
                                      first_error, parse_form)
from .service import ProjectsService, configuration_badges

projects_bp = Blueprint('projects', __name__)

service = ProjectsService()


@projects_bp.route('/projects')
@login_required
def project_list():
    query = request.args.get('q', '')
    status = request.args.get('status', 'all')

    projects, clients = [], []
    try:
        projects = service.list_projects()
        clients = service.client_options()
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load projects', 'error')

    return render_template(
        'projects/list.html',
        projects=service.filter_projects(projects, query, status),
        totals=service.totals(projects),
        clients=clients,
        query=query,
        status=status,
    )


@projects_bp.route('/projects', methods=['POST'])
@login_required
def create_project():
    try:
        form = parse_form(ProjectForm, request.form)
        service.create_project(form)
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to create project', 'error')
    else:
        flash(f'Project {form.name} created successfully', 'success')
    return redirect(url_for('projects.project_list'))


@projects_bp.route('/projects/<int:project_id>')
@login_required
def project_detail(project_id):
    try:
        project = service.get_project(project_id)
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to load project', 'error')
        return redirect(url_for('projects.project_list'))
    if project is None:
        flash('Project not found', 'error')
        return redirect(url_for('projects.project_list'))

    return render_template(
        'projects/detail.html',
        project=project,
        configuration_badges=configuration_badges,
    )


@projects_bp.route('/projects/<int:project_id>/subprojects', methods=['POST'])
@login_required
def create_subproject(project_id):
    try:
        form = parse_form(SubprojectForm, request.form)
        service.create_subproject(project_id, form)
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to create subproject', 'error')
    else:
        flash(f'Subproject {form.name} created. Its configuration is now locked.', 'success')
    return redirect(url_for('projects.project_detail', project_id=project_id))


@projects_bp.route('/projects/<int:project_id>/subprojects/<int:subproject_id>/sites', methods=['POST'])
@login_required
def create_site(project_id, subproject_id):
    try:
        form = parse_form(SiteForm, request.form)
        service.create_site(project_id, subproject_id, form)
    except ValidationError as e:
        flash(first_error(e), 'error')
    except BackendError as e:
        raise_if_session_expired(e)
        flash(e.message or 'Failed to create site', 'error')
    else:
        flash('Site created and bound to configuration', 'success')
    return redirect(url_for('projects.project_detail', project_id=project_id))


def init_projects(app):
    """Initialize projects component with Flask app"""
    app.register_blueprint(projects_bp)
    return projects_bp
