"""
Logging utilities for tracking calculator activity across the site.
"""

from app.models import LogEntry
from app import db
from app.projects.registry import get_calculator_by_id


def log_activity(project_name, category, description):
    """
    Record one activity row.

    Args:
        project_name (str): The calculator identifier (e.g., 'mortgage', 'bmi')
        category (str): Kind of activity ('Visit', 'Calculate', 'Export')
        description (str): Human-readable description
    """
    calculator = get_calculator_by_id(project_name) if project_name else None
    log_entry = LogEntry(
        project=project_name,
        calculator_category=calculator['category'] if calculator else None,
        category=category,
        description=description
    )
    db.session.add(log_entry)
    db.session.commit()


def log_project_visit(project_name, project_display_name=None):
    """
    Log a visit to a calculator/page.

    Args:
        project_name (str): The calculator identifier (e.g., 'mortgage', 'bmi')
        project_display_name (str, optional): Human-readable name for the description.
                                              Defaults to project_name if not provided.
    """
    display_name = project_display_name or project_name
    log_activity(project_name, 'Visit', f"Anonymous user visited {display_name}")
