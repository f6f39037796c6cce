"""REST clients for the monitoring API."""

from cli.rest.api import ApiClient
from cli.rest.projects import Projects, projects

__all__ = ["ApiClient", "Projects", "projects"]
