# n8n_client/resources/__init__.py

"""
Endpoint helpers for n8n resources. Payloads are plain JSON objects.
"""

from .base import ResourceAPI
from .credentials import CredentialsAPI
from .ldap import LDAPAPI
from .projects import ProjectsAPI
from .users import UsersAPI
from .workflows import WorkflowsAPI

__all__ = [
    'ResourceAPI',
    'CredentialsAPI',
    'LDAPAPI',
    'ProjectsAPI',
    'UsersAPI',
    'WorkflowsAPI'
]
