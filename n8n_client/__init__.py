"""
Asynchronous client for the n8n workflow automation REST API.
"""

from .core.config import Config
from .core.exceptions import (
    APIError,
    ConfigError,
    CookieFileError,
    DeserializationError,
    LoggerError,
    N8nClientError,
    SerializationError,
    TransportError,
    ValidationError
)
from .core.logger import Logger, MemoryLogger, RequestLogger
from .resources import CredentialsAPI, LDAPAPI, ProjectsAPI, UsersAPI, WorkflowsAPI
from .utils.api import (
    DISCARD,
    APIClient,
    APIConfig,
    APIKeyAuth,
    BasicAuth,
    PaginationInfo,
    RetryPolicy,
    SessionAuth
)

__version__ = "0.1.0"

__all__ = [
    'Config',
    'APIError',
    'ConfigError',
    'CookieFileError',
    'DeserializationError',
    'LoggerError',
    'N8nClientError',
    'SerializationError',
    'TransportError',
    'ValidationError',
    'Logger',
    'MemoryLogger',
    'RequestLogger',
    'CredentialsAPI',
    'LDAPAPI',
    'ProjectsAPI',
    'UsersAPI',
    'WorkflowsAPI',
    'DISCARD',
    'APIClient',
    'APIConfig',
    'APIKeyAuth',
    'BasicAuth',
    'PaginationInfo',
    'RetryPolicy',
    'SessionAuth'
]
