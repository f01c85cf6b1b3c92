# n8n_client/utils/api/__init__.py

"""
HTTP client for the n8n REST API: authentication, retries and response handling.
"""

from .api_client import (
    APIClient,
    APIConfig,
    APIResponse,
    RequestMethod,
    normalize_base_url
)

from .auth import (
    APIKeyAuth,
    Auth,
    AuthKind,
    AuthMethod,
    BasicAuth,
    SessionAuth,
    auth_from_config
)

from .cookies import (
    load_cookies_from_file,
    validate_cookie_file_path
)

from .response_handler import (
    DISCARD,
    PaginationInfo,
    extract_pagination,
    parse_api_error
)

from .retry import (
    RetryPolicy,
    is_retryable_error,
    is_retryable_status,
    should_retry
)

__all__ = [
    'APIClient',
    'APIConfig',
    'APIResponse',
    'RequestMethod',
    'normalize_base_url',
    'APIKeyAuth',
    'Auth',
    'AuthKind',
    'AuthMethod',
    'BasicAuth',
    'SessionAuth',
    'auth_from_config',
    'load_cookies_from_file',
    'validate_cookie_file_path',
    'DISCARD',
    'PaginationInfo',
    'extract_pagination',
    'parse_api_error',
    'RetryPolicy',
    'is_retryable_error',
    'is_retryable_status',
    'should_retry'
]
