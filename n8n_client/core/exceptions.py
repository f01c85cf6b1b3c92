from typing import Any, Dict, Optional

class N8nClientError(Exception):
    """Base exception class for all n8n client exceptions"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

class ConfigError(N8nClientError):
    """Raised when there is a configuration error"""
    pass

class CookieFileError(ConfigError):
    """Raised when a cookie file path is rejected or the file cannot be loaded"""
    pass

class LoggerError(N8nClientError):
    """Raised when there is a logging error"""
    pass

class ValidationError(N8nClientError):
    """Raised when required input is missing before a request is made"""
    pass

class SerializationError(N8nClientError):
    """Raised when a request body cannot be encoded as JSON"""
    pass

class DeserializationError(N8nClientError):
    """Raised when a successful response body cannot be decoded"""
    pass

class TransportError(N8nClientError):
    """Raised when the network call itself fails"""
    def __init__(
        self,
        message: str,
        method: str = "",
        url: str = "",
        attempts: int = 1
    ):
        super().__init__(message, details={"method": method, "url": url, "attempts": attempts})
        self.method = method
        self.url = url
        self.attempts = attempts

class APIError(N8nClientError):
    """Raised when the n8n API answers with a non-2xx status"""
    def __init__(
        self,
        code: int,
        message: str,
        details: Optional[str] = None,
        attempts: int = 1
    ):
        self.code = code
        self.attempts = attempts
        super().__init__(self._render(code, message, details))
        self.message = message
        # Plain string from the error envelope, not the base class mapping
        self.details = details

    @staticmethod
    def _render(code: int, message: str, details: Optional[str]) -> str:
        if details:
            return f"n8n API error (code {code}): {message} - {details}"
        return f"n8n API error (code {code}): {message}"
