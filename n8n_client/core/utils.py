import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ValidationError

def require_string(value: Optional[str], name: str) -> str:
    """Return the value unchanged, or raise if it is missing or empty."""
    if not value or not isinstance(value, str):
        raise ValidationError(f"{name} is required")
    return value

def require_fields(payload: Optional[Dict[str, Any]], kind: str, *fields: str) -> Dict[str, Any]:
    """Check a JSON object payload carries non-empty values for the given keys."""
    if payload is None:
        raise ValidationError(f"{kind} is required")
    for field in fields:
        if not payload.get(field):
            raise ValidationError(f"{kind} {field} is required")
    return payload

def get_file_extension(filename: Optional[str]) -> str:
    """Get the file extension from a filename."""
    if not filename:
        return ""
    return os.path.splitext(filename)[1]

def is_within_directory(path: Union[str, Path], directory: Union[str, Path]) -> bool:
    """Check whether path lies inside directory once both are fully resolved."""
    resolved = Path(os.path.realpath(path))
    base = Path(os.path.realpath(directory))
    return resolved == base or base in resolved.parents
