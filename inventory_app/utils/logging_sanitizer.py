"""
Logging Sanitizer Utility

Redacts passwords, tokens and similar values from request payloads before
they are written to the logs.
"""

from typing import Any, Dict


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'password_confirm',
    'confirm_password',
    'current_password',
    'new_password',
    'old_password',
    'secret',
    'token',
    'api_key',
    'auth_token',
    'access_token',
    'refresh_token',
    'authorization',
    'jwt',
}


def _sanitize_value(value: Any, redact_text: str) -> Any:
    if isinstance(value, dict):
        return sanitize_dict(value, redact_text)
    if isinstance(value, list):
        return [_sanitize_value(item, redact_text) for item in value]
    return value


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize (nested dicts and lists are walked)
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy; the input is not modified

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        else:
            sanitized[key] = _sanitize_value(value, redact_text)

    return sanitized
