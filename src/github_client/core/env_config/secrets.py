"""
Secret masking for configuration summaries.
"""

from typing import Any, Dict, Optional, Set

DEFAULT_SECRET_KEYS = {
    'token', 'password', 'secret', 'authorization', 'private_key',
}


def mask_secret(value: str, visible_chars: int = 4) -> str:
    """
    Mask secret value, showing only its first and last characters.

    Example:
        >>> mask_secret("ghp_1234567890abcdef", visible_chars=4)
        'ghp_***cdef'
        >>> mask_secret("short", visible_chars=4)
        '***'
    """
    if not value:
        return ""

    if len(value) <= (visible_chars * 2):
        return "***"

    return f"{value[:visible_chars]}***{value[-visible_chars:]}"


def mask_dict_secrets(data: Dict[str, Any], secret_keys: Optional[Set[str]] = None) -> Dict[str, Any]:
    """
    Mask string values whose key contains a secret keyword.

    Example:
        >>> mask_dict_secrets({"token": "ghp_1234567890abcdef", "api_version": "v3"})
        {'token': 'ghp_***cdef', 'api_version': 'v3'}
    """
    keys = secret_keys if secret_keys is not None else DEFAULT_SECRET_KEYS

    masked = {}
    for key, value in data.items():
        is_secret = any(word in key.lower() for word in keys)
        if is_secret and isinstance(value, str):
            masked[key] = mask_secret(value)
        else:
            masked[key] = value
    return masked
