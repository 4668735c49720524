"""Utility modules for GitHub Client."""

from .serialization import serialize_response, deserialize_response
from .sanitizer import (
    mask_sensitive_data,
    mask_url,
    mask_headers,
    add_sensitive_keys,
)

__all__ = [
    'serialize_response',
    'deserialize_response',
    'mask_sensitive_data',
    'mask_url',
    'mask_headers',
    'add_sensitive_keys',
]
