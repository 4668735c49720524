"""
Response serialization utilities for the cache plugin.

Converts requests.Response objects to plain dictionaries that any cache pool
(in-memory or diskcache) can store, and back.
"""

from typing import Dict, Any
from datetime import timedelta

import requests
from requests.structures import CaseInsensitiveDict

# Hop-by-hop and per-exchange headers that must not be replayed from cache
_SKIP_HEADERS = {'x-cache', 'connection', 'transfer-encoding'}


def serialize_response(response: requests.Response) -> Dict[str, Any]:
    """
    Convert requests.Response to a pickleable dictionary.

    Note:
        Does not preserve response.raw (stream), response.connection,
        cookies or the redirect history.

    Example:
        >>> data = serialize_response(client.get("/user"))
        >>> data["status_code"]
        200
    """
    return {
        'status_code': response.status_code,
        'headers': {
            name: value for name, value in response.headers.items()
            if name.lower() not in _SKIP_HEADERS
        },
        'content': response.content,
        'url': response.url,
        'encoding': response.encoding,
        'reason': response.reason,
        'elapsed': response.elapsed.total_seconds() if response.elapsed else 0,
    }


def deserialize_response(data: Dict[str, Any]) -> requests.Response:
    """
    Reconstruct requests.Response from serialized dictionary.

    Note:
        This is a reconstructed Response: .json() and .text work on the stored
        content, there is no underlying connection.

    Example:
        >>> resp = deserialize_response({'status_code': 200, 'content': b'{}', 'headers': {}, 'url': ''})
        >>> resp.status_code
        200
    """
    response = requests.Response()
    response.status_code = data['status_code']
    response._content = data['content']
    response.headers = CaseInsensitiveDict(data.get('headers', {}))
    response.url = data.get('url', '')
    response.encoding = data.get('encoding')
    response.reason = data.get('reason', '')
    response.elapsed = timedelta(seconds=data.get('elapsed', 0))
    return response
