"""Request context passed through the plugin chain."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Union
import copy
import uuid

from requests.structures import CaseInsensitiveDict


@dataclass
class RequestContext:
    """Single request travelling through the plugin chain to the transport.

    Plugins mutate the context in place (rewrite ``url``, add ``headers`` or
    ``params``) before handing it to the next layer.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        url: Absolute request URL
        headers: Case-insensitive request headers
        params: Query string parameters
        body: Raw request body (already encoded)
        request_id: Unique identifier, also used as logging correlation ID
        metadata: Shared storage for plugins to communicate

    Example:
        >>> ctx = RequestContext('GET', 'https://api.github.com/user')
        >>> ctx.headers['accept'] = 'application/vnd.github.v3+json'
        >>> ctx.headers['Accept']
        'application/vnd.github.v3+json'
    """

    method: str
    url: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    params: Dict[str, Any] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.method = self.method.upper()
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers or {})
        if self.params is None:
            self.params = {}

    def copy(self) -> 'RequestContext':
        """Create a copy of this context."""
        return RequestContext(
            method=self.method,
            url=self.url,
            headers=self.headers.copy(),
            params=copy.deepcopy(self.params),
            body=self.body,
            request_id=self.request_id,
            metadata=copy.copy(self.metadata)
        )
