"""
Python client for interacting with the Buffer REST API.

This package provides a `BufferClient` class that handles the OAuth2
authorization code flow against Buffer, resolves endpoint paths such
as ``/profiles/<id>/updates/pending`` to the right HTTP verb and calls
them with the stored access token.

Examples
--------

```python
from bufferapp_client import BufferClient

client = BufferClient(
    client_id="YOUR_CLIENT_ID",
    client_secret="YOUR_CLIENT_SECRET",
    callback_url="https://example.com/buffer/callback",
)

# Redirect the user here, then exchange the returned code
login_url = client.build_login_url()
client.exchange_code("CODE_FROM_CALLBACK")

pending = client.call("/profiles/4eb854340acb04e870000010/updates/pending")
if not client.is_ok():
    print(pending["error"])
```

Failed calls, network failures included, return a mapping with an
``error`` key instead of raising.

See Also
--------
The Buffer developer documentation lists the available endpoints, their
parameters and the meaning of Buffer's numeric error codes.
"""

from .client import BufferClient
from .endpoints import ENDPOINTS, Endpoint, EndpointResolver, resolve
from .errors import ERROR_MESSAGES, INVALID_ENDPOINT, normalize_error
from .result import ApiResult

__all__ = [
    "ApiResult",
    "BufferClient",
    "ENDPOINTS",
    "ERROR_MESSAGES",
    "Endpoint",
    "EndpointResolver",
    "INVALID_ENDPOINT",
    "normalize_error",
    "resolve",
]
