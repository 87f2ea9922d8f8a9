"""
Error catalog and error normalization for Buffer API responses.

Buffer reports failures either as a structured JSON body (usually with
``error`` and ``code`` keys) or, for some transport-level statuses, as a
plain text or HTML page.  :func:`normalize_error` turns both into a
mapping with an ``error`` key so callers only ever have to inspect one
shape.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

INVALID_ENDPOINT = "invalid-endpoint"

# HTTP statuses and Buffer application error codes
ERROR_MESSAGES: Dict[str, str] = {
    INVALID_ENDPOINT: "The endpoint you supplied does not appear to be valid.",
    "400": "Bad request.",
    "403": "Permission denied.",
    "404": "Endpoint not found.",
    "405": "Method not allowed.",
    "1000": "An unknown error occurred.",
    "1001": "Access token required.",
    "1002": "Not within application scope.",
    "1003": "Parameter not recognized.",
    "1004": "Required parameter missing.",
    "1005": "Unsupported response format.",
    "1010": "Profile could not be found.",
    "1011": "No authorization to access profile.",
    "1012": "Profile did not save successfully.",
    "1013": "Profile schedule limit reached.",
    "1014": "Profile limit for user has been reached.",
    "1020": "Update could not be found.",
    "1021": "No authorization to access update.",
    "1022": "Update did not save successfully.",
    "1023": "Update limit for profile has been reached.",
    "1024": "Update limit for team profile has been reached.",
    "1028": "Update soft limit for profile reached.",
    "1030": "Media filetype not supported.",
    "1031": "Media filesize out of acceptable range.",
}


def decode_json(raw: Any) -> Any:
    """Decode a JSON document, returning ``None`` instead of raising.

    ``bytes`` are decoded as UTF-8.  Empty input, non-string input and
    malformed JSON all yield ``None``.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def error_message(code: Union[str, int]) -> Optional[str]:
    """Return the catalog message for ``code`` or ``None`` if it is unknown."""
    return ERROR_MESSAGES.get(str(code))


def normalize_error(code: Union[str, int], raw_body: Any = None) -> Dict[str, Any]:
    """Build the error mapping returned to callers.

    Parameters
    ----------
    code : str or int
        An HTTP status, a Buffer application error code or
        :data:`INVALID_ENDPOINT`.
    raw_body : str or bytes, optional
        The undecoded response body, if there was one.

    Returns
    -------
    dict
        The decoded body unchanged when it is a JSON object, since the
        API already supplied the detail.  Otherwise ``{"error": message}``
        using the catalog, or ``"Unknown error [<code>]"`` for codes the
        catalog does not list.
    """
    content = decode_json(raw_body)
    if isinstance(content, dict):
        return content
    message = error_message(code)
    if message is not None:
        return {"error": message}
    return {"error": f"Unknown error [{code}]"}
