"""Per-request outcome returned by the ``*_result`` client methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ApiResult:
    """The outcome of a single request.

    ``ok`` is ``False`` for HTTP error statuses, unknown endpoints and
    requests that were never sent (empty URL).  ``status_code`` is
    ``None`` whenever no HTTP response was received.  ``data`` holds the
    decoded body, or the normalized error mapping when ``ok`` is false.
    """

    ok: bool
    status_code: Optional[int] = None
    data: Any = None

    @property
    def error(self) -> Optional[str]:
        if isinstance(self.data, dict):
            return self.data.get("error")
        return None
