"""
Encoding of nested request parameters.

Several Buffer endpoints take structured arguments, e.g. the schedule
list of ``/profiles/:id/schedules/update`` or the ``media`` mapping of
``/updates/create``.  The API reads them in bracket notation::

    schedules[0][days][0]=mon&schedules[0][times][0]=12:00
    media[link]=http://example.com&profile_ids[0]=4eb8

:func:`flatten_params` produces that form as a list of pairs that
``requests`` can encode directly for both query strings and form bodies.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _flatten(prefix: str, value: Any, out: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    else:
        out.append((prefix, _scalar(value)))


def flatten_params(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten ``data`` into ``(key, value)`` pairs using bracket notation.

    ``None`` values are dropped, booleans become ``"1"``/``"0"`` and
    everything else is converted with :func:`str`.
    """
    out: List[Tuple[str, str]] = []
    for key, value in data.items():
        _flatten(str(key), value, out)
    return out
