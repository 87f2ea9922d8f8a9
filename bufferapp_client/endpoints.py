"""
Endpoint table and path resolution for the Buffer API.

Every Buffer v1 endpoint is described by a path template such as
``/profiles/:id/updates/pending`` and the HTTP verb it expects.  The
:class:`EndpointResolver` maps a concrete path supplied by the caller,
for example ``/profiles/4eb854340acb04e870000010/updates/pending``, to
the template it belongs to so the client knows whether to GET or POST.

Matching works segment by segment: the template and the path are both
split on ``/``, they must have the same number of segments, literal
segments must be equal and a ``:name`` segment matches exactly one
non-empty token of ASCII word characters.  When several templates
match, the one declared first in :data:`ENDPOINTS` wins.
"""

from __future__ import annotations

import string
from typing import Dict, Iterable, Iterator, NamedTuple, Optional, Tuple

GET = "GET"
POST = "POST"

PLACEHOLDER_PREFIX = ":"

_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


class Endpoint(NamedTuple):
    """A path template and the HTTP verb used to call it."""

    template: str
    verb: str

    @property
    def has_placeholders(self) -> bool:
        return any(_is_placeholder(s) for s in self.template.split("/"))


# Declaration order is the tie-break when more than one template matches.
ENDPOINTS: Tuple[Endpoint, ...] = (
    Endpoint("/user", GET),
    Endpoint("/profiles", GET),
    Endpoint("/profiles/:id/schedules/update", POST),
    Endpoint("/profiles/:id/updates/reorder", POST),
    Endpoint("/profiles/:id/updates/pending", GET),
    Endpoint("/profiles/:id/updates/sent", GET),
    Endpoint("/profiles/:id/schedules", GET),
    Endpoint("/profiles/:id", GET),
    Endpoint("/updates/:id/update", POST),
    Endpoint("/updates/create", POST),
    Endpoint("/updates/:id/destroy", POST),
    Endpoint("/updates/:id", GET),
    Endpoint("/links/shares", GET),
)


def _is_placeholder(segment: str) -> bool:
    return segment.startswith(PLACEHOLDER_PREFIX) and len(segment) > 1


def _is_word(token: str) -> bool:
    return bool(token) and all(c in _WORD_CHARS for c in token)


def matches(template: str, path: str) -> bool:
    """Return ``True`` if ``path`` fits ``template`` segment by segment."""
    template_segments = template.split("/")
    path_segments = path.split("/")
    if len(template_segments) != len(path_segments):
        return False
    for expected, actual in zip(template_segments, path_segments):
        if _is_placeholder(expected):
            if not _is_word(actual):
                return False
        elif expected != actual:
            return False
    return True


class EndpointResolver:
    """Resolve concrete API paths to their :class:`Endpoint`.

    Parameters
    ----------
    endpoints : iterable of Endpoint, optional
        The endpoint table to resolve against, in priority order.
        Defaults to :data:`ENDPOINTS`.
    """

    def __init__(self, endpoints: Optional[Iterable[Endpoint]] = None) -> None:
        self._endpoints: Tuple[Endpoint, ...] = tuple(
            ENDPOINTS if endpoints is None else endpoints
        )
        self._by_template: Dict[str, Endpoint] = {}
        for endpoint in self._endpoints:
            # keep the first declaration if a template is listed twice
            self._by_template.setdefault(endpoint.template, endpoint)

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.resolve(path) is not None

    @property
    def templates(self) -> Tuple[str, ...]:
        return tuple(e.template for e in self._endpoints)

    def resolve(self, path: str) -> Optional[Endpoint]:
        """Return the endpoint ``path`` belongs to, or ``None`` if unknown.

        An exact template match is returned directly.  Otherwise the
        table is scanned in declaration order and the first template
        whose placeholders accept the path's segments is returned.
        """
        if not path:
            return None
        exact = self._by_template.get(path)
        if exact is not None:
            return exact
        for endpoint in self._endpoints:
            if matches(endpoint.template, path):
                return endpoint
        return None


_default_resolver = EndpointResolver()


def resolve(path: str) -> Optional[Endpoint]:
    """Resolve ``path`` against the built-in Buffer endpoint table."""
    return _default_resolver.resolve(path)
