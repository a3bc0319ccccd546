"""
Custom HTTP routes registered next to the OAuth routes.

Routes are plain data: a frozen ``CustomRoute`` per entry, validated once when
the receiver is built, and matched with a pure function so the lookup can be
tested without a server.

Created: 2026-10-12
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from socketpaw.errors import CustomRouteInitializationError

RouteHandler = Callable[[Any, Any], Any]

_REQUIRED_KEYS = ("path", "method", "handler")


@dataclass(frozen=True, slots=True)
class CustomRoute:
    """One user-registered route. ``methods`` is stored upper-cased."""

    path: str
    methods: frozenset[str]
    handler: RouteHandler

    def matches(self, path: str, method: str) -> bool:
        return self.path == path and method.upper() in self.methods


def _missing_keys(entry: Mapping[str, Any]) -> list[str]:
    missing = []
    for key in _REQUIRED_KEYS:
        value = entry.get(key)
        if key == "handler":
            if not callable(value):
                missing.append(key)
        elif key == "path":
            if not isinstance(value, str) or not value:
                missing.append(key)
        elif not value:
            missing.append(key)
    return missing


def _normalize_methods(method: Any) -> frozenset[str]:
    """Upper-cased method set, or an empty set if ``method`` is not usable."""
    if isinstance(method, str):
        return frozenset({method.upper()})
    if isinstance(method, (bytes, Mapping)) or not isinstance(method, Iterable):
        return frozenset()
    methods = list(method)
    if not all(isinstance(m, str) and m for m in methods):
        return frozenset()
    return frozenset(m.upper() for m in methods)


def _as_mapping(entry: CustomRoute | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(entry, CustomRoute):
        return {"path": entry.path, "method": entry.methods, "handler": entry.handler}
    if isinstance(entry, Mapping):
        return entry
    return {}


def build_custom_routes(
    routes: Iterable[CustomRoute | Mapping[str, Any]] | None,
) -> tuple[CustomRoute, ...]:
    """Validate route definitions and freeze them in registration order.

    Each entry is a ``CustomRoute`` or a mapping with ``path``, ``method``
    (a string or a collection of strings) and a callable ``handler``.

    Raises:
        CustomRouteInitializationError: listing every entry that is missing
            one of the required keys.
    """
    if not routes:
        return ()

    built: list[CustomRoute] = []
    problems: list[str] = []
    for index, entry in enumerate(routes):
        data = _as_mapping(entry)
        missing = _missing_keys(data)
        methods = frozenset() if "method" in missing else _normalize_methods(data["method"])
        if "method" not in missing and not methods:
            missing.append("method")
        if missing:
            problems.append(f"route {index} ({data.get('path') or '?'}): missing {', '.join(missing)}")
            continue
        built.append(CustomRoute(path=data["path"], methods=methods, handler=data["handler"]))

    if problems:
        raise CustomRouteInitializationError(problems)
    return tuple(built)


def match_custom_route(
    routes: tuple[CustomRoute, ...], path: str, method: str
) -> CustomRoute | None:
    """Return the first route whose path equals ``path`` and accepts ``method``.

    A path match with a method the route does not accept is not a match.
    """
    for route in routes:
        if route.matches(path, method):
            return route
    return None
