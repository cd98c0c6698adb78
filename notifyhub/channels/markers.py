"""
Declarative success markers for provider replies.

A marker pairs a dotted field path with a condition on the value found there.
Paths that do not resolve (missing key, non-object along the way) never
match, so an unexpected reply shape reads as "not delivered" rather than
blowing up with a lookup error. An empty path selects the whole reply.
"""

from dataclasses import dataclass
from typing import Any, Callable

_MISSING = object()


def lookup(data: Any, path: str) -> Any:
    if not path:
        return data
    current = data
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


@dataclass(frozen=True)
class SuccessMarker:
    path: str
    check: Callable[[Any], bool]
    description: str

    def __call__(self, data: Any) -> bool:
        value = lookup(data, self.path)
        if value is _MISSING:
            return False
        return bool(self.check(value))

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class AnyOf:
    markers: tuple[SuccessMarker, ...]

    def __call__(self, data: Any) -> bool:
        return any(marker(data) for marker in self.markers)

    def __str__(self) -> str:
        return " or ".join(str(m) for m in self.markers)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def equals(path: str, expected: Any) -> SuccessMarker:
    """Strict equality: ``0`` does not match ``False`` or ``"0"``."""
    def check(value: Any) -> bool:
        if _is_number(expected):
            return _is_number(value) and value == expected
        return type(value) is type(expected) and value == expected

    return SuccessMarker(path, check, f"{path or 'body'} == {expected!r}")


def is_number(path: str) -> SuccessMarker:
    return SuccessMarker(path, _is_number, f"{path} is a number")


def truthy(path: str) -> SuccessMarker:
    return SuccessMarker(path, bool, f"{path} is truthy")


def non_empty(path: str) -> SuccessMarker:
    def check(value: Any) -> bool:
        return isinstance(value, (list, tuple, str)) and len(value) > 0

    return SuccessMarker(path, check, f"{path} is non-empty")


def any_of(*markers: SuccessMarker) -> AnyOf:
    return AnyOf(tuple(markers))
