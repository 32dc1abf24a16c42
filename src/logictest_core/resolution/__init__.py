# src/logictest_core/resolution/__init__.py
from .naming import canonical_name
from .resolver import find_only_component, resolve_board, resolve_pin, select_unique
from .exceptions import AmbiguousError, DirectionMismatchError, NotFoundError

__all__ = [
    "canonical_name",
    "find_only_component",
    "resolve_board",
    "resolve_pin",
    "select_unique",
    "AmbiguousError",
    "DirectionMismatchError",
    "NotFoundError",
]
