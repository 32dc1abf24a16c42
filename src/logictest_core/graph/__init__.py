# src/logictest_core/graph/__init__.py
from .handles import Link, PortDirection, PortRef, PortSpec
from .board import Board
from .exceptions import GraphMutationFailure, NetlistStructureError, WidthMismatchError

__all__ = [
    # Handles
    "Link",
    "PortDirection",
    "PortRef",
    "PortSpec",
    # Arena
    "Board",
    # Exceptions
    "GraphMutationFailure",
    "NetlistStructureError",
    "WidthMismatchError",
]
