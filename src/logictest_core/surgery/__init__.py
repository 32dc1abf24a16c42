# src/logictest_core/surgery/__init__.py
from .substitution import (
    REGISTER_PORT_ORDER,
    GraphSubstituter,
    PlannedPort,
    RegisterProbes,
    mock_only_register,
)

__all__ = [
    "REGISTER_PORT_ORDER",
    "GraphSubstituter",
    "PlannedPort",
    "RegisterProbes",
    "mock_only_register",
]
