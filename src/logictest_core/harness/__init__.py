# src/logictest_core/harness/__init__.py
from .exceptions import OutOfRangeError, SessionStateError
from .pins import PinHandle, PinRole
from .mock_register import MockRegister
from .session import SessionState, SimulationSession

__all__ = [
    "OutOfRangeError",
    "SessionStateError",
    "PinHandle",
    "PinRole",
    "MockRegister",
    "SessionState",
    "SimulationSession",
]
