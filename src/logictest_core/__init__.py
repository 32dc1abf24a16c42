# src/logictest_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("LogicTest Core package initialized.")

from .graph import Board, PortRef
from .components import COMPONENT_REGISTRY, ComponentKind, PinDirection
from .parser import NetlistParser
from .design_builder import BuiltDesign, DesignBuilder
from .resolution import canonical_name, resolve_board, resolve_pin
from .surgery import mock_only_register
from .simulation import SimulationConfig, Simulator
from .harness import MockRegister, PinHandle, PinRole, SessionState, SimulationSession
from .errors import DesignBuildError, FrameworkLogicError, LogicTestError

__all__ = [
    # Graph
    "Board", "PortRef",
    # Components
    "COMPONENT_REGISTRY", "ComponentKind", "PinDirection",
    # Loading
    "NetlistParser", "BuiltDesign", "DesignBuilder",
    # Resolution & Surgery
    "canonical_name", "resolve_board", "resolve_pin", "mock_only_register",
    # Simulation
    "SimulationConfig", "Simulator",
    # Harness
    "MockRegister", "PinHandle", "PinRole", "SessionState", "SimulationSession",
    # Top-Level Errors (Actionable Diagnostics)
    "LogicTestError", "DesignBuildError", "FrameworkLogicError",
]
