# src/logictest_core/simulation/__init__.py
from .config import ConfigParsingError, SimulationConfig, parse_simulation_config
from .engine import Simulator
from .exceptions import (
    BusContentionError,
    CombinationalLoopError,
    OscillationError,
    SimulationInputError,
)

__all__ = [
    "ConfigParsingError",
    "SimulationConfig",
    "parse_simulation_config",
    "Simulator",
    "BusContentionError",
    "CombinationalLoopError",
    "OscillationError",
    "SimulationInputError",
]
