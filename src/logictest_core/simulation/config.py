# src/logictest_core/simulation/config.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..constants import DEFAULT_MAX_SETTLE_ITERATIONS

logger = logging.getLogger(__name__)

class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """Tunables of the reference simulator."""
    max_settle_iterations: int = DEFAULT_MAX_SETTLE_ITERATIONS


def parse_simulation_config(raw_config: Optional[Dict[str, Any]]) -> SimulationConfig:
    """
    Parses the optional `simulation:` block of a design file. A missing or empty
    block yields the defaults.
    """
    if not raw_config:
        return SimulationConfig()
    unknown = sorted(set(raw_config) - {"max_settle_iterations"})
    if unknown:
        raise ConfigParsingError(f"Unknown simulation setting(s): {unknown}")
    try:
        iterations = raw_config.get("max_settle_iterations", DEFAULT_MAX_SETTLE_ITERATIONS)
        if isinstance(iterations, bool) or int(iterations) != iterations:
            raise ValueError(f"max_settle_iterations must be an integer, got {iterations!r}.")
        if iterations < 1:
            raise ValueError("max_settle_iterations must be >= 1.")
        config = SimulationConfig(max_settle_iterations=int(iterations))
    except (TypeError, ValueError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e
    logger.debug(f"Parsed simulation configuration: {config}")
    return config
