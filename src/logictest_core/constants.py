# src/logictest_core/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Structural Limits ---

#: Widest bus any port may carry, matching the widest value a pin can hold.
MAX_BITS: int = 32

# --- Graph Surgery ---

#: Grid step used when searching for a free spot to drop a probe pin.
#: The search walks diagonally from the origin: (0, 0), (32, 32), (64, 64), ...
PROBE_PLACEMENT_STEP: int = 32

# --- Reference Simulator ---

#: Upper bound on combinational-pass / clocking rounds in one `evaluate()` call.
DEFAULT_MAX_SETTLE_ITERATIONS: int = 100

logger.debug("Defined core constants: MAX_BITS, PROBE_PLACEMENT_STEP, DEFAULT_MAX_SETTLE_ITERATIONS")
