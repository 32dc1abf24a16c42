# src/logictest_core/components/base_enums.py
from enum import Enum, auto


class ComponentKind(Enum):
    """
    Coarse classification used by name resolution and graph surgery to filter
    the components of a board.
    """
    INPUT_PIN = auto()   # A pin the test harness drives.
    OUTPUT_PIN = auto()  # A pin the test harness observes.
    REGISTER = auto()    # A clocked storage element.
    OTHER = auto()       # Any other logic (gates, arithmetic, constants).


class PinDirection(Enum):
    """Direction of a pin as seen from the circuit: an input feeds the circuit."""
    INPUT = "input"
    OUTPUT = "output"

    def __str__(self):
        return self.value
