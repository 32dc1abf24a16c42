# src/logictest_core/simulation/exceptions.py
"""
Defines the diagnosable exceptions of the reference simulator.

These describe designs the simulator cannot evaluate deterministically, and
writes it cannot accept. They are raised from `evaluate()` / `write()` and are
never retried.
"""
from dataclasses import dataclass, field
from typing import List

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class CombinationalLoopError(DiagnosableError):
    """Raised when combinational components feed back into themselves without a register."""
    board_name: str
    loop: List[str] = field(default_factory=list)

    def __str__(self):
        return f"Subcircuit `{self.board_name}' contains a combinational loop through: {' -> '.join(self.loop)}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Combinational Loop",
            details=str(self),
            suggestion="Break the loop with a register, or remove the feedback wire.",
            context={'board': self.board_name}
        )


@dataclass(eq=False)
class BusContentionError(DiagnosableError):
    """Raised when several sources drive different values onto the same link."""
    board_name: str
    net: str
    values: List[int] = field(default_factory=list)

    def __str__(self):
        return f"Subcircuit `{self.board_name}' has conflicting values {self.values} driven onto the wire {self.net}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Bus Contention",
            details=str(self),
            suggestion="Make sure every wire has exactly one component driving it.",
            context={'board': self.board_name}
        )


@dataclass(eq=False)
class OscillationError(DiagnosableError):
    """Raised when sequential elements keep changing state and the circuit never settles."""
    board_name: str
    iterations: int

    def __str__(self):
        return f"Subcircuit `{self.board_name}' did not settle after {self.iterations} clocking rounds"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Simulation Did Not Settle",
            details=str(self),
            suggestion="Check for registers clocked by signals derived from their own outputs, or raise max_settle_iterations.",
            context={'board': self.board_name}
        )


@dataclass(eq=False)
class SimulationInputError(DiagnosableError):
    """Raised when a value is written to a port the harness cannot drive, or does not fit it."""
    board_name: str
    details: str

    def __str__(self):
        return f"Cannot drive a value in subcircuit `{self.board_name}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Simulation Input",
            details=self.details,
            suggestion="Only input pins can be driven, with unsigned values that fit their bit size.",
            context={'board': self.board_name}
        )
