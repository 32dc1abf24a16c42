# src/logictest_core/graph/exceptions.py
"""
Defines the diagnosable exceptions raised by the Board graph model.

`WidthMismatchError` is shared with the resolver and the substitution engine:
wherever a bit-width disagrees with an expectation, the same error type is
raised so callers can catch it in one place.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class WidthMismatchError(DiagnosableError):
    """
    Raised when an element's bit-width disagrees with what the caller or the
    other end of a connection requires.
    """
    board_name: str
    subject: str
    expected_bits: int
    actual_bits: int

    def __str__(self):
        return (
            f"Subcircuit `{self.board_name}' has {self.subject} with {self.actual_bits} bits, "
            f"but expected {self.expected_bits} bits"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Bit-Width Mismatch",
            details=str(self),
            suggestion="Change the bit size of the element in the circuit, or the bit size declared by the test.",
            context={'board': self.board_name}
        )


@dataclass(eq=False)
class NetlistStructureError(DiagnosableError):
    """
    Raised when a requested graph edit or a design description does not make
    structural sense (unknown port, self-connection, unknown component type...).
    """
    board_name: str
    details: str

    def __str__(self):
        return f"Invalid structure in subcircuit `{self.board_name}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Netlist Structure Error",
            details=self.details,
            suggestion="Check the component ids, port names and wires referenced in the design.",
            context={'board': self.board_name}
        )


@dataclass(eq=False)
class GraphMutationFailure(DiagnosableError):
    """
    Raised when the Board refuses an edit. During register substitution this is
    fatal for the test session, since the graph may already be partially edited.
    """
    board_name: str
    details: str

    def __str__(self):
        return f"Graph edit rejected in subcircuit `{self.board_name}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Graph Mutation Failure",
            details=self.details,
            suggestion="The subcircuit may be partially rewired. Discard this session and load the design again.",
            context={'board': self.board_name}
        )
