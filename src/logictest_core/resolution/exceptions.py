# src/logictest_core/resolution/exceptions.py
"""
Defines the diagnosable exceptions for looking up boards, pins and registers by name.

Lookups never guess: zero matches and several matches are both errors, and a
unique match with the wrong direction is reported before its width is checked.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from ..components.base_enums import PinDirection
from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class NotFoundError(DiagnosableError):
    """
    Raised when no element matches a lookup.

    `scope` is the board name, or None when searching the boards of a design.
    """
    element_kind: str
    scope: Optional[str] = None
    name: Optional[str] = None

    def __str__(self):
        if self.scope is None:
            return (
                f"No {self.element_kind} match the name `{self.name}'. "
                f"Please double-check the names of all your {self.element_kind}."
            )
        if self.name is None:
            return f"Subcircuit `{self.scope}' contains no {self.element_kind}!"
        return f"Subcircuit `{self.scope}' contains no {self.element_kind} labelled `{self.name}'!"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Element Not Found",
            details=str(self),
            suggestion=(
                "Names are compared in lowercase with everything except letters and digits removed. "
                "Check the spelling of the label in the circuit and in the test."
            ),
            context={'board': self.scope, 'user_input': self.name}
        )


@dataclass(eq=False)
class AmbiguousError(DiagnosableError):
    """Raised when more than one element matches a lookup that must be unique."""
    element_kind: str
    match_count: int
    scope: Optional[str] = None
    name: Optional[str] = None
    candidates: List[str] = field(default_factory=list)

    def __str__(self):
        if self.scope is None:
            return (
                f"More than one subcircuit has the name `{self.name}'. "
                f"Can't continue deterministically."
            )
        if self.name is None:
            return f"Subcircuit `{self.scope}' contains {self.match_count} {self.element_kind}, expected 1"
        return (
            f"Subcircuit `{self.scope}' contains {self.match_count} {self.element_kind} "
            f"labelled `{self.name}', expected 1"
        )

    def get_diagnostic_report(self) -> str:
        details = str(self)
        if self.candidates:
            details += "\nMatching elements:\n" + "\n".join(f"  - {c}" for c in self.candidates)
        return format_diagnostic_report(
            error_type="Ambiguous Name",
            details=details,
            suggestion="Rename or remove the duplicates so that exactly one element matches.",
            context={'board': self.scope, 'user_input': self.name}
        )


@dataclass(eq=False)
class DirectionMismatchError(DiagnosableError):
    """Raised when a pin is an input where an output was expected, or vice versa."""
    board_name: str
    label: str
    expected: PinDirection
    actual: PinDirection

    def __str__(self):
        return (
            f"Subcircuit `{self.board_name}' has {self.actual} pin labelled `{self.label}', "
            f"but expected it to be an {self.expected} pin instead"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Pin Direction Mismatch",
            details=str(self),
            suggestion="Swap the pin between input and output in the circuit, or fix the direction declared by the test.",
            context={'board': self.board_name, 'label': self.label}
        )
