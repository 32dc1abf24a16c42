# src/logictest_core/harness/exceptions.py
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class OutOfRangeError(DiagnosableError):
    """Raised when a test writes a value that is not an unsigned integer fitting the pin."""
    label: str
    value: object
    bits: int

    def __str__(self):
        return (
            f"Value {self.value!r} written to pin `{self.label}' is out of range: "
            f"expected an integer between 0 and {(1 << self.bits) - 1} ({self.bits} bits)"
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Value Out Of Range",
            details=str(self),
            suggestion="Write non-negative integers that fit in the pin's bit size. Booleans are not accepted.",
            context={'label': self.label}
        )


@dataclass(eq=False)
class SessionStateError(DiagnosableError):
    """Raised when a session, or a pin obtained from it, is used after it was disposed or failed."""
    details: str

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Session State",
            details=self.details,
            suggestion="Create a new session for every test. A session that failed mid-substitution cannot be reused.",
            context={}
        )
