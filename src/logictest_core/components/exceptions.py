# src/logictest_core/components/exceptions.py
"""
Defines the diagnosable exception for invalid component construction or behaviour.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class ComponentError(DiagnosableError):
    """
    Raised when a component is given parameters it cannot work with, such as a
    bit-width outside the supported range or a constant that does not fit.
    """
    component_fqn: str
    details: str

    def __str__(self):
        return f"Component '{self.component_fqn}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Component Definition Error",
            details=self.details,
            suggestion="Check the component's parameters (bit size, constant value, pin direction).",
            context={'user_input': self.component_fqn}
        )
