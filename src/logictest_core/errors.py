# src/logictest_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class LogicTestError(Exception):
    """Base class for all custom, user-facing errors in LogicTest Core."""
    pass

class DesignBuildError(LogicTestError):
    """
    Raised when loading a design file into boards fails for any reason, from YAML
    parsing to wiring. The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass

class FrameworkLogicError(LogicTestError):
    """Raised when an internal contract of the framework itself is violated."""
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It is a valid `Exception` for use in `except` clauses, and it declares
    `get_diagnostic_report` abstract so every subclass must say how it is reported.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Ambiguous Name").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (board, label, source file, user input).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============== LogicTest Core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if board := context.get('board'):
        lines.append(f"Subcircuit:     {board}")
    if label := context.get('label'):
        lines.append(f"Label:          {label}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
