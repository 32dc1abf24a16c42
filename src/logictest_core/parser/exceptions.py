# src/logictest_core/parser/exceptions.py
"""
Defines the diagnosable exceptions for reading and validating design files.

`ParsingError` covers file-level problems (missing file, unreadable file,
invalid YAML). `SchemaValidationError` covers YAML that loads but does not have
the structure of a design. Both derive from `DiagnosableError`, so the design
builder facade can report them like any other build failure.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local base class for all YAML parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the design file.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised when a design file cannot be loaded at all: it does not exist, cannot
    be read, or is not a YAML mapping.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Raised when Cerberus validation fails: missing sections, invalid identifiers,
    malformed wire endpoints, duplicate component ids or circuit names.
    """
    errors: Dict[str, Any]
    file_path: Path

    def _error_lines(self, prefix: str):
        return [
            f"  - {prefix} '{field}': {issue[0] if isinstance(issue, list) and issue else issue}"
            for field, issue in sorted(self.errors.items(), key=lambda item: str(item[0]))
        ]

    def __str__(self):
        return (
            f"YAML schema validation failed for file '{self.file_path}':\n"
            + "\n".join(self._error_lines("In field"))
        )

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the YAML file does not conform to the design schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n"
            + "\n".join(self._error_lines("Field"))
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion=(
                "Correct the specified fields to match the documented format. Check for invalid "
                "identifiers (e.g., using '-' or '.'), wire endpoints not written as 'component.port', "
                "duplicate component ids, or a missing 'circuits' section."
            ),
            context={'source_file': self.file_path}
        )
