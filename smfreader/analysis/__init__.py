"""Analysis tools for Standard MIDI Files."""

from smfreader.analysis.validator import SMFValidator, ValidationIssue, ValidationResult

__all__ = [
    "SMFValidator",
    "ValidationIssue",
    "ValidationResult",
]
