"""
Custom exception hierarchy for power-domains.

Provides consistent error handling with context, suggestions, and actionable guidance.
All exceptions include:
- Context information (power domain, declaration file, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from power_domains.exceptions import ParseError, ValidationError

    # Raise with context and suggestions
    raise ParseError(
        "Invalid TOML in declaration file",
        context={"file": "chip.toml", "line": 12},
        suggestions=["Check for an unterminated string"]
    )

    # Validation with multiple errors
    errors = ["Missing nominal voltage", "Missing voltage range"]
    raise ValidationError(errors, context={"power_domain": "vdd"})
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class PowerDomainError(Exception):
    """
    Base exception for all power-domains errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (domain, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ValidationError(PowerDomainError):
    """
    Power domain attributes failed validation.

    Collects all validation errors instead of failing on the first one,
    so a single construction attempt reports every problem.

    Example::

        errors = [
            "Power domain attribute 'description' must be a str!",
            "Missing voltage range for power domain 'vdd'!",
        ]
        raise ValidationError(errors, context={"power_domain": "vdd"})

    Attributes:
        errors: List of individual validation error messages
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Validation failed with {len(errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class AttributeTypeError(ValidationError, TypeError):
    """
    Validation failed and at least one attribute had the wrong type.

    Raised instead of a plain ``ValidationError`` when, for example,
    ``voltage_range`` is a list rather than an ``Interval``. Catchable as
    either ``ValidationError`` or ``TypeError``.
    """

    pass


class DuplicateIdError(PowerDomainError):
    """
    An identifier was registered twice.

    Raised when adding a power domain whose id already exists in a
    collection, or a pin whose id already exists for the same role.

    Example::

        raise DuplicateIdError(
            "Cannot create power domain 'vdd', it already exists!",
            context={"power_domain": "vdd"},
        )
    """

    pass


class ParseError(PowerDomainError):
    """
    Declaration file parsing failed.

    Raised when a TOML or YAML declaration file cannot be parsed due to
    syntax errors.

    Example::

        raise ParseError(
            "Invalid YAML",
            context={"file": "chip.yaml", "line": 4},
            suggestions=["Check indentation"]
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        # Build context from convenience parameters
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line

        super().__init__(message, ctx, suggestions)


class ConfigurationError(PowerDomainError):
    """
    Declaration content is invalid.

    Raised when a declaration file parses but has the wrong shape, such
    as an unknown section or a voltage that is not a voltage.

    Example::

        raise ConfigurationError(
            "Unknown section 'domains'",
            context={"file": "chip.toml", "known": ["power_domains", "pins"]},
            suggestions=["Rename the section to 'power_domains'"]
        )
    """

    pass


__all__ = [
    "PowerDomainError",
    "ValidationError",
    "AttributeTypeError",
    "DuplicateIdError",
    "ParseError",
    "ConfigurationError",
]
