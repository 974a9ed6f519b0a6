"""Reusable type definitions for power-domains.

This package provides foundational types used across the power-domains
codebase, starting with the unit-aware interval used for voltage ranges.
"""

from __future__ import annotations

from .interval import Interval, UnitError

__all__ = ["Interval", "UnitError"]
