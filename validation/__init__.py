"""
Validation Framework for the Projection Engine.

This module provides consistency checks for constructed projections.
"""

from validation.consistency import (
    ProjectionConsistencyChecker,
    ValidationResult,
)

__all__ = [
    "ProjectionConsistencyChecker",
    "ValidationResult",
]
