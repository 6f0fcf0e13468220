"""
Exception Hierarchy for the Projection Engine.

Lets callers catch projection failures distinctly from Python built-in
exceptions. Each exception subclasses both ``ProjectionError`` and the
appropriate built-in exception, so existing ``except ValueError`` handlers
keep working.

Numeric non-convergence has no exception: it is reported as a NaN point.
"""


class ProjectionError(Exception):
    """Base exception for all projection errors."""


class ProjectionConfigurationError(ProjectionError, ValueError):
    """Invalid projection configuration detected at construction time.

    Raised for invalid ellipsoids (eccentricity squared outside [0, 1),
    non-positive axes), meridian series failures, parameter values of the
    wrong type or units, and unknown grid mapping names. No partially
    built projection is ever returned.
    """


class InvalidCoordinateError(ProjectionError, ValueError):
    """A coordinate that no transform can accept, such as an infinite longitude."""


class NumericInstabilityError(ProjectionError, ArithmeticError):
    """Unrecoverable loss of precision inside an iterative solver.

    Raised by the ellipsoidal polyconic inverse when cos(latitude)
    underflows the solver guard. Fatal for the single call that hit it,
    unlike ordinary non-convergence.
    """
