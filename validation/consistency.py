"""
Projection Consistency Checks.

This module verifies that a constructed projection honors the contracts
downstream consumers rely on.

Check Categories
----------------
1. Round trip (inverse of forward returns the input point)
2. Equality/copy contract (copies and rebuilt projections are equal)
3. Seam predicate (a segment crosses the seam when expected, symmetrically)
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np
from numpy.typing import ArrayLike

from common.exceptions import ProjectionError
from common.logging_config import get_logger
from common.types import ProjectedPoint
from geoloc.base import Projection
from geoloc.registry import projection_from_parameters


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether the check passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


class ProjectionConsistencyChecker:
    """Checker for the behavioral contracts of a projection.

    Parameters
    ----------
    strict_mode : bool
        If True, a failed check raises `ProjectionError`.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self._logger = get_logger("ProjectionConsistencyChecker")

    def check_all(
        self,
        projection: Projection,
        lons: ArrayLike,
        lats: ArrayLike,
        tolerance_deg: float = 1e-6
    ) -> List[ValidationResult]:
        """Run the point-independent checks on a projection.

        Parameters
        ----------
        projection : Projection
            Projection under test.
        lons, lats : array_like
            Sample points in degrees for the round trip.
        tolerance_deg : float
            Round-trip tolerance in degrees.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        results = []

        # 1. Round trip
        results.append(self.check_round_trip(projection, lons, lats, tolerance_deg))

        # 2. Equality/copy contract
        results.append(self.check_copy_contract(projection))

        return results

    def check_round_trip(
        self,
        projection: Projection,
        lons: ArrayLike,
        lats: ArrayLike,
        tolerance_deg: float = 1e-6
    ) -> ValidationResult:
        """Check that inverse(forward(p)) returns p within tolerance.

        Longitude differences are wrapped, so -180 and 180 agree. A point
        that comes back NaN counts as a failure.
        """
        lons = np.asarray(lons, dtype=np.float64)
        lats = np.asarray(lats, dtype=np.float64)
        xs, ys = projection.forward_many(lons, lats)
        lon_back, lat_back = projection.inverse_many(xs, ys)

        dlon = np.abs((lon_back - lons + 180.0) % 360.0 - 180.0)
        dlat = np.abs(lat_back - lats)
        error = np.maximum(dlon, dlat)
        failed = ~(error <= tolerance_deg)
        num_failed = int(np.sum(failed))

        finite = error[np.isfinite(error)]
        return self._report(ValidationResult(
            test_name="round_trip",
            passed=num_failed == 0,
            message=f"Round trip check: {num_failed} of {error.size} points outside {tolerance_deg} deg",
            details={
                'num_points': int(error.size),
                'num_failed': num_failed,
                'num_nan': int(np.sum(np.isnan(error))),
                'max_error_deg': float(np.max(finite)) if finite.size else float('nan'),
                'tolerance_deg': tolerance_deg,
            }
        ))

    def check_copy_contract(self, projection: Projection) -> ValidationResult:
        """Check that every copy of a projection equals the original.

        Covers `construct_copy`, `copy.copy`, `copy.deepcopy` and a rebuild
        from the exported parameters. Equal copies must hash alike.
        """
        copies = {
            'construct_copy': projection.construct_copy(),
            'copy': copy.copy(projection),
            'deepcopy': copy.deepcopy(projection),
            'from_parameters': projection_from_parameters(projection.parameters),
        }
        unequal = [
            name for name, other in copies.items()
            if not (other == projection and hash(other) == hash(projection))
        ]
        return self._report(ValidationResult(
            test_name="copy_contract",
            passed=not unequal,
            message=f"Copy contract check: {len(unequal)} unequal copies",
            details={
                'projection': repr(projection),
                'unequal': unequal,
            }
        ))

    def check_seam_predicate(
        self,
        projection: Projection,
        pt1: ProjectedPoint,
        pt2: ProjectedPoint,
        expected: bool
    ) -> ValidationResult:
        """Check `cross_seam` on a segment in both directions."""
        forward = projection.cross_seam(pt1, pt2)
        backward = projection.cross_seam(pt2, pt1)
        return self._report(ValidationResult(
            test_name="seam_predicate",
            passed=forward == expected and backward == expected,
            message=f"Seam predicate check: got ({forward}, {backward}), expected {expected}",
            details={
                'pt1': pt1,
                'pt2': pt2,
                'forward': forward,
                'backward': backward,
                'expected': expected,
            }
        ))

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                self._logger.warning(f"{result.test_name} failed: {result.message}")
            if self.strict_mode:
                raise ProjectionError(f"{result.test_name} failed: {result.message}")
        return result
