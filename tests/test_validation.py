"""
Consistency Checker Tests - round trip, copy contract, seam predicate.

Dependencies
------------
pytest
numpy
"""

import numpy as np
import pytest

from common.exceptions import ProjectionError
from common.types import ProjectedPoint
from geoloc.ellipsoid import Ellipsoid
from geoloc.polyconic import Polyconic
from validation.consistency import ProjectionConsistencyChecker, ValidationResult


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def checker():
    return ProjectionConsistencyChecker()


@pytest.fixture
def strict_checker():
    return ProjectionConsistencyChecker(strict_mode=True, log_violations=False)


class _BrokenCopy(Polyconic):
    """Polyconic whose copies silently move the origin."""

    def construct_copy(self):
        return _BrokenCopy(self.origin_lat + 1.0, self.origin_lon)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestRoundTrip:

    def test_polyconic_passes(self, checker, poly, conus_grid):
        result = checker.check_round_trip(poly, *conus_grid)
        assert isinstance(result, ValidationResult)
        assert result.passed
        assert result.details['num_points'] == 81
        assert result.details['max_error_deg'] < 1e-6

    def test_rotated_pole_passes(self, checker, rotated):
        lons, lats = np.meshgrid(np.linspace(-170.0, 170.0, 18), np.linspace(-80.0, 80.0, 9))
        assert checker.check_round_trip(rotated, lons, lats).passed

    def test_nan_counts_as_failure(self, checker, poly):
        result = checker.check_round_trip(poly, [np.nan, -96.0], [40.0, 40.0])
        assert not result.passed
        assert result.details['num_failed'] == 1
        assert result.details['num_nan'] == 1

    def test_strict_mode_raises(self, strict_checker, poly):
        with pytest.raises(ProjectionError, match="round_trip"):
            strict_checker.check_round_trip(poly, [np.nan], [0.0])


class TestCopyContract:

    def test_variants_pass(self, checker, poly, rotated):
        assert checker.check_copy_contract(poly).passed
        assert checker.check_copy_contract(rotated).passed

    def test_custom_eccentricity_passes(self, checker):
        proj = Polyconic(40.0, -96.0, ellipsoid=Ellipsoid(6378137.0, 0.00669438))
        result = checker.check_copy_contract(proj)
        assert result.passed
        assert result.details['unequal'] == []

    def test_broken_copy_detected(self, checker, caplog):
        result = checker.check_copy_contract(_BrokenCopy(40.0, -96.0))
        assert not result.passed
        assert set(result.details['unequal']) >= {'construct_copy', 'copy', 'deepcopy'}
        assert any("copy_contract failed" in record.message for record in caplog.records)


class TestSeamPredicate:

    def test_expected_crossing(self, checker, poly_sphere):
        result = checker.check_seam_predicate(
            poly_sphere, ProjectedPoint(-15000.0, 0.0), ProjectedPoint(15000.0, 0.0), True
        )
        assert result.passed

    def test_unexpected_result(self, checker, poly_sphere):
        result = checker.check_seam_predicate(
            poly_sphere, ProjectedPoint(-5000.0, 0.0), ProjectedPoint(5000.0, 0.0), True
        )
        assert not result.passed
        assert result.details['forward'] is False


class TestCheckAll:

    def test_all_pass(self, checker, poly, conus_grid):
        results = checker.check_all(poly, *conus_grid)
        assert [r.test_name for r in results] == ["round_trip", "copy_contract"]
        assert all(r.passed for r in results)
