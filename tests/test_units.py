"""
Unit Conversion Tests - pint quantities as projection parameters.

Dependencies
------------
pytest
pint
"""

import math

import pytest

from common.exceptions import ProjectionConfigurationError
from common.units import Q_, as_degrees, as_kilometers, as_meters
from geoloc.polyconic import Polyconic
from geoloc.rotated_pole import RotatedPole


class TestConversions:

    def test_bare_numbers_keep_unit(self):
        assert as_kilometers(12) == 12.0
        assert as_degrees(45.5) == 45.5
        assert as_meters(3) == 3.0

    def test_meters_to_kilometers(self):
        assert as_kilometers(Q_(500, "m")) == pytest.approx(0.5)

    def test_radians_to_degrees(self):
        assert as_degrees(Q_(math.pi, "radian")) == pytest.approx(180.0)

    def test_wrong_dimension_raises(self):
        with pytest.raises(ProjectionConfigurationError, match="incompatible units"):
            as_kilometers(Q_(3, "second"), "false_easting")

    def test_non_number_raises(self):
        with pytest.raises(ProjectionConfigurationError):
            as_degrees("north")


class TestQuantityParameters:

    def test_polyconic_offsets_in_meters(self):
        proj = Polyconic(40.0, -96.0, Q_(500.0, "m"), Q_(2.0, "km"))
        assert proj.false_easting == pytest.approx(0.5)
        assert proj.false_northing == pytest.approx(2.0)

    def test_polyconic_origin_in_radians(self):
        proj = Polyconic(Q_(math.pi / 4, "radian"), 0.0)
        assert proj.origin_lat == pytest.approx(45.0)

    def test_rotated_pole_angle_quantity(self):
        proj = RotatedPole(Q_(-50.0, "degree"), 10.0, Q_(20.0, "degree"))
        assert proj == RotatedPole(-50.0, 10.0, 20.0)

    def test_polyconic_bad_offset_units(self):
        with pytest.raises(ProjectionConfigurationError):
            Polyconic(40.0, -96.0, false_easting=Q_(1.0, "degree"))
