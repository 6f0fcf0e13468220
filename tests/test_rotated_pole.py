"""
Rotated Pole Tests - rotated latitude/longitude grids.

Verifies the unit-vector rotation, known pole geometry, round trips,
the vectorised batch path, and the equality/copy contract.

Dependencies
------------
pytest
numpy
"""

import copy

import numpy as np
import pytest

from common.types import GeoPoint, ProjectedPoint
from geoloc.mapmath import normalize_longitude_deg
from geoloc.rotated_pole import RotatedPole, rotate_lonlat


# ---------------------------------------------------------------------------
# Rotation
# ---------------------------------------------------------------------------

class TestRotate:

    @pytest.mark.parametrize("lon, lat", [(12.0, 60.0), (-170.0, -30.0), (0.0, 0.0), (95.0, 89.0)])
    def test_involution(self, lon, lat):
        s, c = np.sin(np.radians(35.0)), np.cos(np.radians(35.0))
        rlon, rlat = rotate_lonlat(lon, lat, 10.0, 20.0, s, c)
        back_lon, back_lat = rotate_lonlat(rlon, rlat, -20.0, -10.0, -s, c)
        assert float(normalize_longitude_deg(back_lon)) == pytest.approx(lon, abs=1e-9)
        assert float(back_lat) == pytest.approx(lat, abs=1e-9)

    def test_vector_on_axis_has_zero_longitude(self):
        rlon, rlat = rotate_lonlat(0.0, 90.0, 0.0, 0.0, 0.0, 1.0)
        assert float(rlon) == 0.0
        assert float(rlat) == pytest.approx(90.0)

    def test_broadcasts(self):
        rlon, rlat = rotate_lonlat([0.0, 10.0, 20.0], 45.0, 0.0, 0.0, 0.5, np.sqrt(0.75))
        assert rlon.shape == (3,)
        assert rlat.shape == (3,)


# ---------------------------------------------------------------------------
# RotatedPole
# ---------------------------------------------------------------------------

class TestRotatedPole:

    def test_defaults(self):
        proj = RotatedPole()
        assert (proj.south_pole_lat, proj.south_pole_lon, proj.south_pole_angle) == (0.0, 0.0, 0.0)
        assert proj.sin_dlat == pytest.approx(1.0)
        assert proj.cos_dlat == pytest.approx(0.0, abs=1e-15)

    def test_true_south_pole_is_identity(self):
        proj = RotatedPole(-90.0, 0.0, 0.0)
        pt = proj.forward(GeoPoint(12.0, 60.0))
        assert pt.x == pytest.approx(12.0)
        assert pt.y == pytest.approx(60.0)

    def test_grid_pole_maps_to_rotated_pole(self, rotated):
        pt = rotated.forward(GeoPoint(10.0, -50.0))
        assert pt.y == pytest.approx(-90.0)

    def test_rotated_equator_known_point(self, rotated):
        pt = rotated.forward(GeoPoint(10.0, 40.0))
        assert pt.x == pytest.approx(-20.0, abs=1e-9)
        assert pt.y == pytest.approx(0.0, abs=1e-9)

        geo = rotated.inverse(ProjectedPoint(-20.0, 0.0))
        assert geo.longitude == pytest.approx(10.0, abs=1e-9)
        assert geo.latitude == pytest.approx(40.0, abs=1e-9)

    def test_round_trip(self, rotated):
        back = rotated.inverse(rotated.forward(GeoPoint(12.0, 60.0)))
        assert back.longitude == pytest.approx(12.0, abs=1e-4)
        assert back.latitude == pytest.approx(60.0, abs=1e-4)

    def test_inverse_longitude_normalized(self, rotated):
        lons = np.linspace(-179.0, 179.0, 37)
        lon, _ = rotated.inverse_many(lons, np.full_like(lons, 15.0))
        assert np.all(lon > -180.0)
        assert np.all(lon <= 180.0)

    def test_batch_matches_points(self, rotated):
        lons = np.array([-120.0, 0.0, 12.0, 150.0])
        lats = np.array([-45.0, 0.0, 60.0, 80.0])
        xs, ys = rotated.forward_many(lons, lats)
        for lon, lat, x, y in zip(lons, lats, xs, ys):
            pt = rotated.forward(GeoPoint(lon, lat))
            assert (pt.x, pt.y) == pytest.approx((x, y))

    def test_batch_round_trip(self, rotated):
        lons, lats = np.meshgrid(np.linspace(-170.0, 170.0, 18), np.linspace(-80.0, 80.0, 9))
        lon, lat = rotated.inverse_many(*rotated.forward_many(lons, lats))
        np.testing.assert_allclose(lon, lons, atol=1e-8)
        np.testing.assert_allclose(lat, lats, atol=1e-8)

    def test_nan_propagates(self, rotated):
        xs, ys = rotated.forward_many([np.nan], [10.0])
        assert np.isnan(xs[0]) and np.isnan(ys[0])

    def test_never_crosses_seam(self, rotated):
        assert not rotated.cross_seam(ProjectedPoint(-179.0, 0.0), ProjectedPoint(179.0, 0.0))
        assert not rotated.cross_seam(ProjectedPoint(np.inf, 0.0), ProjectedPoint(0.0, 0.0))

    def test_metadata(self, rotated):
        assert not rotated.is_lat_lon
        assert rotated.angular_units
        assert rotated.name == "RotatedLatLon"
        assert rotated.type_label == "Rotated Lat Lon"
        assert rotated.ellipsoid is None
        assert dict(rotated.parameters) == {
            "grid_mapping_name": "rotated_latlon_grib",
            "grid_south_pole_latitude": -50.0,
            "grid_south_pole_longitude": 10.0,
            "grid_south_pole_angle": 20.0,
        }

    def test_params_to_string(self, rotated):
        assert rotated.params_to_string() == "southPoleLat=-50.0 southPoleLon=10.0 southPoleAngle=20.0"

    def test_proj4_string(self, rotated):
        assert rotated.proj4_string.startswith("+proj=ob_tran +o_proj=longlat +o_lat_p=50.0")
        assert "+lon_0=10.0" in rotated.proj4_string


class TestRotatedPoleEquality:

    def test_equal_values(self, rotated):
        other = RotatedPole(-50.0, 10.0, 20.0)
        assert rotated == other
        assert hash(rotated) == hash(other)

    @pytest.mark.parametrize("args", [(-40.0, 10.0, 20.0), (-50.0, 11.0, 20.0), (-50.0, 10.0, 0.0)])
    def test_different_values(self, rotated, args):
        assert rotated != RotatedPole(*args)

    def test_not_equal_to_other_types(self, rotated):
        assert rotated != "rotated"

    def test_copies(self, rotated):
        for other in (rotated.construct_copy(), copy.copy(rotated), copy.deepcopy(rotated)):
            assert other == rotated
            assert other is not rotated
