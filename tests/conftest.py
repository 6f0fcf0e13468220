"""
Shared fixtures for the projection engine tests.
"""

import numpy as np
import pytest

from geoloc.ellipsoid import EARTH_SPHERE, WGS84
from geoloc.polyconic import Polyconic
from geoloc.rotated_pole import RotatedPole


@pytest.fixture
def poly_sphere():
    """Polyconic centered on the continental US, default sphere."""
    return Polyconic(40.0, -96.0)


@pytest.fixture
def poly_wgs84():
    """Polyconic centered on the continental US, WGS84 ellipsoid."""
    return Polyconic(40.0, -96.0, ellipsoid=WGS84)


@pytest.fixture(params=["sphere", "wgs84"])
def poly(request):
    """Polyconic on each earth model in turn."""
    earth = EARTH_SPHERE if request.param == "sphere" else WGS84
    return Polyconic(40.0, -96.0, ellipsoid=earth)


@pytest.fixture
def rotated():
    """Rotated grid with a non-trivial pole and spin."""
    return RotatedPole(-50.0, 10.0, 20.0)


@pytest.fixture
def conus_grid():
    """Longitude/latitude sample grid around the polyconic origin, degrees."""
    lons, lats = np.meshgrid(np.linspace(-100.0, -80.0, 9), np.linspace(20.0, 60.0, 9))
    return lons.ravel(), lats.ravel()
