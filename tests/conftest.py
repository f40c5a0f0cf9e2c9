import numpy as np
import pytest

from geodesic.ellipsoid import Ellipsoid


@pytest.fixture
def random_geodesics():
    """A reproducible batch of start points, azimuths and distances."""
    rng = np.random.default_rng(20130501)
    size = 200
    lat1 = rng.uniform(-89.0, 89.0, size)
    lon1 = rng.uniform(-180.0, 180.0, size)
    azi1 = rng.uniform(-180.0, 180.0, size)
    s12 = rng.uniform(0.0, 1.9e7, size)
    return lat1, lon1, azi1, s12


@pytest.fixture
def sphere():
    return Ellipsoid(a=6371000.0, e2=0.0, name="sphere")
