"""
Tests for the terrain catalog and coordinate classifier.
"""

import numpy as np
import pytest

from errors import InvalidInput
from terrain import (
    COASTAL, DESERT, OCEAN, RURAL, TERRAINS, URBAN,
    classify_terrain, get_terrain, terrain_for,
)


class TestTerrainCatalog:
    """Test the fixed terrain table."""

    def test_catalog_has_six_entries(self):
        assert set(TERRAINS) == {"ocean", "coastal", "urban", "rural", "desert", "mountain"}

    def test_only_water_terrain_carries_tsunamis(self):
        wet = {t.id for t in TERRAINS.values() if t.tsunami_multiplier > 0}
        assert wet == {OCEAN, COASTAL}

    def test_catalog_values(self):
        urban = get_terrain(URBAN)
        assert urban.population_density == 5000
        assert urban.seismic_multiplier == 1.3
        assert get_terrain(OCEAN).crater_multiplier == 0.3
        assert get_terrain("mountain").seismic_multiplier == 1.5

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            TERRAINS["swamp"] = TERRAINS[RURAL]

    def test_unknown_terrain(self):
        with pytest.raises(InvalidInput):
            get_terrain("swamp")


class TestClassifyTerrain:
    """Test rule precedence of the coordinate classifier."""

    @pytest.mark.parametrize("lat,lon,expected", [
        (0, -30, OCEAN),       # mid-Atlantic
        (0, 90, OCEAN),        # Indian Ocean
        (40, -30, COASTAL),    # ocean band, |lat| > 30
        (0, 150, COASTAL),     # ocean band, |lon| > 140
        (25, 10, DESERT),      # Sahara, west of the ocean band
        (51.5, -0.1, URBAN),   # London
        (52.0, 1.0, URBAN),    # within 2 degrees of London
        (0, 0, RURAL),
        (60, 100, RURAL),
        (-80, 0, RURAL),
    ])
    def test_known_points(self, lat, lon, expected):
        assert classify_terrain(lat, lon) == expected

    def test_ocean_band_wins_over_desert(self):
        """South-western US desert window lies inside the ocean band."""
        assert classify_terrain(35, -110) == COASTAL

    def test_ocean_band_wins_over_urban(self):
        """New York sits inside the ocean band, so it is never urban."""
        assert classify_terrain(40.7, -74) == COASTAL

    def test_classification_is_total(self):
        for lat in np.arange(-90, 90.1, 2.5):
            for lon in np.arange(-180, 180.1, 2.5):
                assert classify_terrain(float(lat), float(lon)) in TERRAINS

    def test_terrain_for_coordinate(self):
        from simulation import GeoCoordinate

        terrain = terrain_for(GeoCoordinate(25, 10))
        assert terrain is TERRAINS[DESERT]
