"""
Tests for secondary effects: atmosphere, casualties, historical match, comparison text.
"""

import math

import pytest

from effects import (
    HISTORICAL_IMPACTS, calculate_atmospheric_effects, calculate_population_impact,
    compute_secondary_effects, energy_comparison, find_historical_match,
)
from errors import InvalidInput
from simulation import compute_impact_physics
from terrain import get_terrain


class TestAtmosphericEffects:

    def test_global_catastrophe(self):
        fx = calculate_atmospheric_effects(1e4)
        assert fx.dust_cloud_volume_km3 == pytest.approx(1e4 ** 0.4 * 0.5)
        assert fx.temperature_drop_c == pytest.approx(8.0)
        assert fx.has_global_effects is True
        assert fx.duration_label == "Years to decades"

    def test_temperature_drop_caps(self):
        assert calculate_atmospheric_effects(1e8).temperature_drop_c == 15
        # 1000 Mt is not above the top threshold
        fx = calculate_atmospheric_effects(1000)
        assert fx.temperature_drop_c == pytest.approx(3.0)
        assert fx.duration_label == "Months to years"

    def test_regional_and_local(self):
        fx = calculate_atmospheric_effects(50)
        assert (fx.temperature_drop_c, fx.has_global_effects, fx.duration_label) == \
            (1, False, "Weeks to months")
        fx = calculate_atmospheric_effects(5)
        assert (fx.temperature_drop_c, fx.has_global_effects, fx.duration_label) == \
            (0, False, "Days")


class TestPopulationImpact:

    def test_urban_unit_radius(self):
        pop = calculate_population_impact(1.0, get_terrain("urban"), 50)

        assert pop.direct == math.floor(math.pi * 5000 * 0.9)
        assert pop.extended == math.floor(3 * math.pi * 5000 * 0.3)
        assert pop.tsunami == 0
        assert pop.total == pop.direct + pop.extended
        assert pop.affected == pop.total * 3

    def test_ocean_tsunami_casualties(self):
        pop = calculate_population_impact(5.0, get_terrain("ocean"), 100)

        assert pop.direct == 0
        assert pop.extended == 0
        assert pop.tsunami == 100000
        assert pop.total == 100000
        assert pop.affected == 300000

    def test_no_tsunami_below_one_megaton(self):
        pop = calculate_population_impact(1.0, get_terrain("coastal"), 0.9)
        assert pop.tsunami == 0

    def test_counts_are_ints(self):
        pop = calculate_population_impact(9.15, get_terrain("rural"), 75)
        for value in (pop.direct, pop.extended, pop.tsunami, pop.total, pop.affected):
            assert isinstance(value, int)


class TestHistoricalMatch:

    @pytest.mark.parametrize("event", HISTORICAL_IMPACTS, ids=lambda h: h.key)
    def test_exact_energy_selects_entry(self, event):
        assert find_historical_match(event.energy_megatons) is event

    def test_chicxulub_scale(self):
        assert find_historical_match(100_000_000).key == "chicxulub"

    def test_nearest_in_log_space(self):
        assert find_historical_match(0.01).key == "chelyabinsk"
        assert find_historical_match(75).key == "tunguska"
        assert find_historical_match(1e6).key == "chicxulub"

    def test_non_positive_energy(self):
        with pytest.raises(InvalidInput):
            find_historical_match(0)


class TestEnergyComparison:

    def test_smallest_bucket_interpolates_tons(self):
        text = energy_comparison(0.005)
        assert text.startswith("Equivalent to 5 tons of TNT")

    def test_smallest_bucket_rounds_halves_up(self):
        assert energy_comparison(0.0025).startswith("Equivalent to 3 tons of TNT")
        assert energy_comparison(0.0005).startswith("Equivalent to 1 tons of TNT")

    @pytest.mark.parametrize("megatons,fragment", [
        (0.5, "large conventional explosion"),
        (10, "early nuclear weapons"),
        (50, "Castle Bravo"),
        (500, "Approaching extinction-level"),
        (1000, "Mass extinction event"),
        (100_000_000, "Civilization-ending"),
        (1e300, "Civilization-ending"),
    ])
    def test_buckets(self, megatons, fragment):
        assert fragment in energy_comparison(megatons)


class TestSecondaryEffects:

    def test_bundle(self, default_params):
        terrain = get_terrain("urban")
        physics = compute_impact_physics(default_params, terrain)
        fx = compute_secondary_effects(physics, terrain)

        assert fx.population == calculate_population_impact(physics.blast_radius_km, terrain,
                                                            physics.megatons)
        assert fx.historical_match.key == "tunguska"
        assert "Castle Bravo" in fx.comparison_text
        assert fx.to_dict()["atmospheric"]["duration_label"] == "Weeks to months"
