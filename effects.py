# effects.py
"""
Secondary impact effects: atmosphere, casualties, historical comparison.

Everything here is derived from a PhysicsResult plus the impact terrain.
Thresholds and caps are fixed calibration constants.
"""

import logging
import math
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

import numpy as np

from errors import InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AtmosphericEffects:
    dust_cloud_volume_km3: float
    temperature_drop_c: float
    has_global_effects: bool
    duration_label: str


@dataclass(frozen=True)
class PopulationImpact:
    direct: int
    extended: int
    tsunami: int
    total: int
    affected: int


@dataclass(frozen=True)
class HistoricalImpact:
    key: str
    name: str
    energy_megatons: float
    diameter_m: float
    location: str
    casualties: Union[int, str]  # a count, or a label where no count makes sense
    description: str


@dataclass(frozen=True)
class SecondaryEffects:
    atmospheric: AtmosphericEffects
    population: PopulationImpact
    historical_match: HistoricalImpact
    comparison_text: str

    def to_dict(self):
        return asdict(self)


# catalog order is the tie-break order for find_historical_match
HISTORICAL_IMPACTS = (
    HistoricalImpact('tunguska', 'Tunguska Event (1908)', 15, 50,
                     'Siberia, Russia', 0,
                     'Airburst that flattened 2,000 km² of forest'),
    HistoricalImpact('chelyabinsk', 'Chelyabinsk Meteor (2013)', 0.5, 20,
                     'Russia', 1500,
                     'Airburst that damaged 7,200 buildings'),
    HistoricalImpact('barringer', 'Barringer Crater (50,000 years ago)', 10, 50,
                     'Arizona, USA', 0,
                     'Created 1.2 km crater in desert'),
    HistoricalImpact('chicxulub', 'Chicxulub Impact (66 million years ago)', 100000000, 10000,
                     'Yucatán Peninsula, Mexico', 'Mass extinction',
                     'Caused dinosaur extinction, 180 km crater'),
)

_HISTORICAL_LOG_ENERGY = np.log10([h.energy_megatons for h in HISTORICAL_IMPACTS])

# (upper bound in megatons, text); the last bucket catches everything else
ENERGY_COMPARISONS = (
    (0.01, "Equivalent to {tons} tons of TNT - smaller than most conventional bombs."),
    (1, "Comparable to a large conventional explosion or small tactical nuclear weapon."),
    (15, "Similar to early nuclear weapons. Comparable to the Hiroshima bomb (15 kt) "
         "to early thermonuclear tests."),
    (100, "Comparable to large thermonuclear weapons. Similar to the Castle Bravo test (15 MT)."),
    (1000, "Approaching extinction-level event. Would cause regional devastation "
           "and global climate effects."),
    (100000, "Mass extinction event. Similar to the asteroid that created the Chicxulub crater."),
    (math.inf, "Civilization-ending event. Would cause global mass extinction comparable "
               "to or exceeding the K-Pg extinction."),
)


def calculate_atmospheric_effects(megatons):
    dust = megatons**0.4 * 0.5
    if megatons > 1000:
        return AtmosphericEffects(dust, min(15, math.log10(megatons) * 2), True, 'Years to decades')
    if megatons > 100:
        return AtmosphericEffects(dust, min(5, math.log10(megatons)), True, 'Months to years')
    if megatons > 10:
        return AtmosphericEffects(dust, 1, False, 'Weeks to months')
    return AtmosphericEffects(dust, 0, False, 'Days')


def calculate_population_impact(blast_radius_km, terrain, megatons):
    """
    Casualty estimate from the terrain's population density.

    Direct zone is the blast circle (90% lethality); the extended zone is the
    ring out to twice the blast radius (30%). Tsunami casualties only apply to
    water-bearing terrain and impacts above 1 Mt.
    """
    density = terrain.population_density
    blast_area_km2 = math.pi * blast_radius_km**2
    direct = math.floor(blast_area_km2 * density * 0.9)

    extended_area_km2 = math.pi * (blast_radius_km * 2)**2 - blast_area_km2
    extended = math.floor(extended_area_km2 * density * 0.3)

    tsunami = 0
    if terrain.tsunami_multiplier > 0 and megatons > 1:
        tsunami = math.floor(100000 * math.log10(megatons) * 0.5)

    total = direct + extended + tsunami
    return PopulationImpact(
        direct=direct,
        extended=extended,
        tsunami=tsunami,
        total=total,
        affected=math.floor(total * 3),
    )


def find_historical_match(megatons):
    """Catalog event closest in log-energy; the earliest entry wins a tie."""
    if not megatons > 0:
        raise InvalidInput('megatons', megatons, "must be positive")
    distances = np.abs(math.log10(megatons) - _HISTORICAL_LOG_ENERGY)
    # argmin returns the first minimal index
    return HISTORICAL_IMPACTS[int(np.argmin(distances))]


def _whole_number(value):
    """Round half away from zero, the way the published figures were rounded."""
    return str(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def energy_comparison(megatons):
    for upper, text in ENERGY_COMPARISONS:
        if megatons < upper:
            if '{tons}' in text:
                return text.format(tons=_whole_number(megatons * 1000))
            return text
    return ENERGY_COMPARISONS[-1][1]


def compute_secondary_effects(physics, terrain):
    megatons = physics.megatons
    effects = SecondaryEffects(
        atmospheric=calculate_atmospheric_effects(megatons),
        population=calculate_population_impact(physics.blast_radius_km, terrain, megatons),
        historical_match=find_historical_match(megatons),
        comparison_text=energy_comparison(megatons),
    )
    logger.debug("Secondary effects: %d casualties, closest to %s",
                 effects.population.total, effects.historical_match.key)
    return effects
