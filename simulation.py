# simulation.py
"""
Impact physics for the Asteroid Impact Simulator.

Notes:
 - All formulas are simplified, empirical approximations meant for educational/demo purposes.
   Exponents and offsets are fixed calibration constants.
 - Units:
    diameter_m   : meters
    velocity_km_s: kilometers/second (converted to m/s internally)
    density_kg_m3: kg/m^3 (typical rocky asteroid ~ 3000)
    angle_deg    : degrees above the horizon (90 vertical)
    lat/lon      : decimal degrees

Outputs (PhysicsResult):
 - megatons, tnt_equivalent_tons
 - crater_diameter_m
 - seismic_magnitude
 - blast_radius_km
 - tsunami_risk
"""

import logging
import math
from dataclasses import asdict, dataclass
from enum import Enum

import config
from effects import SecondaryEffects, compute_secondary_effects
from errors import InvalidInput
from terrain import RURAL, Terrain, get_terrain, terrain_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImpactParameters:
    """Physical description of the impactor. Validated on construction."""

    diameter_m: float
    velocity_km_s: float
    angle_deg: float
    density_kg_m3: float

    def __post_init__(self):
        for field in ('diameter_m', 'velocity_km_s', 'density_kg_m3'):
            value = getattr(self, field)
            if not math.isfinite(value):
                raise InvalidInput(field, value, "must be a finite number")
            if value <= 0:
                raise InvalidInput(field, value, "must be positive")
        if not 0 <= self.angle_deg <= 90:
            raise InvalidInput('angle_deg', self.angle_deg, "must be between 0 and 90 degrees")

    @classmethod
    def defaults(cls):
        return cls(**config.DEFAULT_PARAMS)


@dataclass(frozen=True)
class GeoCoordinate:
    lat: float
    lon: float

    def __post_init__(self):
        if not -90 <= self.lat <= 90:
            raise InvalidInput('lat', self.lat, "must be between -90 and 90")
        if not -180 <= self.lon <= 180:
            raise InvalidInput('lon', self.lon, "must be between -180 and 180")


class TsunamiRisk(str, Enum):
    NONE = 'NONE'
    MODERATE = 'MODERATE'
    HIGH = 'HIGH'
    EXTREME = 'EXTREME'


@dataclass(frozen=True)
class PhysicsResult:
    """Primary impact metrics. Every field is a pure function of the inputs."""

    megatons: float
    tnt_equivalent_tons: float
    crater_diameter_m: float
    seismic_magnitude: float
    blast_radius_km: float
    tsunami_risk: TsunamiRisk
    kinetic_energy_j: float
    mass_kg: float

    def to_dict(self):
        out = asdict(self)
        out['tsunami_risk'] = self.tsunami_risk.value
        return out

    @classmethod
    def from_dict(cls, data):
        data = dict(data)
        data['tsunami_risk'] = TsunamiRisk(data['tsunami_risk'])
        return cls(**data)


@dataclass(frozen=True)
class ImpactReport:
    """Combined results record of one calculation cycle."""

    params: ImpactParameters
    coordinate: GeoCoordinate
    terrain: Terrain
    physics: PhysicsResult
    effects: SecondaryEffects

    def to_dict(self):
        return {
            'input': asdict(self.params),
            'coordinate': asdict(self.coordinate) if self.coordinate else None,
            'terrain': asdict(self.terrain),
            'physics': self.physics.to_dict(),
            'effects': self.effects.to_dict(),
        }


def mass_from_diameter(diameter_m, density_kg_m3=3000.0):
    """Mass of a sphere (asteroid) in kg."""
    r = diameter_m / 2.0
    volume = (4.0/3.0) * math.pi * r**3
    return volume * density_kg_m3

def kinetic_energy_joules(mass_kg, velocity_km_s):
    """Kinetic energy in joules; velocity given in km/s."""
    return 0.5 * mass_kg * (velocity_km_s * 1000.0)**2

def tnt_equivalent_tons(energy_joules):
    return energy_joules / config.TNT_ENERGY_JOULES

def estimate_crater_diameter(megatons, terrain):
    """Final crater diameter in meters, scaled by the terrain's crater multiplier."""
    return 1.8 * megatons**0.29 * 1000 * terrain.crater_multiplier

def estimate_seismic_magnitude(energy_joules, terrain):
    """Richter-style magnitude, scaled by the terrain's seismic multiplier."""
    return (0.67 * math.log10(energy_joules) - 5.87) * terrain.seismic_multiplier

def estimate_blast_radius(megatons):
    """Blast radius in km."""
    return megatons**0.33 * 2.2

def assess_tsunami_risk(diameter_m, angle_deg, megatons, terrain):
    """
    Tsunami risk band. Only terrain that can carry a tsunami (multiplier > 0)
    gets anything above NONE; branches are checked in priority order.
    """
    if terrain.tsunami_multiplier <= 0:
        return TsunamiRisk.NONE
    if diameter_m > 300 and angle_deg < 60:
        return TsunamiRisk.EXTREME
    if diameter_m > 100 and angle_deg < 60:
        return TsunamiRisk.HIGH
    if megatons > 1:
        return TsunamiRisk.MODERATE
    return TsunamiRisk.NONE


def compute_impact_physics(params, terrain):
    """
    Convert impactor parameters into primary impact metrics.

    `terrain` may be a terrain id or a Terrain record.
    """
    if not isinstance(terrain, Terrain):
        terrain = get_terrain(terrain)

    try:
        m = mass_from_diameter(params.diameter_m, params.density_kg_m3)
        E = kinetic_energy_joules(m, params.velocity_km_s)
    except OverflowError:
        E = math.inf
    if not math.isfinite(E):
        raise InvalidInput('diameter_m', params.diameter_m,
                           "impact energy is too large to represent")
    tons = tnt_equivalent_tons(E)
    E_mt = tons / 1e6

    result = PhysicsResult(
        megatons=E_mt,
        tnt_equivalent_tons=tons,
        crater_diameter_m=estimate_crater_diameter(E_mt, terrain),
        seismic_magnitude=estimate_seismic_magnitude(E, terrain),
        blast_radius_km=estimate_blast_radius(E_mt),
        tsunami_risk=assess_tsunami_risk(params.diameter_m, params.angle_deg, E_mt, terrain),
        kinetic_energy_j=E,
        mass_kg=m,
    )
    logger.debug("Impact physics for %s on %s: %.3f Mt, crater %.0f m, M%.1f",
                 params, terrain.id, E_mt, result.crater_diameter_m, result.seismic_magnitude)
    return result


def simulate_impact(params, coordinate=None, session=None):
    """
    Main simulation function: terrain -> physics -> secondary effects.

    Without a coordinate the impact is treated as rural. When a deflection
    session is given it is updated with this impact so a later deflection
    calculation sees it.
    """
    terrain = terrain_for(coordinate) if coordinate is not None else get_terrain(RURAL)
    physics = compute_impact_physics(params, terrain)
    effects = compute_secondary_effects(physics, terrain)

    if session is not None:
        session.record_impact(params, physics)

    logger.info("Simulated %.0f m impactor at %.1f km/s over %s: %.2f Mt",
                params.diameter_m, params.velocity_km_s, terrain.name, physics.megatons)
    return ImpactReport(
        params=params,
        coordinate=coordinate,
        terrain=terrain,
        physics=physics,
        effects=effects,
    )
