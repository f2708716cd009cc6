# deflection.py
"""
Deflection mission feasibility.

A DeflectionSession holds the user's current choices (strategy, warning time)
and the most recent impact calculation. Each caller owns its own session;
nothing here is shared between sessions.

The model is arithmetic only: required velocity change is the Earth radius
spread over the warning time, success probability scales with how much of the
strategy's optimal lead time is available and how large the asteroid is, and
the feasibility score weights probability (40), time (30) and technology
readiness (30).
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType

import config
from errors import InvalidInput, InvalidStrategy, MissingImpactData, MissingStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeflectionStrategy:
    key: str
    name: str
    efficiency: float
    cost_per_year_b: float  # billions USD per mission year
    base_cost_b: float
    tech_readiness: str
    min_warning_years: float
    optimal_warning_years: float


STRATEGIES = MappingProxyType({
    s.key: s for s in (
        DeflectionStrategy('kinetic', 'Kinetic Impactor', 0.0001, 0.5, 2,
                           'Proven (DART mission)', 1, 5),
        DeflectionStrategy('gravity', 'Gravity Tractor', 0.00001, 0.3, 3,
                           'Theoretical', 5, 15),
        DeflectionStrategy('nuclear', 'Nuclear Device', 0.001, 1, 5,
                           'Conceptual', 2, 7),
        DeflectionStrategy('laser', 'Laser Ablation', 0.00005, 0.8, 4,
                           'Experimental', 3, 10),
    )
})

# keyed on the first word of the readiness label
TECH_READINESS_SCORES = MappingProxyType({
    'Proven': 30,
    'Theoretical': 20,
    'Experimental': 15,
    'Conceptual': 10,
})
DEFAULT_TECH_SCORE = 15


class FeasibilityLabel(str, Enum):
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'

    @property
    def text(self):
        return {
            'LOW': 'LOW FEASIBILITY',
            'MEDIUM': 'MODERATELY FEASIBLE',
            'HIGH': 'HIGHLY FEASIBLE',
        }[self.value]


@dataclass(frozen=True)
class DeflectionResult:
    strategy_key: str
    success_probability_pct: float
    required_delta_v_m_s: float
    mission_duration_years: float
    mission_cost_b: float
    tech_status: str
    feasibility_score: float
    feasibility_label: FeasibilityLabel
    notes: str = ''

    def to_dict(self):
        out = asdict(self)
        out['feasibility_label'] = self.feasibility_label.value
        return out


def get_strategy(key):
    try:
        return STRATEGIES[key]
    except KeyError:
        raise InvalidStrategy(key, list(STRATEGIES)) from None


def tech_readiness_score(label):
    level = label.split(' ', 1)[0] if label else ''
    return TECH_READINESS_SCORES.get(level, DEFAULT_TECH_SCORE)


def required_delta_v(warning_years):
    """Velocity change (m/s) needed to shift the impact point by one Earth radius."""
    return config.EARTH_RADIUS_M / (warning_years * config.SECONDS_PER_YEAR)


def success_probability(strategy, warning_years, diameter_m):
    """Success probability in percent, clamped to [5, 95]."""
    time_ratio = min(warning_years / strategy.optimal_warning_years, 1)
    if warning_years < strategy.min_warning_years:
        time_ratio *= 0.3

    if diameter_m > 500:
        size_ratio = 0.6
    elif diameter_m > 300:
        size_ratio = 0.75
    elif diameter_m > 100:
        size_ratio = 0.9
    else:
        size_ratio = 1

    probability = time_ratio * size_ratio * 100

    if strategy.key == 'kinetic' and warning_years >= 3:
        probability *= 1.1
    if strategy.key == 'gravity' and warning_years < 10:
        probability *= 0.7

    return min(max(probability, 5), 95)


def feasibility_score(strategy, success_pct, warning_years):
    score = (success_pct / 100) * 40
    score += min(warning_years / strategy.optimal_warning_years, 1) * 30
    score += tech_readiness_score(strategy.tech_readiness)
    return score


def feasibility_label(score):
    if score > 70:
        return FeasibilityLabel.HIGH
    if score > 40:
        return FeasibilityLabel.MEDIUM
    return FeasibilityLabel.LOW


def probability_class(success_pct):
    """Display class for a success probability."""
    if success_pct > 70:
        return 'high-prob'
    if success_pct > 40:
        return 'medium-prob'
    return 'low-prob'


def mission_notes(success_pct, warning_years, strategy, diameter_m):
    """Advisory text shown alongside a deflection result."""
    if success_pct > 70:
        note = (f"✓ Mission has high success probability with {warning_years:g} years warning time. "
                f"{strategy.name} is well-suited for this scenario.")
    elif success_pct > 40:
        note = ("⚠ Mission has moderate success probability. Consider earlier detection "
                "or alternative strategies to improve odds.")
    else:
        note = ("✗ Mission has low success probability with current parameters. Requires more "
                "warning time or different approach. Consider combining multiple deflection methods.")

    if warning_years < strategy.min_warning_years:
        note += (f" WARNING: Below minimum recommended warning time of "
                 f"{strategy.min_warning_years:g} years.")
    if diameter_m > 500:
        note += " Large asteroid requires significant resources and potentially multiple missions."
    return note


def impact_year(warning_years, today=None):
    """Calendar year the impact would happen, counting from today."""
    today = today or date.today()
    return today.year + int(warning_years)


def launch_point_pct(warning_years):
    """Position of the mission launch marker on a 20-year timeline, in percent."""
    return min(max(0.5, warning_years) / 20 * 100, 90)


class DeflectionSession:
    """
    User-owned state for deflection planning.

    `record_impact` is called whenever a new impact calculation completes;
    `compute_deflection` reads the stored state and never clears it.
    """

    def __init__(self, warning_years=config.DEFAULT_WARNING_YEARS):
        self.selected_strategy = None
        self.warning_years = None
        self.last_params = None
        self.last_physics = None
        self.set_warning_years(warning_years)

    def select_strategy(self, key):
        self.selected_strategy = get_strategy(key)
        logger.debug("Selected deflection strategy: %s", key)
        return self.selected_strategy

    def set_warning_years(self, years):
        if not years > 0:
            raise InvalidInput('warning_years', years, "must be positive")
        self.warning_years = float(years)

    def record_impact(self, params, physics):
        self.last_params = params
        self.last_physics = physics

    def compute_deflection(self):
        strategy = self.selected_strategy
        if strategy is None:
            raise MissingStrategy()
        if self.last_params is None or self.last_physics is None:
            raise MissingImpactData()

        years = self.warning_years
        diameter_m = self.last_params.diameter_m

        success_pct = success_probability(strategy, years, diameter_m)
        duration = max(years * 0.3, strategy.min_warning_years * 0.5)
        score = feasibility_score(strategy, success_pct, years)

        result = DeflectionResult(
            strategy_key=strategy.key,
            success_probability_pct=success_pct,
            required_delta_v_m_s=required_delta_v(years),
            mission_duration_years=duration,
            mission_cost_b=strategy.base_cost_b + duration * strategy.cost_per_year_b,
            tech_status=strategy.tech_readiness,
            feasibility_score=score,
            feasibility_label=feasibility_label(score),
            notes=mission_notes(success_pct, years, strategy, diameter_m),
        )
        logger.info("Deflection via %s with %.1f years warning: %.1f%% success, %s",
                    strategy.name, years, success_pct, result.feasibility_label.text)
        return result
