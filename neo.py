# neo.py
"""
Near-earth-object feed from NASA NeoWs.

Used only to pre-fill impact parameters from real objects approaching today.
Feed values are taken as given: no caching, no validation beyond parsing.
"""

import logging
from dataclasses import dataclass
from datetime import date as date_cls

import requests

import config
from errors import NeoFeedError
from simulation import ImpactParameters

logger = logging.getLogger(__name__)

DEFAULT_VELOCITY_KM_S = 20.0


@dataclass(frozen=True)
class NearEarthObject:
    id: str
    name: str
    diameter_m: float
    velocity_km_s: float
    miss_distance_km: float
    is_hazardous: bool

    def to_impact_parameters(self, angle_deg=None, density_kg_m3=None):
        """Impact parameters seeded from this object; angle and density use defaults."""
        defaults = config.DEFAULT_PARAMS
        return ImpactParameters(
            diameter_m=self.diameter_m,
            velocity_km_s=self.velocity_km_s,
            angle_deg=defaults['angle_deg'] if angle_deg is None else angle_deg,
            density_kg_m3=defaults['density_kg_m3'] if density_kg_m3 is None else density_kg_m3,
        )


def _first_approach(neo):
    approaches = neo.get('close_approach_data') or []
    return approaches[0] if approaches else {}


def parse_neo(neo):
    approach = _first_approach(neo)
    velocity = (approach.get('relative_velocity') or {}).get('kilometers_per_second')
    miss = (approach.get('miss_distance') or {}).get('kilometers')
    return NearEarthObject(
        id=str(neo['id']),
        name=neo['name'],
        diameter_m=float(neo['estimated_diameter']['meters']['estimated_diameter_max']),
        velocity_km_s=float(velocity) if velocity else DEFAULT_VELOCITY_KM_S,
        miss_distance_km=float(miss) if miss else 0.0,
        is_hazardous=bool(neo.get('is_potentially_hazardous_asteroid', False)),
    )


def parse_neo_feed(payload, limit=config.NEO_FEED_LIMIT):
    """Flatten a NeoWs feed response (objects grouped by date) into a list."""
    try:
        grouped = payload['near_earth_objects']
        neos = [neo for day in grouped.values() for neo in day]
        return [parse_neo(neo) for neo in neos[:limit]]
    except (KeyError, TypeError, ValueError) as e:
        raise NeoFeedError(f"Malformed NEO feed: {e}") from e


def fetch_neo_feed(day=None, api_key=None, limit=config.NEO_FEED_LIMIT, session=None):
    """
    Fetch today's (or `day`'s) close approaches from NeoWs.

    `session` may be a requests.Session (or anything with a compatible `get`).
    """
    day = (day or date_cls.today()).isoformat()
    http = session or requests
    params = {
        'start_date': day,
        'end_date': day,
        'api_key': api_key or config.NASA_API_KEY,
    }
    logger.info("Fetching NEO feed for %s", day)
    try:
        resp = http.get(config.NASA_NEO_API, params=params, timeout=config.NEO_REQUEST_TIMEOUT)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        logger.error("Error fetching NEO data: %s", e)
        raise NeoFeedError(f"Failed to fetch NASA data: {e}") from e
    except ValueError as e:
        logger.error("NEO feed returned invalid JSON: %s", e)
        raise NeoFeedError(f"Failed to decode NASA data: {e}") from e
    return parse_neo_feed(payload, limit)
