"""
Pytest configuration and fixtures for the impact simulator tests.

Markers:
    @pytest.mark.network - Tests touching the NEO feed adapter (always faked, never live)

Usage:
    pytest                    # Run everything
    pytest -m "not network"   # Skip the feed adapter tests
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "network: NEO feed adapter tests")


def pytest_collection_modifyitems(config, items):
    """Auto-apply markers based on test file names."""
    for item in items:
        if "neo" in item.fspath.basename:
            item.add_marker(pytest.mark.network)


@pytest.fixture
def default_params():
    """The simulator's default impactor: 100 m rock at 20 km/s, 45 degrees."""
    from simulation import ImpactParameters

    return ImpactParameters.defaults()


@pytest.fixture
def large_params():
    """A 400 m impactor at a shallow angle."""
    from simulation import ImpactParameters

    return ImpactParameters(diameter_m=400, velocity_km_s=20, angle_deg=30, density_kg_m3=3000)


@pytest.fixture
def recorded_session(large_params):
    """A deflection session that has already seen one impact calculation."""
    from deflection import DeflectionSession
    from simulation import compute_impact_physics

    session = DeflectionSession()
    session.record_impact(large_params, compute_impact_physics(large_params, "rural"))
    return session
