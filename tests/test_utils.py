"""
Tests for export helpers and the damage-zone map.
"""

import json

import folium
import pandas as pd

from deflection import DeflectionSession
from simulation import GeoCoordinate, ImpactParameters, simulate_impact
from utils import (
    create_folium_map, deflection_to_dataframe, export_results_csv,
    export_results_json, report_to_dataframe,
)


def _report(coordinate=GeoCoordinate(25, 10), session=None):
    return simulate_impact(ImpactParameters(150, 18, 40, 2600), coordinate, session=session)


class TestExport:

    def test_report_row(self):
        report = _report()
        df = report_to_dataframe(report, label="sahara")

        assert len(df) == 1
        row = df.iloc[0]
        assert row["scenario"] == "sahara"
        assert row["terrain"] == "desert"
        assert row["megatons"] == report.physics.megatons
        assert row["tsunami_risk"] == "NONE"
        assert row["casualties_total"] == report.effects.population.total
        assert row["lat"] == 25

    def test_csv_and_json(self):
        session = DeflectionSession()
        report = _report(session=session)
        session.select_strategy("kinetic")
        result = session.compute_deflection()

        df = pd.concat([report_to_dataframe(report), deflection_to_dataframe(result)],
                       ignore_index=True)
        csv = export_results_csv(df)
        assert csv.startswith(b"scenario,")
        assert len(csv.decode("utf-8").strip().splitlines()) == 3

        blob = json.loads(export_results_json([report.to_dict(), result.to_dict()]).decode("utf-8"))
        assert blob[0]["terrain"]["name"] == "Desert"
        assert blob[1]["strategy_key"] == "kinetic"


class TestMap:

    def test_map_with_coordinate(self):
        m = create_folium_map(_report())
        assert isinstance(m, folium.Map)
        assert m.location == [25, 10]

    def test_world_map_without_coordinate(self):
        m = create_folium_map(_report(coordinate=None))
        assert m.location == [0.0, 0.0]
