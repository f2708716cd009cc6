# utils.py
import json
import pandas as pd
import folium

# zone colors for the damage map
ZONE_COLORS = {
    'crater': 'black',
    'blast': '#800000',
    'extended': '#FFA500',
}

def report_to_dataframe(report, label="impact"):
    """
    Convert an ImpactReport to a one-row pandas DataFrame for export or display.
    """
    row = {'scenario': label}
    p = report.params
    row.update({
        'diameter_m': p.diameter_m,
        'velocity_km_s': p.velocity_km_s,
        'angle_deg': p.angle_deg,
        'density_kg_m3': p.density_kg_m3,
        'terrain': report.terrain.id,
    })
    row.update(report.physics.to_dict())

    fx = report.effects
    row.update({
        'dust_cloud_km3': fx.atmospheric.dust_cloud_volume_km3,
        'temperature_drop_c': fx.atmospheric.temperature_drop_c,
        'global_effects': fx.atmospheric.has_global_effects,
        'casualties_direct': fx.population.direct,
        'casualties_extended': fx.population.extended,
        'casualties_tsunami': fx.population.tsunami,
        'casualties_total': fx.population.total,
        'population_affected': fx.population.affected,
        'historical_match': fx.historical_match.name,
    })
    # location
    row['lat'] = report.coordinate.lat if report.coordinate else None
    row['lon'] = report.coordinate.lon if report.coordinate else None
    return pd.DataFrame([row])

def deflection_to_dataframe(result, label="deflection"):
    row = {'scenario': label}
    row.update(result.to_dict())
    return pd.DataFrame([row])

def create_folium_map(report, map_tiles='OpenStreetMap', popup=True):
    """
    Create a folium map with concentric circles for the crater, blast and extended zones.
    If the report has no coordinate, we return a world map centered at (0,0).
    """
    if report.coordinate is None:
        lat, lon = 0.0, 0.0
        zoom_start = 2
    else:
        lat, lon = report.coordinate.lat, report.coordinate.lon
        zoom_start = 5

    m = folium.Map(location=[lat, lon], tiles=map_tiles, zoom_start=zoom_start)
    folium.CircleMarker([lat, lon], radius=5, color='black', fill=True, fill_color='black',
                        popup="Impact Point" if popup else None).add_to(m)

    blast_m = report.physics.blast_radius_km * 1000.0
    # largest first so the smaller zones draw on top; folium radii are in meters
    zones = [
        ('extended', blast_m * 2, 0.15, f"Extended damage zone: {blast_m * 2 / 1000:.1f} km"),
        ('blast', blast_m, 0.25, f"Blast radius: {blast_m / 1000:.1f} km"),
        ('crater', max(1.0, report.physics.crater_diameter_m / 2.0), 0.6,
         f"Crater radius ~ {report.physics.crater_diameter_m / 2.0:.0f} m"),
    ]
    for zone, radius_m, opacity, text in zones:
        folium.Circle(location=[lat, lon],
                      radius=radius_m,
                      color=ZONE_COLORS[zone],
                      fill=True,
                      fill_opacity=opacity,
                      popup=text if popup else None).add_to(m)
    return m

def export_results_csv(df_all):
    """
    Returns CSV bytes for download.
    """
    return df_all.to_csv(index=False).encode('utf-8')

def export_results_json(list_of_dicts):
    """
    Return json bytes.
    """
    return json.dumps(list_of_dicts, indent=2, ensure_ascii=False).encode('utf-8')
