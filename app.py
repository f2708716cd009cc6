# app.py
import logging
import streamlit as st
import pandas as pd
from datetime import datetime
from streamlit_folium import folium_static

import config
from deflection import (STRATEGIES, DeflectionSession, impact_year, launch_point_pct,
                        probability_class)
from errors import ImpactSimulatorError, NeoFeedError
from neo import fetch_neo_feed
from simulation import GeoCoordinate, ImpactParameters, simulate_impact
from utils import (report_to_dataframe, deflection_to_dataframe, create_folium_map,
                   export_results_csv, export_results_json)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("impact_simulator")

# sidebar input caps
MAX_DIAMETER_M = 100000.0
MAX_VELOCITY_KM_S = 100.0
MAX_DENSITY_KG_M3 = 20000.0

# APP CONFIG
st.set_page_config(page_title="Asteroid Impact Simulator", layout="wide", initial_sidebar_state="expanded")

# one deflection session per browser session
if 'deflection' not in st.session_state:
    st.session_state.deflection = DeflectionSession()
if 'report' not in st.session_state:
    st.session_state.report = None
if 'params' not in st.session_state:
    st.session_state.params = dict(config.DEFAULT_PARAMS)
session = st.session_state.deflection


def _clamp(value, low, high):
    return min(max(float(value), low), high)


def load_neos():
    try:
        st.session_state.neos = fetch_neo_feed()
        st.session_state.neo_error = None
    except NeoFeedError as e:
        logger.warning("NEO feed unavailable: %s", e)
        st.session_state.neos = []
        st.session_state.neo_error = str(e)


# --- Sidebar: NEO list / Inputs ---
with st.sidebar:
    st.title("Asteroid Impact Simulator")
    st.markdown("---")
    st.subheader("Today's near-earth objects")
    refresh = st.button("Refresh")
    if refresh or "neos" not in st.session_state:
        load_neos()
    neos = st.session_state.neos
    if st.session_state.neo_error:
        st.error(f"Failed to fetch NASA data. Please try again. ({st.session_state.neo_error})")
    if neos:
        labels = {f"{n.name} ({n.diameter_m:.0f} m, {n.velocity_km_s:.1f} km/s)"
                  + (" ⚠️" if n.is_hazardous else ""): n for n in neos}
        choice = st.selectbox("Load asteroid", ["(manual)"] + list(labels))
        if choice != "(manual)" and st.button("Use this asteroid"):
            try:
                seeded = labels[choice].to_impact_parameters()
                st.session_state.params.update(diameter_m=seeded.diameter_m,
                                               velocity_km_s=seeded.velocity_km_s)
            except ImpactSimulatorError as e:
                st.error(str(e))

    st.markdown("---")
    st.subheader("Input asteroid parameters")
    p = st.session_state.params
    diameter = st.number_input("Diameter (m)", value=_clamp(p['diameter_m'], 1.0, MAX_DIAMETER_M),
                               min_value=1.0, max_value=MAX_DIAMETER_M, step=1.0,
                               help="Diameter of asteroid in meters")
    velocity = st.number_input("Velocity (km/s)", value=_clamp(p['velocity_km_s'], 1.0, MAX_VELOCITY_KM_S),
                               min_value=1.0, max_value=MAX_VELOCITY_KM_S, step=0.1, format="%.2f")
    angle = st.slider("Impact angle (degrees)", min_value=0, max_value=90, value=int(p['angle_deg']))
    density = st.number_input("Density (kg/m³)", value=_clamp(p['density_kg_m3'], 500.0, MAX_DENSITY_KG_M3), min_value=500.0,
                              max_value=MAX_DENSITY_KG_M3, step=10.0)
    lat = st.slider("Impact latitude", min_value=-90.0, max_value=90.0, value=0.0, step=0.1)
    lon = st.slider("Impact longitude", min_value=-180.0, max_value=180.0, value=0.0, step=0.1)

    st.markdown("---")
    run_button = st.button("Calculate Impact")

# --- Main layout ---
st.header("Asteroid Impact Simulator")
st.markdown("""
Derives energy, crater size, seismic magnitude, tsunami risk, casualties and atmospheric effects
from impact parameters, and evaluates deflection missions.
**Note:** Results are empirical approximations for education only.
""")

if run_button:
    try:
        params = ImpactParameters(diameter, velocity, angle, density)
        st.session_state.report = simulate_impact(params, GeoCoordinate(lat, lon), session=session)
    except ImpactSimulatorError as e:
        st.error(str(e))

report = st.session_state.report
if report is not None:
    phys = report.physics
    fx = report.effects

    st.markdown("## Impact Results")
    c1, c2, c3, c4, c5, c6 = st.columns(6)
    c1.metric("Energy (megatons)", f"{phys.megatons:.2f}")
    c2.metric("TNT equivalent (tons)", f"{phys.tnt_equivalent_tons:.2e}")
    c3.metric("Crater diameter (m)", f"{phys.crater_diameter_m:.0f}")
    c4.metric("Seismic magnitude", f"{phys.seismic_magnitude:.1f}")
    c5.metric("Blast radius (km)", f"{phys.blast_radius_km:.1f}")
    c6.metric("Tsunami risk", phys.tsunami_risk.value)

    st.markdown("## Advanced Effects")
    e1, e2, e3 = st.columns(3)
    with e1:
        st.subheader(f"Terrain: {report.terrain.name}")
        st.write(report.terrain.description)
        st.subheader("Casualties")
        st.metric("Estimated total", f"{fx.population.total:,}")
        breakdown = f"Direct: {fx.population.direct:,} | Extended Zone: {fx.population.extended:,}"
        if fx.population.tsunami > 0:
            breakdown += f" | Tsunami: {fx.population.tsunami:,}"
        st.write(breakdown)
        st.write(f"Total affected: {fx.population.affected:,}")
    with e2:
        st.subheader("Atmosphere")
        st.metric("Dust cloud", f"{fx.atmospheric.dust_cloud_volume_km3:.1f} km³")
        st.write(f"Temperature drop: {fx.atmospheric.temperature_drop_c:.1f}°C")
        st.write(f"Duration: {fx.atmospheric.duration_label}")
        if fx.atmospheric.has_global_effects:
            st.warning("Global climate impact expected")
        else:
            st.write("Regional effects only")
    with e3:
        h = fx.historical_match
        st.subheader("Historical comparison")
        st.metric(h.name, f"{h.energy_megatons:g} Megatons")
        st.write(h.description)
        st.write(f"Location: {h.location}")
        if isinstance(h.casualties, int):
            st.write(f"Casualties: {h.casualties:,}")
        else:
            st.write(f"Impact: {h.casualties}")
    st.info(fx.comparison_text)

    st.markdown("### Detailed numeric results")
    df_impact = report_to_dataframe(report)
    st.dataframe(df_impact, height=120)

    st.markdown("## Map visualization")
    folium_static(create_folium_map(report), width=1000, height=450)

    # --- Deflection planner ---
    st.markdown("## Deflection Mission Planner")
    d1, d2 = st.columns([1, 2])
    with d1:
        keys = list(STRATEGIES)
        strategy_key = st.radio("Strategy", keys, format_func=lambda k: STRATEGIES[k].name)
        warning = st.slider("Warning time (years)", min_value=0.5, max_value=20.0,
                            value=session.warning_years, step=0.5)
        session.select_strategy(strategy_key)
        session.set_warning_years(warning)
        st.progress(int(launch_point_pct(warning)), text=f"Impact year: {impact_year(warning)}")
        deflect_button = st.button("Calculate Deflection")

    with d2:
        if deflect_button:
            try:
                result = session.compute_deflection()
            except ImpactSimulatorError as e:
                st.error(str(e))
                result = None
            if result is not None:
                r1, r2, r3, r4 = st.columns(4)
                r1.metric("Success probability", f"{result.success_probability_pct:.1f}%",
                          help=probability_class(result.success_probability_pct))
                r2.metric("Required Δv", f"{result.required_delta_v_m_s:.4f} m/s")
                r3.metric("Mission duration", f"{result.mission_duration_years:.1f} years")
                r4.metric("Mission cost", f"${result.mission_cost_b:.1f}B")
                st.write(f"**Technology:** {result.tech_status}")
                st.progress(int(result.feasibility_score), text=result.feasibility_label.text)
                st.write(result.notes)

                df_all = pd.concat([df_impact, deflection_to_dataframe(result)], ignore_index=True)
                stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
                st.download_button("Download results CSV", data=export_results_csv(df_all),
                                   file_name=f"impact_results_{stamp}.csv", mime="text/csv")
                st.download_button("Download results JSON",
                                   data=export_results_json([report.to_dict(), result.to_dict()]),
                                   file_name=f"impact_results_{stamp}.json", mime="application/json")
else:
    st.info("Set the asteroid parameters in the sidebar and press **Calculate Impact**.")
