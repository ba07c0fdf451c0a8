import io

import pandas as pd
import streamlit as st

from core.cache import SizingCache
from core.converters import convert_to_amps
from core.export import export_to_excel, results_to_frame
from core.models import CircuitType, InstallationMethod, Standard
from core.validation import InputValidationError, validate_input
from core.voltage_drop import sizes_for_target_drop
from standards.tables import TableLookupError

# --- Page Config ---
st.set_page_config(
    page_title="Dimensionamiento de Conductores (IEC / NEC)",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

METHOD_LABELS = {
    "Ducto único": InstallationMethod.SINGLE_CONDUIT,
    "Varios ductos": InstallationMethod.MULTI_CONDUIT,
    "Bandeja": InstallationMethod.TRAY,
    "Enterrado": InstallationMethod.DIRECT_BURIED,
    "Aire libre": InstallationMethod.FREE_AIR,
}


@st.cache_resource
def get_cache():
    # One LRU shared by every session of the server
    return SizingCache.from_config()


# --- Session State Init ---
if "results" not in st.session_state:
    st.session_state.results = []

# --- Sidebar ---
with st.sidebar:
    st.title("Configuración")
    std_label = st.radio("Norma", ["IEC 60364", "NEC"], horizontal=True)
    standard = Standard.NEC if std_label == "NEC" else Standard.IEC
    material = st.selectbox("Material", ["Copper", "Aluminum"],
                            format_func=lambda m: "Cobre" if m == "Copper" else "Aluminio")
    ratings = ["75", "60", "90"] if standard is Standard.NEC else ["70", "60", "90"]
    rating = st.selectbox("Aislamiento (°C)", ratings)
    method = st.selectbox("Método de Instalación", list(METHOD_LABELS))
    temp = st.number_input("Temp. Amb (°C)", value=30.0, step=1.0)

    st.markdown("---")
    stats = get_cache().stats()
    st.caption(f"Caché: {stats['size']} entradas, {stats['hit_rate'] * 100:.0f}% aciertos")

# --- Main Area ---
st.markdown("## ⚡ Dimensionamiento de Conductores")
st.markdown("---")

with st.expander("➕ Nuevo Circuito", expanded=True):
    c_p1, c_p2, c_v1, c_v2, c_fp = st.columns([1.5, 0.8, 1.2, 0.8, 1])
    load = c_p1.number_input("Carga", 0.0, step=0.1, format="%.2f")
    unit = c_p2.selectbox("Unidad", ["A", "W", "KW", "HP", "KVA"])
    voltage = c_v1.number_input("Voltaje (V)", 1.0, value=230.0 if standard is Standard.IEC else 480.0,
                                step=10.0)
    phases = c_v2.radio("Fases", [1, 3], horizontal=True)
    pf = c_fp.number_input("FP", 0.1, 1.0, 0.9, 0.05)

    unit_label = standard.length_unit.value
    c_L1, c_G, c_VD, c_S = st.columns(4)
    length = c_L1.number_input(f"Longitud ({unit_label})", 0.1, value=30.0, step=1.0)
    group = c_G.number_input("Conductores agrupados", 1, 50, 3)
    max_vd = c_VD.number_input("Caída máx. (%)", 0.1, 100.0, 3.0, 0.5)
    forced = c_S.text_input("Calibre a verificar (opcional)", "")

    if st.button("Calcular", type="primary", use_container_width=True):
        circuit_type = CircuitType.THREE_PHASE if phases == 3 else CircuitType.SINGLE_PHASE
        try:
            sizing_input = validate_input(
                current=convert_to_amps(load, unit, voltage, circuit_type, pf),
                length=length, system_voltage=voltage, material=material,
                installation_method=METHOD_LABELS[method], circuit_type=circuit_type,
                ambient_temperature=temp, conductor_count=group, standard=standard,
                insulation_rating=rating, max_voltage_drop_percent=max_vd,
                size=forced.strip() or None,
            )
            result = get_cache().get_or_compute(sizing_input)
            st.session_state.results.append(result)
            st.session_state.last_input = sizing_input
        except InputValidationError as e:
            for err in e.errors:
                st.error(err)
        except TableLookupError as e:
            st.error(f"Sin resultado en tablas: {e}")

results = st.session_state.results

if results:
    last = results[-1]
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Calibre", last.formatted_size)
    c2.metric("Ampacidad corregida", f"{last.ampacity.derated:.1f} A",
              f"{last.ampacity.utilization_percent:.0f}% uso", delta_color="off")
    c3.metric("Caída de tensión", f"{last.voltage_drop.percent or 0:.2f} %")
    c4.metric("Tierra", last.earth_conductor.formatted_size if last.earth_conductor else "-")
    if last.compliance.is_fully_compliant:
        st.success("Cumple ampacidad y caída de tensión.")
    for warning in last.warnings:
        st.warning(warning)
    last_input = st.session_state.get("last_input")
    if last_input is not None and not last.compliance.is_voltage_drop_compliant:
        fits = sizes_for_target_drop(
            last_input.current, last_input.length, last_input.material,
            last_input.circuit_type, last_input.standard, last_input.system_voltage,
            last_input.max_voltage_drop_percent,
        )
        listed = ", ".join(fits) if fits else "ninguno"
        st.info(f"Calibres que cumplen la caída de tensión: {listed}")
    with st.expander("Referencias normativas"):
        for ref in last.standard_references:
            st.write(f"- {ref}")

    st.markdown("### 📋 Resultados")
    df: pd.DataFrame = results_to_frame(results)
    st.dataframe(df, use_container_width=True)

    tb1, tb2 = st.columns([1, 4])
    with tb1:
        if st.button("🗑️ Borrar Tabla", use_container_width=True):
            st.session_state.results = []
            st.rerun()
    with tb2:
        output = io.BytesIO()
        export_to_excel(results, output)
        st.download_button(
            "📥 Descargar Resultados (Excel)",
            data=output.getvalue(),
            file_name="memoria_conductores.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
