"""Program Calculator — Streamlit front end for the program engine.

Run with:
    streamlit run streamlit_app/app.py
"""

from __future__ import annotations

import streamlit as st

from program_engine import config
from program_engine.engine import ProgramEngine
from program_engine.exceptions import ConfigurationError, MeasurementValidationError
from program_engine.reporting import missing_combinations
from program_engine.serialization import to_consultation_json
from program_engine.store.json_file import load_rule_store
from program_engine.store.memory import InMemoryRuleStore
from program_engine.validation import parse_measurement

from helpers import (
    BMI_COLORS,
    BODY_FAT_COLORS,
    SEX_OPTIONS,
    result_rows,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Program Calculator",
    page_icon="🏋️",
    layout="centered",
)


# ---------------------------------------------------------------------------
# Cached store and engine
# ---------------------------------------------------------------------------


@st.cache_resource
def get_store() -> InMemoryRuleStore:
    if config.RULES_PATH is not None:
        return load_rule_store(config.RULES_PATH)
    return InMemoryRuleStore.from_rule_table()


@st.cache_resource
def get_engine() -> ProgramEngine:
    return ProgramEngine(get_store())


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

st.title("Program Calculator")

tab_consult, tab_rules = st.tabs(["Consultation", "Rule coverage"])

with tab_consult:
    with st.form("measurement"):
        col1, col2 = st.columns(2)
        weight = col1.number_input("Weight (kg)", min_value=1.0, max_value=500.0, value=70.0)
        height = col2.number_input("Height (cm)", min_value=50.0, max_value=300.0, value=170.0)
        body_fat = col1.number_input(
            "Body fat (%)", min_value=1.0, max_value=70.0, value=18.0
        )
        sex_label = col2.selectbox("Sex", list(SEX_OPTIONS))
        submitted = st.form_submit_button("Get program")

    if submitted:
        try:
            measurement = parse_measurement(
                {
                    "weight": weight,
                    "height": height,
                    "bodyFatPercentage": body_fat,
                    "gender": SEX_OPTIONS[sex_label],
                }
            )
            record, trace = get_engine().resolve_with_trace(measurement)
        except MeasurementValidationError as exc:
            for field_name, message in exc.errors.items():
                st.error(f"{field_name}: {message}")
        except ConfigurationError as exc:
            st.error(f"Configuration error: {exc}")
        else:
            bmi_color = BMI_COLORS[record.bmi_category]
            fat_color = BODY_FAT_COLORS[record.body_fat_category]
            st.markdown(
                f"<span style='color:{bmi_color}'>**{record.bmi_category.label}**</span> · "
                f"<span style='color:{fat_color}'>**{record.body_fat_category.label}** body fat</span>",
                unsafe_allow_html=True,
            )
            for label, value in result_rows(record, get_store()):
                st.write(f"**{label}:** {value}")
            if record.edge_case is not None:
                st.info(record.edge_case.reason)
            if record.is_default:
                st.warning("No active rule matched; the default program was assigned.")

            with st.expander("Decision trace"):
                for result in trace.step_results:
                    st.write(f"`{result.step.name}` {result.status.name} — {result.explanation}")
            with st.expander("JSON"):
                st.json(to_consultation_json(record))

with tab_rules:
    report = missing_combinations(get_store())
    st.metric("Realistic combinations with a rule", f"{len(report.covered)} / {report.total}")
    if report.is_complete:
        st.success("Every realistic combination has an active rule.")
    else:
        for row in report.missing:
            st.warning(f"{row.combination.label} has no active rule (seed: {row.program_code})")
    st.caption(
        "Impossible combinations (redirected before lookup): "
        + ", ".join(c.label for c in report.impossible)
    )
