# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 14:02:18 2026

@author: KRHE

Explosives calculator: N.E.W. (lbs TNT eq) for a combination of charges and the
external/internal minimum safe distance.
"""

import streamlit as st

from charge_model import (
    BoosterFraction,
    BoosterInput,
    C4Input,
    DetaSheetInput,
    InitiatingSystem,
    LinearChargeInput,
    MaterialKind,
    SelectionSet,
    compute,
)
from charge_report import (
    contributions_frame,
    format_new,
    results_frame,
    should_display,
    to_csv_bytes,
    with_total,
)

NO_SYSTEM = "None"

st.title("Explosives Calculator")

st.subheader("Select Explosives")
selected = {
    kind: st.toggle(kind.label, key=kind.name)
    for kind in sorted(MaterialKind, key=lambda k: k.label)
}

st.subheader("Initiating System")
system_labels = [NO_SYSTEM] + sorted(s.label for s in InitiatingSystem)
system_label = st.selectbox("Select Initiating System", system_labels)

with st.form("charge_form"):
    fields = {}

    if selected[MaterialKind.DETA_SHEET]:
        st.write(MaterialKind.DETA_SHEET.label)
        fields['deta_sheet'] = DetaSheetInput(
            length_in=st.number_input('Length (in inches)', value=0.0, key='ds_length'),
            width_in=st.number_input('Width (in inches)', value=0.0, key='ds_width'),
            c_value=st.number_input('C# Value', value=0.0, key='ds_c'),
        )

    if selected[MaterialKind.DET_CORD]:
        st.write(MaterialKind.DET_CORD.label)
        fields['det_cord'] = LinearChargeInput(
            length_ft=st.number_input('Length (in feet)', value=0.0, key='dc_length'),
            grains_per_foot=st.number_input('Grains per foot', value=0.0, key='dc_grains'),
        )

    if selected[MaterialKind.COMPOSITION_C4]:
        st.write(MaterialKind.COMPOSITION_C4.label)
        fields['composition_c4'] = C4Input(
            pounds=st.number_input('Pounds Used', value=0.0, key='c4_pounds'),
        )

    if selected[MaterialKind.MK140_BOOSTER]:
        st.write(MaterialKind.MK140_BOOSTER.label)
        booster = st.radio('Select Booster', list(BoosterFraction), index=None,
                           format_func=lambda f: f.label, key='booster')
        fields['mk140_booster'] = BoosterInput(booster)

    if selected[MaterialKind.ECT]:
        st.write(MaterialKind.ECT.label)
        fields['ect'] = LinearChargeInput(
            length_ft=st.number_input('Length (in feet)', value=0.0, key='ect_length'),
            grains_per_foot=st.number_input('Grains per foot', value=0.0, key='ect_grains'),
        )

    if system_label != NO_SYSTEM:
        fields['initiating_system'] = InitiatingSystem.from_label(system_label)

    submitted = st.form_submit_button("Calculate")

if submitted:
    selection = SelectionSet(**fields)
    st.session_state['selection'] = selection
    st.session_state['result'] = compute(selection)

result = st.session_state.get('result')
if result is not None and should_display(result):
    st.subheader("Results")
    st.write(format_new(result.new_lbs))
    st.write(f"External MSD: {result.external_msd_ft} feet")
    st.write(f"Internal MSD: {result.internal_msd_ft} feet")

    st.dataframe(results_frame(result), hide_index=True)
    breakdown = with_total(contributions_frame(st.session_state['selection']), result)
    st.dataframe(breakdown, hide_index=True)

    # =============================================================================
    # Eksportering av data i CSV format
    # =============================================================================

    @st.cache_data
    def convert_df(dinn):
        return to_csv_bytes(dinn)

    st.download_button(
       label="Download data as CSV",
       data=convert_df(breakdown),
       file_name='new_msd.csv',
       on_click="ignore",
       mime='text/csv',
       icon=":material/download:",
       )
