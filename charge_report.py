# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 11:20:07 2026

@author: KRHE
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from charge_model import INITIATING_SYSTEM_NEW, contributions

CONTRIBUTION_COLUMNS = ['Material', 'Raw lbs', 'RE factor', 'N.E.W. lbs']
RESULT_COLUMNS = ['N.E.W. (lbs TNT)', 'External MSD (ft)', 'Internal MSD (ft)']


def contributions_frame(selection):
    """Tabell med bidraget fra hvert valgt sprengstoff. Tennsystemet legges til
    som egen rad uten RE-faktor siden det ikke vektes."""
    rows = [
        [row.material.label, row.raw_pounds, row.re_factor, row.weighted_pounds]
        for row in contributions(selection)
    ]
    if selection.initiating_system is not None:
        offset = INITIATING_SYSTEM_NEW[selection.initiating_system]
        rows.append([selection.initiating_system.label, offset, np.nan, offset])
    return pd.DataFrame(rows, columns=CONTRIBUTION_COLUMNS)


def with_total(breakdown, result):
    """Breakdown table with a closing Total row holding the N.E.W."""
    total = pd.DataFrame([['Total', np.nan, np.nan, result.new_lbs]], columns=CONTRIBUTION_COLUMNS)
    if breakdown.empty:
        return total
    return pd.concat([breakdown, total], ignore_index=True)


def results_frame(result):
    d = {
        RESULT_COLUMNS[0]: [result.new_lbs],
        RESULT_COLUMNS[1]: [result.external_msd_ft],
        RESULT_COLUMNS[2]: [result.internal_msd_ft],
    }
    return pd.DataFrame(data=d)


def format_new(new_lbs):
    """N.E.W. with two decimals, e.g. 'N.E.W.: 0.16 lbs TNT'."""
    return f"N.E.W.: {new_lbs:.2f} lbs TNT"


def should_display(result):
    # nothing to show for an empty or non-positive charge
    return result.new_lbs > 0


def to_csv_bytes(df):
    return df.to_csv(index=False).encode('utf-8-sig')
