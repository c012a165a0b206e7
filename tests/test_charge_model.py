from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from charge_model import (  # noqa: E402
    INITIATING_SYSTEM_NEW,
    RE_FACTORS,
    BoosterFraction,
    BoosterInput,
    C4Input,
    DetaSheetInput,
    InitiatingSystem,
    LinearChargeInput,
    MaterialKind,
    SelectionSet,
    compute,
    contributions,
    cube_root,
    msd,
)


def test_empty_selection_is_zero() -> None:
    result = compute(SelectionSet())
    assert result.new_lbs == 0.0
    assert result.external_msd_ft == 0
    assert result.internal_msd_ft == 0


def test_deta_sheet_alone() -> None:
    result = compute(SelectionSet(deta_sheet=DetaSheetInput(10.0, 10.0, 0.6)))
    assert result.new_lbs == pytest.approx(60 / 453.6 * 1.19)
    assert result.new_lbs == pytest.approx(0.1574, abs=1e-4)
    assert result.external_msd_ft == 10
    assert result.internal_msd_ft == 20


def test_c4_alone() -> None:
    result = compute(SelectionSet(composition_c4=C4Input(5.0)))
    assert result.new_lbs == pytest.approx(6.70)
    assert result.external_msd_ft == 34
    assert result.internal_msd_ft == 68


def test_booster_fractions() -> None:
    full = BoosterInput(BoosterFraction.FULL).raw_pounds()
    assert full == pytest.approx(20 / 453.6)
    assert BoosterInput(BoosterFraction.HALF).raw_pounds() == full / 2
    assert BoosterInput(BoosterFraction.THIRD).raw_pounds() == pytest.approx(full / 3)

    result = compute(SelectionSet(mk140_booster=BoosterInput(BoosterFraction.FULL)))
    assert result.new_lbs == pytest.approx(0.05247, abs=1e-5)


def test_booster_without_fraction_contributes_nothing() -> None:
    result = compute(SelectionSet(mk140_booster=BoosterInput()))
    assert result.new_lbs == 0.0
    assert result.external_msd_ft == 0


def test_dual_caps_alone_is_unweighted() -> None:
    result = compute(SelectionSet(initiating_system=InitiatingSystem.DUAL_CAPS))
    assert result.new_lbs == 0.007
    assert result.external_msd_ft == 4
    assert result.internal_msd_ft == 7


def test_det_cord_with_lead() -> None:
    selection = SelectionSet(
        det_cord=LinearChargeInput(10.0, 400.0),
        initiating_system=InitiatingSystem.LEAD_30FT,
    )
    result = compute(selection)
    assert result.new_lbs == pytest.approx(4000 / 7000 * 1.66 + 0.003)
    assert result.new_lbs == pytest.approx(0.9516, abs=1e-4)
    assert result.external_msd_ft == 18
    assert result.internal_msd_ft == 36


def test_ect_uses_its_own_re_factor() -> None:
    ect = compute(SelectionSet(ect=LinearChargeInput(10.0, 400.0)))
    cord = compute(SelectionSet(det_cord=LinearChargeInput(10.0, 400.0)))
    assert ect.new_lbs == pytest.approx(4000 / 7000 * 1.27)
    assert cord.new_lbs / ect.new_lbs == pytest.approx(1.66 / 1.27)


def test_additivity_over_all_materials() -> None:
    parts = {
        "deta_sheet": DetaSheetInput(12.0, 3.0, 0.85),
        "det_cord": LinearChargeInput(25.0, 50.0),
        "composition_c4": C4Input(1.25),
        "mk140_booster": BoosterInput(BoosterFraction.THIRD),
        "ect": LinearChargeInput(4.0, 125.0),
    }
    system = InitiatingSystem.DELAY_3_8S

    combined = compute(SelectionSet(initiating_system=system, **parts)).new_lbs
    separate = sum(compute(SelectionSet(**{name: part})).new_lbs for name, part in parts.items())
    assert combined == pytest.approx(separate + INITIATING_SYSTEM_NEW[system])


def test_contributions_follow_summation_order() -> None:
    selection = SelectionSet(
        ect=LinearChargeInput(1.0, 7000.0),
        composition_c4=C4Input(2.0),
        deta_sheet=DetaSheetInput(1.0, 1.0, 453.6),
    )
    rows = contributions(selection)
    assert [row.material for row in rows] == [
        MaterialKind.DETA_SHEET,
        MaterialKind.COMPOSITION_C4,
        MaterialKind.ECT,
    ]
    for row in rows:
        assert row.re_factor == RE_FACTORS[row.material]
        assert row.weighted_pounds == row.raw_pounds * row.re_factor
    assert rows[0].raw_pounds == 1.0
    assert rows[2].raw_pounds == 1.0


def test_compute_is_idempotent() -> None:
    selection = SelectionSet(
        deta_sheet=DetaSheetInput(7.5, 2.25, 0.6),
        mk140_booster=BoosterInput(BoosterFraction.HALF),
        initiating_system=InitiatingSystem.DUAL_CAPS,
    )
    assert compute(selection) == compute(selection)


def test_negative_input_does_not_crash() -> None:
    result = compute(SelectionSet(composition_c4=C4Input(-5.0)))
    assert result.new_lbs == pytest.approx(-6.70)
    assert result.external_msd_ft == -33
    assert result.internal_msd_ft == -67


def test_cube_root_is_real_for_negatives() -> None:
    assert cube_root(-8.0) == pytest.approx(-2.0)
    assert cube_root(27.0) == pytest.approx(3.0)
    assert cube_root(0.0) == 0.0


def test_msd_is_none_for_non_finite_new() -> None:
    assert msd(math.nan, 18) is None
    assert msd(math.inf, 36) is None
    result = compute(SelectionSet(det_cord=LinearChargeInput(math.inf, 0.0)))
    assert math.isnan(result.new_lbs)
    assert result.external_msd_ft is None


def test_constant_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        RE_FACTORS[MaterialKind.DET_CORD] = 2.0
    assert set(RE_FACTORS) == set(MaterialKind)
    assert set(INITIATING_SYSTEM_NEW) == set(InitiatingSystem)


def test_from_label_accepts_label_and_name() -> None:
    assert MaterialKind.from_label("E.C.T.") is MaterialKind.ECT
    assert MaterialKind.from_label("ECT") is MaterialKind.ECT
    assert BoosterFraction.from_label("1/3 Booster") is BoosterFraction.THIRD
    assert InitiatingSystem.from_label("30' lead") is InitiatingSystem.LEAD_30FT
    with pytest.raises(KeyError):
        InitiatingSystem.from_label("Time fuse")
