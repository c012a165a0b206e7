# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:05:31 2026

@author: KRHE

JSON in/out for the charge calculator. The document format is

    {"materials": {"Det Cord": {"length_ft": 10, "grains_per_foot": 400}, ...},
     "initiating_system": "30' lead"}

Material names, booster fractions and initiating systems can be given by
display label or by enum name. A material missing from "materials" is not
selected.
"""
from __future__ import annotations

import json

from charge_model import (
    BoosterFraction,
    BoosterInput,
    C4Input,
    CalculationResult,
    DetaSheetInput,
    InitiatingSystem,
    LinearChargeInput,
    MaterialKind,
    SelectionSet,
    compute,
    contributions,
)


class ChargeInputError(ValueError):
    """Input document has the wrong shape (unknown names, missing or non-numeric fields)."""


# (SelectionSet field, input type, required numeric fields)
_MATERIAL_FIELDS = {
    MaterialKind.DETA_SHEET: ("deta_sheet", DetaSheetInput, ("length_in", "width_in", "c_value")),
    MaterialKind.DET_CORD: ("det_cord", LinearChargeInput, ("length_ft", "grains_per_foot")),
    MaterialKind.COMPOSITION_C4: ("composition_c4", C4Input, ("pounds",)),
    MaterialKind.ECT: ("ect", LinearChargeInput, ("length_ft", "grains_per_foot")),
}


def _lookup(enum_cls, text, where):
    try:
        return enum_cls.from_label(text)
    except KeyError:
        choices = ", ".join(repr(m.label) for m in enum_cls)
        raise ChargeInputError(f"{where}: unknown value {text!r} (expected one of {choices})") from None


def _number(params, key, where):
    if key not in params:
        raise ChargeInputError(f"{where}: missing field {key!r}")
    value = params[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ChargeInputError(f"{where}.{key}: expected a number, got {value!r}")
    try:
        return float(value)
    except OverflowError as err:
        raise ChargeInputError(f"{where}.{key}: number out of range") from err


def _booster(params, where):
    fraction = params.get("fraction")
    if fraction is None or fraction == "":
        return BoosterInput()
    return BoosterInput(_lookup(BoosterFraction, fraction, f"{where}.fraction"))


def selection_from_dict(document) -> SelectionSet:
    if not isinstance(document, dict):
        raise ChargeInputError("input must be a JSON object")

    materials = document.get("materials")
    if materials is None:
        materials = {}
    if not isinstance(materials, dict):
        raise ChargeInputError("materials: expected an object")

    fields = {}
    for name, params in materials.items():
        where = f"materials[{name!r}]"
        kind = _lookup(MaterialKind, name, "materials")
        if not isinstance(params, dict):
            raise ChargeInputError(f"{where}: expected an object")
        if kind is MaterialKind.MK140_BOOSTER:
            field_name, charge = "mk140_booster", _booster(params, where)
        else:
            field_name, input_cls, keys = _MATERIAL_FIELDS[kind]
            charge = input_cls(*(_number(params, key, where) for key in keys))
        # label and enum name map to the same field
        if field_name in fields:
            raise ChargeInputError(f"{where}: {kind.label} given more than once")
        fields[field_name] = charge

    system = document.get("initiating_system")
    if system is not None and system != "":
        fields["initiating_system"] = _lookup(InitiatingSystem, system, "initiating_system")

    return SelectionSet(**fields)


def result_to_dict(result: CalculationResult) -> dict:
    return {
        "new_lbs": result.new_lbs,
        "external_msd_ft": result.external_msd_ft,
        "internal_msd_ft": result.internal_msd_ft,
    }


def contributions_to_list(selection: SelectionSet) -> list:
    return [
        {
            "material": row.material.label,
            "raw_lbs": row.raw_pounds,
            "re_factor": row.re_factor,
            "weighted_lbs": row.weighted_pounds,
        }
        for row in contributions(selection)
    ]


def compute_json(document, breakdown=False) -> dict:
    selection = selection_from_dict(document)
    output = result_to_dict(compute(selection))
    if breakdown:
        output["contributions"] = contributions_to_list(selection)
    return output


def compute_json_text(text, breakdown=False, indent=None) -> str:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as err:
        raise ChargeInputError(f"invalid JSON: {err}") from err
    output = compute_json(document, breakdown=breakdown)
    try:
        return json.dumps(output, indent=indent, allow_nan=False)
    except ValueError as err:
        raise ChargeInputError(f"result is not a finite number: {output['new_lbs']}") from err
