# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 09:12:44 2026

@author: KRHE

Net Explosive Weight (N.E.W., lbs TNT equivalent) for a combination of
demolition charges, and the external/internal minimum safe distance (MSD)
derived from it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Optional

import numpy as np

GRAMS_PER_POUND = 453.6
GRAINS_PER_POUND = 7000
BOOSTER_GRAMS = 20  # one whole Mk 140 booster

EXTERNAL_MSD_FACTOR = 18
INTERNAL_MSD_FACTOR = 36


class _Labelled(Enum):
    """Enum whose value is the display label used in the form and in JSON."""

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, text):
        """Look up a member by display label or by member name."""
        for member in cls:
            if text == member.value or text == member.name:
                return member
        raise KeyError(text)


class MaterialKind(_Labelled):
    DETA_SHEET = "Deta Sheet"
    DET_CORD = "Det Cord"
    COMPOSITION_C4 = "Composition C-4"
    MK140_BOOSTER = "Mk 140 Booster"
    ECT = "E.C.T."


class BoosterFraction(_Labelled):
    FULL = "Full Booster"
    HALF = "1/2 Booster"
    THIRD = "1/3 Booster"

    @property
    def divisor(self) -> int:
        return _BOOSTER_DIVISORS[self]


class InitiatingSystem(_Labelled):
    LEAD_30FT = "30' lead"
    DELAY_3_8S = "3.8 second delay"
    DUAL_CAPS = "Dual Caps"


_BOOSTER_DIVISORS = MappingProxyType({
    BoosterFraction.FULL: 1,
    BoosterFraction.HALF: 2,
    BoosterFraction.THIRD: 3,
})

RE_FACTORS = MappingProxyType({
    MaterialKind.DET_CORD: 1.66,
    MaterialKind.ECT: 1.27,
    MaterialKind.DETA_SHEET: 1.19,
    MaterialKind.MK140_BOOSTER: 1.19,
    MaterialKind.COMPOSITION_C4: 1.34,
})

# lbs TNT eq, added without RE weighting
INITIATING_SYSTEM_NEW = MappingProxyType({
    InitiatingSystem.LEAD_30FT: 0.003,
    InitiatingSystem.DELAY_3_8S: 0.004,
    InitiatingSystem.DUAL_CAPS: 0.007,
})


# =============================================================================
# Per-material inputs
# =============================================================================

@dataclass(frozen=True)
class DetaSheetInput:
    length_in: float
    width_in: float
    c_value: float  # grams per square inch

    def raw_pounds(self) -> float:
        grams = self.length_in * self.width_in * self.c_value
        return grams / GRAMS_PER_POUND


@dataclass(frozen=True)
class LinearChargeInput:
    """Det cord or E.C.T.: a length in feet with a core load in grains per foot."""
    length_ft: float
    grains_per_foot: float

    def raw_pounds(self) -> float:
        grains = self.length_ft * self.grains_per_foot
        return grains / GRAINS_PER_POUND


@dataclass(frozen=True)
class C4Input:
    pounds: float

    def raw_pounds(self) -> float:
        return self.pounds


@dataclass(frozen=True)
class BoosterInput:
    fraction: Optional[BoosterFraction] = None

    def raw_pounds(self) -> float:
        if self.fraction is None:
            return 0.0
        grams = BOOSTER_GRAMS / self.fraction.divisor
        return grams / GRAMS_PER_POUND


@dataclass(frozen=True)
class SelectionSet:
    """Selected charges. A material that is not selected is None, never zeroed."""
    deta_sheet: Optional[DetaSheetInput] = None
    det_cord: Optional[LinearChargeInput] = None
    composition_c4: Optional[C4Input] = None
    mk140_booster: Optional[BoosterInput] = None
    ect: Optional[LinearChargeInput] = None
    initiating_system: Optional[InitiatingSystem] = None

    def charges(self) -> Iterator[tuple]:
        """Yield (MaterialKind, input) for every selected material, in summation order."""
        for kind, charge in (
            (MaterialKind.DETA_SHEET, self.deta_sheet),
            (MaterialKind.DET_CORD, self.det_cord),
            (MaterialKind.COMPOSITION_C4, self.composition_c4),
            (MaterialKind.MK140_BOOSTER, self.mk140_booster),
            (MaterialKind.ECT, self.ect),
        ):
            if charge is not None:
                yield kind, charge


@dataclass(frozen=True)
class Contribution:
    material: MaterialKind
    raw_pounds: float
    re_factor: float
    weighted_pounds: float


@dataclass(frozen=True)
class CalculationResult:
    new_lbs: float
    external_msd_ft: Optional[int]
    internal_msd_ft: Optional[int]


# =============================================================================
# Calculation
# =============================================================================

def contributions(selection: SelectionSet) -> list:
    """TNT equivalent of each selected material (raw pounds times RE factor)."""
    rows = []
    for kind, charge in selection.charges():
        raw = charge.raw_pounds()
        re_factor = RE_FACTORS[kind]
        rows.append(Contribution(kind, raw, re_factor, raw * re_factor))
    return rows


def net_explosive_weight(selection: SelectionSet) -> float:
    total = 0.0
    for row in contributions(selection):
        total += row.weighted_pounds
    if selection.initiating_system is not None:
        total += INITIATING_SYSTEM_NEW[selection.initiating_system]
    return total


def cube_root(x: float) -> float:
    """Real cube root, negative for negative x."""
    return float(np.cbrt(x))


def msd(new_lbs: float, factor: float) -> Optional[int]:
    """
    Minimum safe distance in feet: ceil(N.E.W.**(1/3) * factor).
    Args:
      new_lbs : net explosive weight (lbs TNT eq)
      factor  : 18 for external, 36 for internal MSD
    Returns:
      feet as int. None if new_lbs is NaN or infinite.
    """
    if not math.isfinite(new_lbs):
        return None
    return int(math.ceil(cube_root(new_lbs) * factor))


def compute(selection: SelectionSet) -> CalculationResult:
    new_lbs = net_explosive_weight(selection)
    return CalculationResult(
        new_lbs=new_lbs,
        external_msd_ft=msd(new_lbs, EXTERNAL_MSD_FACTOR),
        internal_msd_ft=msd(new_lbs, INTERNAL_MSD_FACTOR),
    )
