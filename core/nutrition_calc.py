"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Daily nutrition targets from body metrics:

1. BMR  (Mifflin–St Jeor, unisex: always the +5 constant)
2. TDEE (fixed multiplier per activity level)
3. Macros: protein 2.2 g/kg, fat 25 % of kcal, carbs = remainder

Every step rounds half-up on its own; later steps use the rounded values.
Carbs are NOT clamped at zero, extreme inputs can produce a negative figure.
"""

from __future__ import annotations

import logging
import math

from core.models.user import ActivityLevel, NutritionGoals, Profile

Logger = logging.getLogger(__name__)


class InvalidActivityLevel(ValueError):
    """Raised for anything that is not one of the five activity levels."""

    def __init__(self, value: object) -> None:
        allowed = ", ".join(a.value for a in ActivityLevel)
        super().__init__(f"invalid activity level {value!r} (expected one of: {allowed})")
        self.value = value


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionalCalculator:
    """Source-of-truth for kcal + macro targets."""

    _PAL: dict[ActivityLevel, float] = {
        ActivityLevel.sedentary: 1.2,
        ActivityLevel.light: 1.375,
        ActivityLevel.moderate: 1.55,
        ActivityLevel.active: 1.725,
        ActivityLevel.very_active: 1.9,
    }

    # --------------- public entrypoints -------------------------------
    def compute(
        self,
        weight_kg: float,
        height_cm: float,
        age_years: float,
        activity_level: ActivityLevel | str,
    ) -> NutritionGoals:
        pal = self.multiplier(activity_level)
        kcal = _round_half_up(self.bmr(weight_kg, height_cm, age_years) * pal)
        protein = _round_half_up(weight_kg * 2.2)
        fat = _round_half_up(kcal * 0.25 / 9)
        carbs = _round_half_up((kcal - protein * 4 - fat * 9) / 4)

        Logger.debug(
            "targets w=%s h=%s a=%s pal=%s -> kcal=%d p=%d f=%d c=%d",
            weight_kg, height_cm, age_years, pal, kcal, protein, fat, carbs,
        )
        return NutritionGoals(
            calories=f"{kcal}",
            protein=f"{protein}g",
            fat=f"{fat}g",
            carbs=f"{carbs}g",
        )

    def targets(self, p: Profile) -> NutritionGoals:
        return self.compute(p.weight, p.height, p.age, p.activity_level)

    # --------------- BMR / multiplier --------------------------------
    def bmr(self, weight_kg: float, height_cm: float, age_years: float) -> float:
        return 10 * weight_kg + 6.25 * height_cm - 5 * age_years + 5

    def multiplier(self, activity_level: ActivityLevel | str) -> float:
        try:
            level = ActivityLevel(activity_level)
        except ValueError:
            raise InvalidActivityLevel(activity_level) from None
        return self._PAL[level]


_default = NutritionalCalculator()


def compute(
    weight_kg: float,
    height_cm: float,
    age_years: float,
    activity_level: ActivityLevel | str,
) -> NutritionGoals:
    """Module-level shortcut around a shared calculator."""
    return _default.compute(weight_kg, height_cm, age_years, activity_level)
