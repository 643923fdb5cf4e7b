from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very-active"


class Profile(BaseModel):
    """Stored user profile. Keys serialise in the dashboard's camelCase."""

    name: str = ""
    email: str = ""
    age: int = Field(..., gt=0)
    weight: float = Field(..., gt=0, allow_inf_nan=False)   # kg
    height: float = Field(..., gt=0, allow_inf_nan=False)   # cm
    activity_level: ActivityLevel = Field(..., alias="activityLevel")
    fitness_goals: str = Field("", alias="fitnessGoals")

    model_config = ConfigDict(populate_by_name=True)


class NutritionGoals(BaseModel):
    """Daily targets as display text; may be edited by hand."""

    protein: str = "120g"
    calories: str = "2000"
    fat: str = "65g"
    carbs: str = "250g"


# what the profile form shows before anything was saved
DEFAULT_PROFILE = Profile(
    name="",
    email="",
    age=22,
    weight=76,
    height=170,
    activity_level=ActivityLevel.moderate,
    fitness_goals="",
)
