from __future__ import annotations

from pydantic import BaseModel, Field

from core.models.user import NutritionGoals, Profile


class ProfileIn(Profile):
    """Same fields as the stored profile, with the form's range checks."""

    age: int = Field(..., ge=16, le=100)
    weight: float = Field(..., ge=30, le=300)
    height: float = Field(..., ge=100, le=250)


class ProfileSave(BaseModel):
    profile: ProfileIn
    # omitted → keep whatever goals are current
    goals: NutritionGoals | None = None


class ProfileView(BaseModel):
    profile: Profile
    saved: bool = Field(..., description="False while the default form values are shown")
