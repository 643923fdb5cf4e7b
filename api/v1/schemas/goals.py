from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GoalsCalcIn(BaseModel):
    age: int = Field(..., ge=16, le=100)
    weight: float = Field(..., ge=30, le=300)
    height: float = Field(..., ge=100, le=250)
    # plain str on purpose: unknown levels are reported by the calculator
    activity_level: str = Field(..., alias="activityLevel", examples=["moderate"])

    model_config = ConfigDict(populate_by_name=True)
