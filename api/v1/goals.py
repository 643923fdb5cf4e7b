from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from api.v1.deps import require_login
from api.v1.schemas import GoalsCalcIn
from core.models.user import NutritionGoals
from core.nutrition_calc import InvalidActivityLevel
from services.dashboard import Dashboard

router = APIRouter()


@router.get("", response_model=NutritionGoals)
async def read_goals(dash: Dashboard = Depends(require_login)) -> NutritionGoals:
    return dash.state.nutrition_goals


@router.put("", response_model=NutritionGoals)
async def override_goals(
    body: NutritionGoals,
    dash: Dashboard = Depends(require_login),
) -> NutritionGoals:
    # free-form: fields are not checked against each other
    dash.state.update_nutrition_goals(body)
    await dash.save()
    return body


@router.post(
    "/calculate",
    response_model=NutritionGoals,
    summary="Preview goals for the given metrics (nothing is saved)",
)
async def calculate_goals(
    body: GoalsCalcIn,
    dash: Dashboard = Depends(require_login),
) -> NutritionGoals:
    try:
        return dash.calc.compute(body.weight, body.height, body.age, body.activity_level)
    except InvalidActivityLevel as exc:
        raise HTTPException(status_code=422, detail=str(exc))
