from __future__ import annotations

from fastapi import APIRouter, Depends

from api.v1.deps import require_login
from api.v1.schemas import ProfileSave, ProfileView
from core.models.user import DEFAULT_PROFILE, Profile
from services.dashboard import Dashboard

router = APIRouter()


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=ProfileView)
async def read_profile(dash: Dashboard = Depends(require_login)) -> ProfileView:
    saved = dash.state.profile
    return ProfileView(profile=saved or DEFAULT_PROFILE, saved=saved is not None)


# ───────────────────────── save ─────────────────────────────
@router.put("", response_model=ProfileView)
async def save_profile(
    body: ProfileSave,
    dash: Dashboard = Depends(require_login),
) -> ProfileView:
    """Store profile and goals together; goals are NOT recomputed here."""
    profile = Profile.model_validate(body.profile.model_dump())
    dash.state.update_profile(profile)
    if body.goals is not None:
        dash.state.update_nutrition_goals(body.goals)
    await dash.save()
    return ProfileView(profile=profile, saved=True)
