from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from api.v1.deps import get_dashboard
from api.v1.schemas import LoginIn, SessionOut
from services.auth import validate_credentials
from services.dashboard import Dashboard

router = APIRouter()


@router.get("", response_model=SessionOut)
async def read_session(dash: Dashboard = Depends(get_dashboard)) -> SessionOut:
    return SessionOut(is_authenticated=dash.state.is_authenticated)


# ───────────────────────── login / logout ──────────────────
@router.post("/login", response_model=SessionOut)
async def login(
    body: LoginIn,
    dash: Dashboard = Depends(get_dashboard),
) -> SessionOut:
    errors = validate_credentials(body.email, body.password)
    if errors:
        raise HTTPException(
            status_code=422,
            detail={"errors": errors},
        )

    dash.state.login(body.email)
    await dash.save()
    return SessionOut(is_authenticated=True)


@router.post("/logout", response_model=SessionOut)
async def logout(dash: Dashboard = Depends(get_dashboard)) -> SessionOut:
    dash.state.logout()
    await dash.save()
    return SessionOut(is_authenticated=False)
