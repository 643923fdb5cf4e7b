from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from services.dashboard import Dashboard


def get_dashboard(request: Request) -> Dashboard:
    return request.app.state.dashboard


def require_login(dash: Dashboard = Depends(get_dashboard)) -> Dashboard:
    if not dash.state.is_authenticated:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in first.")
    return dash
