from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

import settings
from app.services.dashboard import DashboardView, current_month, upcoming_months
from app.services.dependency import get_dashboard_view
from app.utils.templating import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def dashboard_page(
    request: Request,
    debt: Optional[int] = Query(None, description="Debt id to show in the detail overlay"),
    view: DashboardView = Depends(get_dashboard_view),
):
    view.refresh()
    data, error, loading = view.snapshot()

    context = {
        "data": data,
        "error": error,
        "loading": loading,
        "today": date.today(),
        "poll_interval": settings.POLL_INTERVAL_SECONDS,
        "current_month": None,
        "upcoming_months": [],
        "selected_debt_id": debt,
        "debt_detail": None,
        "debt_detail_error": None,
    }
    if data is not None:
        context["current_month"] = current_month(data.monthly_breakdown)
        context["upcoming_months"] = upcoming_months(
            data.monthly_breakdown, settings.UPCOMING_MONTHS_LIMIT
        )
    if debt is not None:
        context["debt_detail"], context["debt_detail_error"] = view.load_debt_detail(debt)

    return templates.TemplateResponse(request, "dashboard.html", context)
