from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse

from app.services.admin import AdminView, MODE_MONTHLY, MODE_TOTAL, preview
from app.services.dependency import get_api_client
from app.utils.api_client import ApiClient
from app.utils.formatting import format_currency, from_minor_units
from app.utils.templating import templates

router = APIRouter()


def get_admin_view(client: ApiClient = Depends(get_api_client)) -> AdminView:
    return AdminView(client)


def render_admin(
    request: Request,
    view: AdminView,
    create_open: bool = False,
    form_values: Optional[dict] = None,
    edit_id: Optional[int] = None,
    edit_values: Optional[dict] = None,
    replace_url: bool = False,
):
    edit_installment = view.find_installment(edit_id) if edit_id is not None else None
    if edit_installment is not None and edit_values is None:
        edit_values = {
            "amount": from_minor_units(edit_installment.amount),
            "dueDate": edit_installment.due_date.isoformat(),
        }
    context = {
        "view": view,
        "create_open": create_open,
        "form_values": form_values or {"mode": MODE_MONTHLY},
        "edit_id": edit_id,
        "edit_installment": edit_installment,
        "edit_values": edit_values or {},
        "replace_url": replace_url,
        # POST handlers render this page at their own URL
        "nav_path": "/admin",
    }
    return templates.TemplateResponse(request, "admin.html", context)


@router.get("", response_class=HTMLResponse)
def admin_page(
    request: Request,
    create: bool = Query(False),
    edit: Optional[int] = Query(None, description="Installment id to edit"),
    view: AdminView = Depends(get_admin_view),
):
    view.load()
    return render_admin(request, view, create_open=create, edit_id=edit)


@router.get("/debts/preview")
def debt_preview(
    mode: str = Query(MODE_MONTHLY),
    amount: str = Query(""),
    count: str = Query(""),
):
    """Live counterpart for the create form: total <-> monthly, in minor units."""
    value = preview(mode, amount, count)
    return {
        "mode": mode,
        "label": "Monthly payment" if mode == MODE_TOTAL else "Total amount",
        "value": value,
        "formatted": format_currency(value) if value is not None else None,
    }


@router.post("/debts", response_class=HTMLResponse)
def create_debt(
    request: Request,
    title: str = Form(""),
    mode: str = Form(MODE_MONTHLY),
    amount: str = Form(""),
    installmentCount: str = Form(""),
    startDate: str = Form(""),
    interestRate: str = Form(""),
    view: AdminView = Depends(get_admin_view),
):
    form = {
        "title": title,
        "mode": mode,
        "amount": amount,
        "installmentCount": installmentCount,
        "startDate": startDate,
        "interestRate": interestRate,
    }
    if view.create_debt(form):
        return render_admin(request, view, replace_url=True)

    view.load()
    return render_admin(request, view, create_open=True, form_values=form, replace_url=True)


@router.post("/debts/{debt_id}/delete", response_class=HTMLResponse)
def delete_debt(
    request: Request,
    debt_id: int,
    view: AdminView = Depends(get_admin_view),
):
    view.load()
    view.delete_debt(debt_id)
    return render_admin(request, view, replace_url=True)


@router.post("/installments/{installment_id}", response_class=HTMLResponse)
def update_installment(
    request: Request,
    installment_id: int,
    amount: str = Form(""),
    dueDate: str = Form(""),
    view: AdminView = Depends(get_admin_view),
):
    form = {"amount": amount, "dueDate": dueDate}
    if view.update_installment(installment_id, form):
        return render_admin(request, view, replace_url=True)

    view.load()
    return render_admin(
        request, view, edit_id=installment_id, edit_values=form, replace_url=True
    )
