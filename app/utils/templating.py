from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.services.dashboard import installment_status, month_progress
from app.utils.formatting import format_currency, format_date, format_percent, from_minor_units

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

NAV_ITEMS = [
    {"path": "/", "label": "Dashboard", "icon": "🏠"},
    {"path": "/viewer", "label": "Viewer", "icon": "👁"},
    {"path": "/admin", "label": "Admin", "icon": "⚙"},
]

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["date"] = format_date
templates.env.filters["percent"] = format_percent
templates.env.filters["major_units"] = from_minor_units
templates.env.globals["nav_items"] = NAV_ITEMS
templates.env.globals["installment_status"] = installment_status
templates.env.globals["month_progress"] = month_progress
