import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import settings
from app.routes import admin, dashboard, viewer
from app.services.dependency import get_dashboard_view
from app.services.poller import start_poller, stop_poller

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("payment_tracker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Using backend at %s", settings.API_BASE_URL)
    task = start_poller(get_dashboard_view(), settings.POLL_INTERVAL_SECONDS)
    yield
    await stop_poller(task)


app = FastAPI(title="Family Payment Tracker", lifespan=lifespan)

app.include_router(dashboard.router, tags=["Dashboard"])
app.include_router(viewer.router, prefix="/viewer", tags=["Viewer"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


@app.get("/healthz")
def healthz():
    return {"ok": True}
