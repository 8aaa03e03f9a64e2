import asyncio
import logging

from app.services.dashboard import DashboardView

logger = logging.getLogger(__name__)


async def poll_dashboard(view: DashboardView, interval: float):
    """Refresh the dashboard every `interval` seconds until cancelled."""
    logger.info("Dashboard poller started (every %ss)", interval)
    try:
        while True:
            # refresh() blocks on requests; keep it off the event loop
            try:
                await asyncio.to_thread(view.refresh)
            except Exception:
                logger.exception("Dashboard poll failed")
            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("Dashboard poller stopped")
        raise


def start_poller(view: DashboardView, interval: float):
    if interval <= 0:
        logger.info("Dashboard poller disabled")
        return None
    return asyncio.create_task(poll_dashboard(view, interval))


async def stop_poller(task):
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
