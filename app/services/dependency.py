from functools import lru_cache

import settings
from app.services.dashboard import DashboardView
from app.utils.api_client import ApiClient


@lru_cache()
def get_api_client() -> ApiClient:
    """
    Dependency returning the process-wide backend client.
    Its only configuration is the base URL from settings.
    """
    return ApiClient(settings.API_BASE_URL)


@lru_cache()
def get_dashboard_view() -> DashboardView:
    return DashboardView(get_api_client())
