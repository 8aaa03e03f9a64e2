import logging
import threading
from datetime import date
from typing import List, Optional

import requests
from pydantic import ValidationError

from app.schemas.dashboard import DashboardSummary, MonthlyBreakdown
from app.schemas.debt import DebtOut
from app.utils.api_client import ApiClient, describe_error

logger = logging.getLogger(__name__)

SUMMARY_PATH = "/api/dashboard/summary"

STATUS_PAID = "Paid"
STATUS_OVERDUE = "Overdue"
STATUS_PENDING = "Pending"


def current_month(months: List[MonthlyBreakdown]) -> Optional[MonthlyBreakdown]:
    """First incomplete month, falling back to the first month overall."""
    for month in months:
        if not month.is_complete:
            return month
    return months[0] if months else None


def upcoming_months(months: List[MonthlyBreakdown], limit: int = 6) -> List[MonthlyBreakdown]:
    return [m for m in months if not m.is_complete and m.remaining > 0][:limit]


def month_progress(month: MonthlyBreakdown) -> float:
    if month.total_due <= 0:
        return 0.0
    return month.total_paid / month.total_due * 100


def installment_status(installment, today: Optional[date] = None) -> str:
    """
    Works for both InstallmentOut and InstallmentSummary. Paid always wins;
    an unpaid installment is overdue when the backend flags it or its due
    date has passed.
    """
    if installment.paid:
        return STATUS_PAID
    today = today or date.today()
    if installment.is_overdue or installment.due_date < today:
        return STATUS_OVERDUE
    return STATUS_PENDING


class DashboardView:
    """
    Process-wide dashboard state.

    refresh() may run concurrently from page loads and the background poller.
    Each call takes a sequence number before going to the network and its
    result is applied only if no newer call has already been applied.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.data: Optional[DashboardSummary] = None
        self.error: Optional[str] = None
        self.loading = True
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0

    @property
    def error_message(self) -> str:
        return (
            "Failed to load dashboard data. "
            f"Make sure the backend is running on {self.client.base_url}"
        )

    def _next_sequence(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def refresh(self) -> bool:
        """Fetch the summary. Returns False when the result was discarded as stale."""
        seq = self._next_sequence()
        try:
            payload = self.client.get(SUMMARY_PATH)
            data = DashboardSummary.model_validate(payload)
        except (requests.RequestException, ValidationError) as e:
            logger.error("Dashboard refresh #%d failed: %s", seq, e)
            return self._apply(seq, error=self.error_message)
        return self._apply(seq, data=data)

    def _apply(self, seq: int, data: Optional[DashboardSummary] = None, error: Optional[str] = None) -> bool:
        with self._lock:
            if seq < self._applied:
                logger.info("Discarding stale dashboard response #%d (applied #%d)", seq, self._applied)
                return False
            self._applied = seq
            if data is not None:
                self.data = data
            self.error = error
            self.loading = False
            return True

    def snapshot(self):
        with self._lock:
            return self.data, self.error, self.loading

    def load_debt_detail(self, debt_id: int):
        """Debt detail for the overlay. Returns (debt, error_message)."""
        try:
            payload = self.client.get(
                f"/api/admin/debts/{debt_id}", params={"includeInstallments": "false"}
            )
            return DebtOut.model_validate(payload), None
        except requests.RequestException as e:
            return None, describe_error(e, "Failed to load debt details")
        except ValidationError as e:
            logger.error("Unexpected debt detail payload for %s: %s", debt_id, e)
            return None, "Failed to load debt details"
