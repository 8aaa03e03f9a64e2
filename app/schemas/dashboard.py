from typing import List, Optional
from datetime import date, datetime

from app.schemas.debt import CamelModel


class SummaryTotals(CamelModel):
    total_paid: int = 0
    total_outstanding: int = 0
    total_amount: int = 0
    progress_percentage: float = 0.0
    active_debts_count: int = 0
    completed_debts_count: int = 0


class InstallmentSummary(CamelModel):
    installment_id: int
    debt_id: Optional[int] = None
    debt_title: str
    amount: int
    due_date: date
    paid: bool = False
    paid_at: Optional[datetime] = None
    is_overdue: bool = False


class MonthlyBreakdown(CamelModel):
    month: str
    month_label: str
    total_due: int = 0
    total_paid: int = 0
    remaining: int = 0
    is_complete: bool = False
    installments: List[InstallmentSummary] = []


class DebtBreakdown(CamelModel):
    debt_id: int
    title: str
    total_amount: int = 0
    paid_amount: int = 0
    remaining_amount: int = 0
    progress_percentage: float = 0.0
    status: str = "ACTIVE"


class DashboardSummary(CamelModel):
    summary: SummaryTotals
    monthly_breakdown: List[MonthlyBreakdown] = []
    debt_breakdown: List[DebtBreakdown] = []
