from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import date, datetime
from enum import Enum


class DebtStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAID_OFF = "PAID_OFF"


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class InstallmentOut(CamelModel):
    id: int
    debt_id: Optional[int] = None
    debt_title: Optional[str] = None
    installment_number: int
    amount: int
    due_date: date
    paid: bool = False
    paid_at: Optional[datetime] = None
    is_overdue: bool = False


class DebtSummary(CamelModel):
    paid_amount: Optional[int] = None
    remaining_amount: Optional[int] = None
    paid_count: Optional[int] = None
    remaining_count: Optional[int] = None
    progress_percentage: Optional[float] = None


class DebtOut(CamelModel):
    id: int
    title: str
    total_amount: int
    installment_count: int
    start_date: date
    interest_rate: Optional[float] = None
    status: DebtStatus = DebtStatus.ACTIVE
    summary: Optional[DebtSummary] = None
    installments: Optional[List[InstallmentOut]] = None


class DebtCreate(CamelModel):
    """Payload for POST /api/admin/debts. Amounts are integer minor units."""
    title: str
    installment_count: int = Field(ge=1)
    start_date: date
    interest_rate: Optional[float] = None
    total_amount: Optional[int] = None
    monthly_payment_amount: Optional[int] = None

    @model_validator(mode="after")
    def check_amount_mode(self):
        if (self.total_amount is None) == (self.monthly_payment_amount is None):
            raise ValueError("Exactly one of totalAmount or monthlyPaymentAmount is required")
        return self

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class InstallmentUpdate(CamelModel):
    amount: Optional[int] = None
    due_date: Optional[date] = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
