import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Mapping, Optional

import requests
from pydantic import ValidationError

from app.schemas.debt import DebtCreate, DebtOut, InstallmentOut, InstallmentUpdate
from app.utils.api_client import ApiClient, describe_error
from app.utils.formatting import to_minor_units

logger = logging.getLogger(__name__)

DEBTS_PATH = "/api/admin/debts"
INSTALLMENTS_PATH = "/api/admin/installments"

MODE_MONTHLY = "monthly"
MODE_TOTAL = "total"
AMOUNT_MODES = (MODE_MONTHLY, MODE_TOTAL)


class FormError(ValueError):
    """Client-side validation failure; never reaches the backend."""


def preview(mode: str, amount: str, count) -> Optional[int]:
    """
    Counterpart of the entered amount in minor units: the monthly payment in
    "total" mode, the total in "monthly" mode. None while the input is
    incomplete or invalid.
    """
    try:
        amount_minor = to_minor_units(amount)
        count = int(count)
    except (TypeError, ValueError):
        return None
    if count < 1 or amount_minor <= 0:
        return None
    if mode == MODE_TOTAL:
        return int((Decimal(amount_minor) / count).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if mode == MODE_MONTHLY:
        return amount_minor * count
    return None


def parse_debt_form(form: Mapping[str, str]) -> DebtCreate:
    title = (form.get("title") or "").strip()
    if not title:
        raise FormError("Title is required")

    mode = form.get("mode") or MODE_MONTHLY
    if mode not in AMOUNT_MODES:
        raise FormError(f"Unknown amount mode: {mode}")

    try:
        amount = to_minor_units(form.get("amount") or "")
    except ValueError:
        raise FormError("Amount must be a number")
    if amount <= 0:
        raise FormError("Amount must be greater than zero")

    try:
        count = int(form.get("installmentCount") or "")
    except ValueError:
        raise FormError("Installment count must be a whole number")
    if count < 1:
        raise FormError("Installment count must be at least 1")

    try:
        start_date = date.fromisoformat(form.get("startDate") or "")
    except ValueError:
        raise FormError("Start date is required")

    interest_rate = None
    if form.get("interestRate"):
        try:
            interest_rate = float(form["interestRate"])
        except ValueError:
            raise FormError("Interest rate must be a number")

    amounts = {"total_amount": amount} if mode == MODE_TOTAL else {"monthly_payment_amount": amount}
    return DebtCreate(
        title=title,
        installment_count=count,
        start_date=start_date,
        interest_rate=interest_rate,
        **amounts,
    )


def parse_installment_form(form: Mapping[str, str]) -> InstallmentUpdate:
    """Only fields with a non-empty value end up in the update."""
    update = InstallmentUpdate()
    if form.get("amount"):
        try:
            update.amount = to_minor_units(form["amount"])
        except ValueError:
            raise FormError("Amount must be a number")
        if update.amount < 0:
            raise FormError("Amount cannot be negative")
    if form.get("dueDate"):
        try:
            update.due_date = date.fromisoformat(form["dueDate"])
        except ValueError:
            raise FormError("Due date must be a valid date")
    return update


class AdminView:
    """Per-request admin state: the debt list plus any error or alert to show."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.debts: List[DebtOut] = []
        self.error: Optional[str] = None
        self.alert: Optional[str] = None

    def load(self) -> bool:
        try:
            payload = self.client.get(DEBTS_PATH, params={"includeInstallments": "true"})
            self.debts = [DebtOut.model_validate(d) for d in payload or []]
            self.error = None
            return True
        except requests.RequestException as e:
            self.error = describe_error(e, "Failed to load debts")
        except ValidationError as e:
            logger.error("Unexpected debts payload: %s", e)
            self.error = "Failed to load debts"
        return False

    def find_installment(self, installment_id: int) -> Optional[InstallmentOut]:
        for debt in self.debts:
            for inst in debt.installments or []:
                if inst.id == installment_id:
                    return inst
        return None

    def create_debt(self, form: Mapping[str, str]) -> bool:
        try:
            payload = parse_debt_form(form).to_payload()
        except FormError as e:
            self.alert = str(e)
            return False

        try:
            self.client.post(DEBTS_PATH, json=payload)
        except requests.RequestException as e:
            self.alert = describe_error(e, "Failed to create debt")
            return False

        logger.info("Created debt %r", payload["title"])
        self.load()
        return True

    def delete_debt(self, debt_id: int) -> bool:
        """
        On success the row is dropped from the local list without a refetch.
        On failure the list is refetched so it reflects what the backend kept.
        """
        try:
            self.client.delete(f"{DEBTS_PATH}/{debt_id}")
        except requests.RequestException as e:
            self.alert = describe_error(e, "Failed to delete debt")
            self.load()
            return False

        self.debts = [d for d in self.debts if d.id != debt_id]
        logger.info("Deleted debt %s", debt_id)
        return True

    def update_installment(self, installment_id: int, form: Mapping[str, str]) -> bool:
        try:
            payload = parse_installment_form(form).to_payload()
        except FormError as e:
            self.alert = str(e)
            return False
        if not payload:
            self.alert = "Nothing to update"
            return False

        try:
            self.client.put(f"{INSTALLMENTS_PATH}/{installment_id}", json=payload)
        except requests.RequestException as e:
            self.alert = describe_error(e, "Failed to update installment")
            return False

        logger.info("Updated installment %s: %s", installment_id, sorted(payload))
        self.load()
        return True
