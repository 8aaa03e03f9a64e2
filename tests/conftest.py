import json

import pytest
import requests
from fastapi.testclient import TestClient

from app.services.dashboard import DashboardView
from app.services.dependency import get_api_client, get_dashboard_view
from main import app


class FakeApiClient:
    """Stands in for ApiClient: canned responses keyed by (method, path)."""

    base_url = "http://backend.test"

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.errors = {}

    def _handle(self, method, path, **kwargs):
        self.calls.append((method, path, kwargs))
        key = (method, path)
        if key in self.errors:
            raise self.errors[key]
        response = self.responses.get(key)
        return response() if callable(response) else response

    def get(self, path, params=None):
        return self._handle("GET", path, params=params)

    def post(self, path, json=None):
        return self._handle("POST", path, json=json)

    def put(self, path, json=None):
        return self._handle("PUT", path, json=json)

    def delete(self, path):
        return self._handle("DELETE", path)

    def calls_to(self, method, path):
        return [c for c in self.calls if c[0] == method and c[1] == path]


def http_error(status, body):
    response = requests.Response()
    response.status_code = status
    response._content = json.dumps(body).encode()
    response.headers["Content-Type"] = "application/json"
    return requests.HTTPError(f"{status} Error", response=response)


def connection_error():
    request = requests.Request("GET", "http://backend.test/api").prepare()
    return requests.ConnectionError("Connection refused", request=request)


def make_installment_summary(installment_id, debt_id, title, amount, due_date, paid=False, is_overdue=False):
    return {
        "installmentId": installment_id,
        "debtId": debt_id,
        "debtTitle": title,
        "amount": amount,
        "dueDate": due_date,
        "paid": paid,
        "paidAt": None,
        "isOverdue": is_overdue,
    }


def make_month(month, label, total_due, total_paid, installments=None):
    return {
        "month": month,
        "monthLabel": label,
        "totalDue": total_due,
        "totalPaid": total_paid,
        "remaining": total_due - total_paid,
        "isComplete": total_paid >= total_due,
        "installments": installments or [],
    }


@pytest.fixture
def summary_payload():
    return {
        "summary": {
            "totalPaid": 446000,
            "totalOutstanding": 2230000,
            "totalAmount": 2676000,
            "progressPercentage": 16.67,
            "activeDebtsCount": 1,
            "completedDebtsCount": 0,
        },
        "monthlyBreakdown": [
            make_month("2020-01", "January 2020", 223000, 223000, [
                make_installment_summary(1, 7, "Car loan", 223000, "2020-01-15", paid=True),
            ]),
            make_month("2020-02", "February 2020", 223000, 0, [
                make_installment_summary(2, 7, "Car loan", 223000, "2020-02-15", is_overdue=True),
            ]),
            make_month("2999-03", "March 2999", 223000, 0, [
                make_installment_summary(3, None, "Legacy entry", 223000, "2999-03-15"),
            ]),
        ],
        "debtBreakdown": [
            {
                "debtId": 7,
                "title": "Car loan",
                "totalAmount": 2676000,
                "paidAmount": 446000,
                "remainingAmount": 2230000,
                "progressPercentage": 16.67,
                "status": "ACTIVE",
            }
        ],
    }


@pytest.fixture
def debts_payload():
    return [
        {
            "id": 5,
            "title": "Phone plan",
            "totalAmount": 300000,
            "installmentCount": 12,
            "startDate": "2025-01-01",
            "interestRate": None,
            "status": "ACTIVE",
            "installments": [
                {
                    "id": 51,
                    "debtId": 5,
                    "debtTitle": "Phone plan",
                    "installmentNumber": 1,
                    "amount": 25000,
                    "dueDate": "2025-01-01",
                    "paid": True,
                    "paidAt": "2025-01-02T10:00:00",
                    "isOverdue": False,
                },
                {
                    "id": 52,
                    "debtId": 5,
                    "debtTitle": "Phone plan",
                    "installmentNumber": 2,
                    "amount": 25050,
                    "dueDate": "2025-02-01",
                    "paid": False,
                    "paidAt": None,
                    "isOverdue": True,
                },
            ],
        },
        {
            "id": 6,
            "title": "Sofa",
            "totalAmount": 120000,
            "installmentCount": 3,
            "startDate": "2025-03-01",
            "interestRate": 1.5,
            "status": "PAID_OFF",
            "installments": [],
        },
    ]


@pytest.fixture
def fake_client():
    return FakeApiClient()


@pytest.fixture
def dashboard_view(fake_client):
    return DashboardView(fake_client)


@pytest.fixture
def client(fake_client, dashboard_view):
    app.dependency_overrides[get_api_client] = lambda: fake_client
    app.dependency_overrides[get_dashboard_view] = lambda: dashboard_view
    yield TestClient(app)
    app.dependency_overrides.clear()
