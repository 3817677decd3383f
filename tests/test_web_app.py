"""Mini README: Tests for the FastAPI dashboard routes.

Drives the application through ``TestClient`` with an in-memory ledger so the
routes can be checked for status codes, JSON payloads, redirects for HTML
forms, and the CSV / PNG downloads.
"""

from __future__ import annotations

import inspect

import pytest
from fastapi.testclient import TestClient

from budgetwidget.configuration import BudgetWidgetSettings
from budgetwidget.interface import create_application


@pytest.fixture
def client(ledger, tmp_path) -> TestClient:
    settings = BudgetWidgetSettings(data_directory=tmp_path, storage_backend="memory")
    return TestClient(create_application(manager=ledger, settings=settings))


def test_dashboard_prompts_for_name_on_first_run(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert 'id="welcome"' in response.text
    assert "Keine Einträge." in response.text


def test_budget_and_transactions_update_summary(client) -> None:
    response = client.post("/budget", data={"amount": "100"})
    assert response.status_code == 200
    assert response.json()["summary"]["budget"] == 100

    response = client.post("/transactions", data={"description": "Coffee", "amount": "4.5", "category": "Food"})
    assert response.status_code == 200
    body = response.json()
    assert body["transaction"]["id"] == "txn_0001"
    assert body["summary"]["spent"] == 4.5
    assert body["summary"]["remaining"] == 95.5

    state = client.get("/api/state").json()
    assert state["transactions"][0]["description"] == "Coffee"
    assert state["summary"]["transaction_count"] == 1


@pytest.mark.parametrize("amount", ["-5", "abc"])
def test_invalid_budget_returns_400(client, amount) -> None:
    response = client.post("/budget", data={"amount": amount})
    assert response.status_code == 400
    assert client.get("/api/state").json()["budget"] == 0


@pytest.mark.parametrize("amount", ["0", "-3", "abc"])
def test_invalid_amount_returns_400(client, amount) -> None:
    response = client.post("/transactions", data={"description": "x", "amount": amount})
    assert response.status_code == 400
    assert client.get("/api/state").json()["transactions"] == []


def test_html_forms_redirect_to_dashboard(client) -> None:
    response = client.post(
        "/transactions",
        data={"description": "Lunch", "amount": "12", "category": "Verpflegung", "redirect": "true"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    page = client.get("/")
    assert "Lunch" in page.text
    assert "12.00" in page.text


def test_filtering_and_categories(client) -> None:
    client.post("/transactions", data={"description": "Lunch", "amount": "12", "category": "Verpflegung"})
    client.post("/transactions", data={"description": "Phone", "amount": "30", "category": "Handyabo"})
    client.post("/transactions", data={"description": "Dinner", "amount": "20", "category": "Verpflegung"})

    filtered = client.get("/transactions", params={"q": "DIN"}).json()["transactions"]
    assert [entry["description"] for entry in filtered] == ["Dinner"]

    by_category = client.get("/transactions", params={"category": "Verpflegung"}).json()["transactions"]
    assert [entry["description"] for entry in by_category] == ["Lunch", "Dinner"]

    categories = client.get("/categories").json()
    assert categories["categories"] == ["Handyabo", "Verpflegung"]
    assert categories["choices"][:3] == ["Verpflegung", "Sparen", "Sonstiges"]

    aggregates = client.get("/aggregates").json()
    assert aggregates == {"labels": ["Verpflegung", "Handyabo"], "values": [32.0, 30.0]}


def test_delete_and_reset(client) -> None:
    created = client.post("/transactions", data={"amount": "5"}).json()["transaction"]
    assert created["description"] == "—"

    assert client.delete("/transactions/txn_9999").json()["deleted"] is False
    assert client.delete(f"/transactions/{created['id']}").json()["deleted"] is True

    client.post("/transactions", data={"amount": "7", "category": "Sparen"})
    response = client.post("/reset")
    assert response.json() == {"cleared": 1}
    assert client.get("/api/state").json()["transactions"] == []


def test_profile_routes(client) -> None:
    assert client.post("/profile/name", data={"name": "Mia"}).json() == {"name": "Mia"}
    assert client.post("/profile/name", data={"name": "   "}).status_code == 400
    assert client.post("/profile/theme", data={"theme": "dark"}).json() == {"theme": "dark"}

    page = client.get("/")
    assert "Hallo Mia" in page.text
    assert 'data-theme="dark"' in page.text
    assert 'id="welcome"' not in page.text


def test_exports_require_data(client) -> None:
    assert client.get("/export/csv").status_code == 404
    assert client.get("/export/chart.png").status_code == 404


def test_csv_and_chart_downloads(client) -> None:
    client.post("/transactions", data={"description": "Coffee", "amount": "4.5", "category": "Food"})

    response = client.get("/export/csv")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "verlauf_" in response.headers["content-disposition"]
    assert response.text.splitlines()[0] == "category,description,amount,date"

    chart = client.get("/export/chart.png", params={"kind": "doughnut"})
    assert chart.status_code == 200
    assert chart.headers["content-type"] == "image/png"
    assert "diagramm_" in chart.headers["content-disposition"]
    assert chart.content.startswith(b"\x89PNG")

    assert client.get("/export/chart.png", params={"kind": "radar"}).status_code == 400


def test_chart_rendering_runs_off_the_event_loop(client) -> None:
    route = next(route for route in client.app.routes if getattr(route, "path", "") == "/export/chart.png")
    assert not inspect.iscoroutinefunction(route.endpoint)
