"""Mini README: FastAPI-powered dashboard for the budget widget.

Structure:
    * create_application - application factory wiring routes and templates.
    * Ledger routes - budget, transactions, history filters, and profile.
    * Export routes - CSV history and PNG chart downloads.

Every route delegates to the one ``LedgerStateManager`` built at start-up.
Ledger input errors become HTTP 400 responses and exports without data become
404, mirroring how the manager signals them. HTML forms add ``redirect=true``
so the browser returns to the dashboard after a change; API clients get JSON.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..bootstrap import build_ledger_manager
from ..configuration import BudgetWidgetSettings, get_settings
from ..errors import EmptyExport, LedgerError
from ..export import CategoryChartRenderer, ChartKind, chart_filename, csv_filename
from ..ledger import LedgerStateManager
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


def _after_change(payload: dict, redirect: bool) -> Response:
    if redirect:
        return RedirectResponse("/", status_code=303)
    return JSONResponse(payload)


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def create_application(
    manager: Optional[LedgerStateManager] = None,
    settings: Optional[BudgetWidgetSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    ledger = manager or build_ledger_manager(settings)
    renderer = CategoryChartRenderer(currency=settings.currency)

    app = FastAPI(title="Budget Widget", version="0.3.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, q: str = "", category: str = "") -> HTMLResponse:
        """Render the dashboard with the summary, entry form, and filtered history."""

        history = list(reversed(ledger.filter_transactions(q, category)))
        LOGGER.debug("Rendering dashboard with %s of %s transactions", len(history), len(ledger.state.transactions))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "name": ledger.user_name,
                "needs_name": ledger.needs_name,
                "theme": ledger.theme,
                "currency": settings.currency,
                "summary": ledger.compute_summary(),
                "aggregate": ledger.aggregate_by_category(),
                "history": history,
                "filter_categories": ledger.distinct_categories(),
                "category_choices": ledger.category_choices(),
                "query": q,
                "selected_category": category,
            },
        )

    @app.get("/api/state")
    async def state() -> JSONResponse:
        """Return the persisted record together with the derived summary."""

        return JSONResponse(ledger.snapshot())

    @app.post("/budget")
    async def set_budget(amount: str = Form(...), redirect: bool = Form(False)) -> Response:
        """Replace the monthly budget."""

        try:
            ledger.set_budget(amount)
        except LedgerError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _after_change({"summary": ledger.compute_summary().as_dict()}, redirect)

    @app.post("/transactions")
    async def add_transaction(
        amount: str = Form(...),
        description: str = Form(""),
        category: str = Form(""),
        redirect: bool = Form(False),
    ) -> Response:
        """Record a new expense."""

        try:
            transaction = ledger.add_transaction(description, amount, category)
        except LedgerError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _after_change(
            {"transaction": transaction.as_dict(), "summary": ledger.compute_summary().as_dict()},
            redirect,
        )

    @app.get("/transactions")
    async def list_transactions(q: str = "", category: str = "") -> JSONResponse:
        """Return the history filtered by text query and category, oldest first."""

        matches = ledger.filter_transactions(q, category)
        return JSONResponse({"transactions": [transaction.as_dict() for transaction in matches]})

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        """Remove a transaction; unknown identifiers report ``deleted: false``."""

        deleted = ledger.delete_transaction(transaction_id)
        return JSONResponse({"deleted": deleted, "summary": ledger.compute_summary().as_dict()})

    @app.post("/transactions/{transaction_id}/delete")
    async def delete_transaction_form(transaction_id: str) -> RedirectResponse:
        """Form-friendly variant of the delete route."""

        ledger.delete_transaction(transaction_id)
        return RedirectResponse("/", status_code=303)

    @app.post("/reset")
    async def reset(redirect: bool = Form(False)) -> Response:
        """Clear the history while keeping the budget."""

        cleared = ledger.reset_all()
        return _after_change({"cleared": cleared}, redirect)

    @app.get("/categories")
    async def categories() -> JSONResponse:
        """Return filter categories and entry-form choices."""

        return JSONResponse(
            {"categories": ledger.distinct_categories(), "choices": ledger.category_choices()}
        )

    @app.get("/aggregates")
    async def aggregates() -> JSONResponse:
        """Return per-category sums in first-seen order for both charts."""

        sums = ledger.aggregate_by_category()
        return JSONResponse(
            {
                "labels": list(sums.keys()),
                "values": [float(amount) for amount in sums.values()],
            }
        )

    @app.post("/profile/name")
    async def set_name(name: str = Form(""), redirect: bool = Form(False)) -> Response:
        """Store the display name captured by the first-run prompt or settings."""

        try:
            value = ledger.set_user_name(name)
        except LedgerError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _after_change({"name": value}, redirect)

    @app.post("/profile/theme")
    async def set_theme(theme: str = Form(""), redirect: bool = Form(False)) -> Response:
        """Store the selected colour theme."""

        try:
            value = ledger.set_theme(theme)
        except LedgerError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _after_change({"theme": value}, redirect)

    @app.get("/export/csv")
    async def export_csv() -> Response:
        """Download the full history as ``verlauf_<date>.csv``."""

        try:
            payload = ledger.to_csv()
        except EmptyExport as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        filename = csv_filename(date.today())
        LOGGER.info("Exporting history as %s", filename)
        return Response(
            content=payload.encode("utf-8"),
            media_type="text/csv; charset=utf-8",
            headers=_attachment(filename),
        )

    # Plain def: rendering runs in the threadpool instead of the event loop.
    @app.get("/export/chart.png")
    def export_chart(kind: str = "bar") -> Response:
        """Download the category chart as ``diagramm_<date>.png``."""

        try:
            chart_kind = ChartKind.from_str(kind)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        try:
            ledger.require_transactions()
            payload = renderer.render(ledger.aggregate_by_category(), chart_kind)
        except EmptyExport as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        filename = chart_filename(date.today())
        LOGGER.info("Exporting %s chart as %s", chart_kind.value, filename)
        return Response(content=payload, media_type="image/png", headers=_attachment(filename))

    return app
