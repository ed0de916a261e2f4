import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from structlog.testing import capture_logs

from app.core.deps import get_quote_repository
from app.main import app
from app.services.quote_engine import CHARGE_FIELDS


class FakeQuoteRepo:
    def __init__(self) -> None:
        self.quotes = []
        self.clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    async def create(self, quote):
        # Numeric(18, 4) columns
        for field in CHARGE_FIELDS:
            setattr(quote, field, Decimal(getattr(quote, field)).quantize(Decimal("0.0001")))
        quote.id = uuid.uuid4()
        quote.created_at = self.clock + timedelta(minutes=len(self.quotes))
        self.quotes.append(quote)
        return quote

    async def get(self, quote_id):
        value = uuid.UUID(str(quote_id))
        return next((q for q in self.quotes if q.id == value), None)

    async def list(self):
        return sorted(self.quotes, key=lambda q: q.created_at, reverse=True)


class BrokenQuoteRepo(FakeQuoteRepo):
    async def list(self):
        raise OperationalError("SELECT", {}, Exception("connection refused"))


class CrashingQuoteRepo(FakeQuoteRepo):
    async def list(self):
        raise RuntimeError("history unavailable")


FORM = {
    "customer_name": "Asha Traders",
    "origin_city": "Mumbai",
    "origin_port": "Nhava Sheva",
    "destination_city": "Dubai",
    "destination_country": "UAE",
    "destination_port": "Jebel Ali",
    "mode": "LCL",
    "volume_cbm": "12",
    "packing_charges": "1000",
    "handling_charges": "500",
    "origin_charges_custom": "2000",
    "ocean_freight": "5000",
    "dthc": "800",
    "destination_charges": "700",
    "apply_vendor_gst": True,
}


@pytest.fixture
def repo():
    fake = FakeQuoteRepo()
    app.dependency_overrides[get_quote_repository] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_calculate_returns_all_margins_and_completeness():
    async with client() as ac:
        response = await ac.post("/api/international/calculate", json={**FORM, "dthc": ""})
    assert response.status_code == 200
    body = response.json()
    assert list(body["margins"]) == ["10%", "20%", "25%", "30%"]
    assert body["is_complete"] is False
    assert body["missing_fields"] == ["dthc"]
    assert body["margins"]["10%"]["total_dest"] == "700.00"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_calculate_treats_junk_as_zero():
    async with client() as ac:
        response = await ac.post("/api/international/calculate", json={"packing_charges": "lots", "handling_charges": 10})
    body = response.json()
    assert body["margins"]["30%"]["packing"] == "0.00"
    assert body["margins"]["30%"]["handling"] == "10.00"


@pytest.mark.asyncio
async def test_save_rejects_incomplete_quote(repo):
    async with client() as ac:
        response = await ac.post("/api/international/save", json={**FORM, "customer_name": " "})
    assert response.status_code == 422
    assert response.json()["detail"]["missing_fields"] == ["customer_name"]
    assert repo.quotes == []


@pytest.mark.asyncio
async def test_save_history_and_recompute(repo):
    async with client() as ac:
        first = await ac.post("/api/international/save", json=FORM)
        second = await ac.post(
            "/api/international/save",
            json={**FORM, "customer_name": "Blue Dart Exports", "ocean_freight": "4200.50 USD"},
        )
        history = await ac.get("/api/international/history")
        detail = await ac.get(f"/api/international/quotes/{first.json()['id']}")
        calculated = await ac.post("/api/international/calculate", json=FORM)

    assert first.status_code == 201
    assert second.json()["ocean_freight"] == "4200.5"
    names = [row["customer_name"] for row in history.json()["data"]]
    assert names == ["Blue Dart Exports", "Asha Traders"]

    assert detail.status_code == 200
    assert detail.json()["quote"]["packing_charges"] == "1000"
    assert detail.json()["margins"] == calculated.json()["margins"]
    assert detail.json()["margins"]["10%"]["net_total"] == "11818.00"


@pytest.mark.asyncio
async def test_saved_quote_document(repo):
    async with client() as ac:
        saved = await ac.post("/api/international/save", json=FORM)
        response = await ac.get(f"/api/international/quotes/{saved.json()['id']}/document")
    body = response.json()
    assert response.status_code == 200
    assert body["header"]["destination_port"] == "Jebel Ali"
    assert body["totals"] == [body["parts"]["E"][-1]["values"][m] for m in body["margins"]]
    assert body["part_f"][0]["values"]["10%"] == "880.00"


@pytest.mark.asyncio
async def test_unknown_or_malformed_quote_is_404(repo):
    async with client() as ac:
        missing = await ac.get(f"/api/international/quotes/{uuid.uuid4()}")
        malformed = await ac.get("/api/international/quotes/not-a-uuid/document")
    assert missing.status_code == 404
    assert malformed.status_code == 404


@pytest.mark.asyncio
async def test_database_error_surfaces_message():
    app.dependency_overrides[get_quote_repository] = lambda: BrokenQuoteRepo()
    try:
        async with client() as ac:
            response = await ac.get("/api/international/history")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert "connection refused" in response.json()["error"]


@pytest.mark.asyncio
async def test_calculate_with_oversized_amount_is_not_an_error():
    async with client() as ac:
        response = await ac.post("/api/international/calculate", json={**FORM, "packing_charges": "1e30"})
    assert response.status_code == 200
    assert response.json()["margins"]["10%"]["packing"] == "0.00"
    assert response.json()["margins"]["10%"]["net_total"] == "10818.00"


@pytest.mark.asyncio
async def test_saved_quote_recomputes_what_was_shown(repo):
    form = {**FORM, "packing_charges": "0.00495", "handling_charges": "12.345678", "dthc": "123456789012345"}
    async with client() as ac:
        calculated = await ac.post("/api/international/calculate", json=form)
        saved = await ac.post("/api/international/save", json=form)
        detail = await ac.get(f"/api/international/quotes/{saved.json()['id']}")

    assert saved.status_code == 201
    assert saved.json()["packing_charges"] == "0.005"
    assert saved.json()["dthc"] == "0"
    assert calculated.json()["margins"]["10%"]["packing"] == "0.01"
    assert detail.json()["margins"] == calculated.json()["margins"]


@pytest.mark.asyncio
async def test_failed_request_is_logged():
    app.dependency_overrides[get_quote_repository] = lambda: CrashingQuoteRepo()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        with capture_logs() as logs:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                response = await ac.get("/api/international/history")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    failed = [entry for entry in logs if entry["event"] == "request_failed"]
    assert failed and failed[0]["path"] == "/api/international/history"
