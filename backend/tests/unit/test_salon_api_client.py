"""
Unit tests for the salon REST API client.

Uses httpx.MockTransport; no network access.
"""
import asyncio
import pytest
from decimal import Decimal

import httpx

from models import Role, ServiceStatus
from services.salon_api_client import SalonApiClient, SalonApiError
from tests.fakes import FakeSalonApi, api_collaborator, api_price, api_procedure, api_record


@pytest.fixture
def api():
    fake = FakeSalonApi()
    fake.set("GET", "/collaborators", [api_collaborator("c1", "Ana", allowedProcedureIds=["p1"])])
    fake.set("GET", "/procedures", [api_procedure("p1", "Mão")])
    fake.set("GET", "/prices", [api_price("pr1", "p1")])
    fake.set("GET", "/records", [
        api_record("r1", "2024-03-01T00:00:00.000Z", calculatedValue=50),
        api_record("r2", "2024-03-02", status="Não Fez", calculatedValue=None, extras=None),
    ])
    return fake


class TestReads:
    @pytest.mark.asyncio
    async def test_parses_camel_case(self, api):
        client = api.client()
        try:
            collaborators = await client.get_collaborators()
            prices = await client.get_prices()
        finally:
            await client.aclose()

        assert collaborators[0].role == Role.MANICURE
        assert collaborators[0].allowed_procedure_ids == ["p1"]
        assert prices[0].value_done == Decimal("50.0")

    @pytest.mark.asyncio
    async def test_records_are_normalized(self, api):
        client = api.client()
        try:
            records = await client.get_records()
        finally:
            await client.aclose()

        assert records[0].date == "2024-03-01"
        assert records[0].calculated_value == Decimal("50")
        assert records[1].status == ServiceStatus.NOT_DONE
        assert records[1].calculated_value == Decimal("0")
        assert records[1].extras == []

    @pytest.mark.asyncio
    async def test_invalid_items_are_skipped(self, api, caplog):
        api.set("GET", "/procedures", [api_procedure("p1"), {"id": "p2", "name": "Broken", "category": "Nope"}])
        client = api.client()
        try:
            procedures = await client.get_procedures()
        finally:
            await client.aclose()

        assert [p.id for p in procedures] == ["p1"]
        assert "Skipping invalid Procedure" in caplog.text

    @pytest.mark.asyncio
    async def test_non_list_response(self, api):
        api.set("GET", "/procedures", {"unexpected": True})
        client = api.client()
        try:
            with pytest.raises(SalonApiError) as exc_info:
                await client.get_procedures()
        finally:
            await client.aclose()
        assert exc_info.value.status_code == 502


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_fetch_snapshot(self, api):
        client = api.client()
        try:
            snapshot = await client.fetch_snapshot()
        finally:
            await client.aclose()

        assert len(snapshot.records) == 2
        assert len(snapshot.collaborators) == 1
        assert len(snapshot.procedures) == 1
        assert snapshot.prices == ()
        assert {r.url.path for r in api.requests} == {"/api/records", "/api/collaborators", "/api/procedures"}

    @pytest.mark.asyncio
    async def test_fetch_snapshot_with_prices(self, api):
        client = api.client()
        try:
            snapshot = await client.fetch_snapshot(include_prices=True)
        finally:
            await client.aclose()
        assert len(snapshot.prices) == 1

    @pytest.mark.asyncio
    async def test_one_failed_fetch_fails_the_snapshot(self, api):
        api.set("GET", "/procedures", {"error": "boom"}, 500)
        client = api.client()
        try:
            with pytest.raises(SalonApiError) as exc_info:
                await client.fetch_snapshot()
        finally:
            await client.aclose()
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "boom"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        started = asyncio.Event()

        async def slow_handler(request: httpx.Request) -> httpx.Response:
            started.set()
            await asyncio.sleep(10)
            return httpx.Response(200, json=[])

        client = SalonApiClient(base_url="http://salon.test/api", transport=httpx.MockTransport(slow_handler))
        try:
            task = asyncio.create_task(client.fetch_snapshot())
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
        finally:
            await client.aclose()


class TestErrors:
    @pytest.mark.asyncio
    async def test_error_body_message(self):
        api = FakeSalonApi()
        api.set("DELETE", "/records/r1", {"error": "Record not found"}, 404)
        client = api.client()
        try:
            with pytest.raises(SalonApiError) as exc_info:
                await client.delete_record("r1")
        finally:
            await client.aclose()
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Record not found"

    @pytest.mark.asyncio
    async def test_error_without_body(self):
        api = FakeSalonApi()
        api.set("DELETE", "/records/r1", None, 500)
        client = api.client()
        try:
            with pytest.raises(SalonApiError) as exc_info:
                await client.delete_record("r1")
        finally:
            await client.aclose()
        assert exc_info.value.message == "API Error"

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = SalonApiClient(base_url="http://salon.test/api", transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(SalonApiError) as exc_info:
                await client.get_records()
        finally:
            await client.aclose()
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_invalid_created_entity(self):
        api = FakeSalonApi()
        api.set("POST", "/records", {"id": "r1"}, 201)
        client = api.client()
        try:
            with pytest.raises(SalonApiError) as exc_info:
                await client.create_record({"date": "2024-03-01"})
        finally:
            await client.aclose()
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_delete_success(self):
        api = FakeSalonApi()
        api.set("DELETE", "/prices/pr1", None, 204)
        client = api.client()
        try:
            await client.delete_price("pr1")
        finally:
            await client.aclose()
        assert api.requests[0].url.path == "/api/prices/pr1"
