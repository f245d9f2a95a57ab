"""
Test configuration and shared fixtures for the Salon Dashboard test suite.

Entities are built in memory; the salon REST API is never contacted. API
tests replace the client dependency with a fake or an httpx.MockTransport.
"""

import pytest
from decimal import Decimal
from typing import List, Optional

from models import (
    Collaborator,
    PriceConfig,
    Procedure,
    ProcedureCategory,
    Role,
    ServiceRecord,
    ServiceStatus,
)
from services.dashboard_types import SalonSnapshot


def make_record(
    record_id: str = "r1",
    date: str = "2024-03-01",
    collaborator_id: str = "c1",
    procedure_id: str = "p1",
    status: ServiceStatus = ServiceStatus.DONE,
    value: str = "50.00",
    extras: Optional[List[str]] = None,
    notes: Optional[str] = None,
    created_at: Optional[str] = None
) -> ServiceRecord:
    """Build a service record with sensible defaults."""
    return ServiceRecord(
        id=record_id,
        date=date,
        collaborator_id=collaborator_id,
        procedure_id=procedure_id,
        status=status,
        calculated_value=Decimal(value),
        extras=extras or [],
        notes=notes,
        created_at=created_at
    )


def make_collaborator(
    collaborator_id: str = "c1",
    name: str = "Ana",
    role: Role = Role.MANICURE,
    active: bool = True,
    allowed_procedure_ids: Optional[List[str]] = None
) -> Collaborator:
    return Collaborator(
        id=collaborator_id,
        name=name,
        role=role,
        active=active,
        allowed_procedure_ids=allowed_procedure_ids
    )


def make_procedure(
    procedure_id: str = "p1",
    name: str = "Mão",
    category: ProcedureCategory = ProcedureCategory.MANICURE,
    active: bool = True
) -> Procedure:
    return Procedure(id=procedure_id, name=name, category=category, active=active)


def make_price(
    price_id: str = "pr1",
    procedure_id: str = "p1",
    value_done: str = "50.00",
    value_not_done: str = "20.00",
    value_additional: str = "10.00",
    active: bool = True
) -> PriceConfig:
    return PriceConfig(
        id=price_id,
        procedure_id=procedure_id,
        value_done=Decimal(value_done),
        value_not_done=Decimal(value_not_done),
        value_additional=Decimal(value_additional),
        active=active
    )


@pytest.fixture
def collaborators() -> List[Collaborator]:
    return [
        make_collaborator("c1", "Ana", Role.MANICURE),
        make_collaborator("c2", "Bia", Role.HAIRDRESSER),
        make_collaborator("c3", "Carla", Role.BOTH, active=False),
    ]


@pytest.fixture
def procedures() -> List[Procedure]:
    return [
        make_procedure("p1", "Mão", ProcedureCategory.MANICURE),
        make_procedure("p2", "Corte", ProcedureCategory.HAIRDRESSER_FEMALE),
        make_procedure("p3", "Barba", ProcedureCategory.HAIRDRESSER_MALE, active=False),
    ]


@pytest.fixture
def prices() -> List[PriceConfig]:
    return [
        make_price("pr1", "p1", "50.00", "20.00", "10.00"),
        make_price("pr2", "p2", "80.00", "0.00", "15.00"),
    ]


@pytest.fixture
def march_records() -> List[ServiceRecord]:
    """Records across March 2024 plus one in February."""
    return [
        make_record("r1", "2024-03-01", "c1", "p1", ServiceStatus.DONE, "50.00",
                    created_at="2024-03-01T10:00:00Z"),
        make_record("r2", "2024-03-01", "c1", "p1", ServiceStatus.NOT_DONE, "20.00",
                    created_at="2024-03-01T11:00:00Z"),
        make_record("r3", "2024-03-02", "c2", "p2", ServiceStatus.DONE, "80.00",
                    extras=["Toalhas"], created_at="2024-03-02T09:00:00Z"),
        make_record("r4", "2024-03-05", "c2", "p1", ServiceStatus.DONE, "60.00",
                    extras=["Limpeza"], notes="Cliente nova", created_at="2024-03-05T15:00:00Z"),
        make_record("r5", "2024-02-28", "c1", "p2", ServiceStatus.DONE, "80.00",
                    created_at="2024-02-28T12:00:00Z"),
    ]


@pytest.fixture
def snapshot(collaborators, procedures, prices, march_records) -> SalonSnapshot:
    return SalonSnapshot(
        collaborators=tuple(collaborators),
        procedures=tuple(procedures),
        prices=tuple(prices),
        records=tuple(march_records)
    )
