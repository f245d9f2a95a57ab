"""
Unit tests for salon entity models.
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from models import (
    Collaborator,
    PriceConfigInput,
    Procedure,
    ProcedureCategory,
    Role,
    ServiceRecord,
    ServiceRecordInput,
    ServiceStatus,
)


class TestEnums:
    def test_wire_values(self):
        assert ServiceStatus("Fez") == ServiceStatus.DONE
        assert ServiceStatus("Não Fez") == ServiceStatus.NOT_DONE
        assert Role("Ambas") == Role.BOTH
        assert ProcedureCategory("Cabeleireira – Masculino") == ProcedureCategory.HAIRDRESSER_MALE


class TestCollaborator:
    def test_accepts_camel_and_snake_case(self):
        camel = Collaborator.model_validate(
            {"id": "c1", "name": "Ana", "role": "Manicure", "allowedProcedureIds": ["p1"]}
        )
        snake = Collaborator(id="c1", name="Ana", role=Role.MANICURE, allowed_procedure_ids=["p1"])
        assert camel == snake

    def test_missing_allow_list_means_unrestricted(self):
        collaborator = Collaborator.model_validate({"id": "c1", "name": "Ana", "role": "Manicure"})
        assert collaborator.allowed_procedure_ids is None
        assert collaborator.active is True

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            Collaborator.model_validate({"id": "c1", "name": "Ana", "role": "Barber"})

    def test_frozen(self):
        collaborator = Collaborator(id="c1", name="Ana", role=Role.MANICURE)
        with pytest.raises(ValidationError):
            collaborator.name = "Bia"


class TestProcedure:
    def test_serializes_camel_case(self):
        procedure = Procedure(id="p1", name="Mão", category=ProcedureCategory.MANICURE)
        assert procedure.to_api_payload() == {"id": "p1", "name": "Mão", "category": "Manicure", "active": True}


class TestPriceConfig:
    def test_negative_amounts_rejected(self):
        with pytest.raises(ValidationError):
            PriceConfigInput(procedure_id="p1", value_done=Decimal("-1"))

    def test_more_than_two_decimals_rejected(self):
        with pytest.raises(ValidationError):
            PriceConfigInput(procedure_id="p1", value_done=Decimal("1.005"))


class TestServiceRecordInput:
    def test_defaults(self):
        record_input = ServiceRecordInput(date="2024-03-01", collaborator_id="c1", procedure_id="p1")
        assert record_input.status == ServiceStatus.DONE
        assert record_input.extras == []

    def test_date_normalized(self):
        record_input = ServiceRecordInput(date="2024-3-9", collaborator_id="c1", procedure_id="p1")
        assert record_input.date == "2024-03-09"

    def test_invalid_date(self):
        with pytest.raises(ValidationError):
            ServiceRecordInput(date="2024-02-30", collaborator_id="c1", procedure_id="p1")

    def test_unknown_extra(self):
        with pytest.raises(ValidationError):
            ServiceRecordInput(date="2024-03-01", collaborator_id="c1", procedure_id="p1", extras=["Massagem"])

    def test_repeated_extra(self):
        with pytest.raises(ValidationError):
            ServiceRecordInput(
                date="2024-03-01", collaborator_id="c1", procedure_id="p1", extras=["Limpeza", "Limpeza"]
            )


class TestServiceRecord:
    def test_timestamp_date_keeps_calendar_day(self):
        record = ServiceRecord.model_validate({
            "id": "r1",
            "date": "2024-03-01T00:00:00.000Z",
            "collaboratorId": "c1",
            "procedureId": "p1",
            "status": "Fez",
            "calculatedValue": 50,
        })
        assert record.date == "2024-03-01"
        assert record.is_done

    def test_historical_extras_are_not_validated(self):
        record = ServiceRecord(
            id="r1", date="2024-03-01", collaborator_id="c1", procedure_id="p1",
            status=ServiceStatus.DONE, extras=["Retired option"]
        )
        assert record.extras == ["Retired option"]

    def test_value_serialized_as_number(self):
        record = ServiceRecord(
            id="r1", date="2024-03-01", collaborator_id="c1", procedure_id="p1",
            status=ServiceStatus.NOT_DONE, calculated_value=Decimal("20.00")
        )
        assert record.to_api_payload()["calculatedValue"] == 20.0
        assert not record.is_done
