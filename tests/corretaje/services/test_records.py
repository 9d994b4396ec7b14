"""
Tests for record construction and partial merge.
"""
from datetime import datetime, timedelta, timezone

from src.corretaje.models.inquiry import InquiryCreate, InquiryUpdate
from src.corretaje.models.property import PropertyCreate, PropertyUpdate
from src.corretaje.services.records import (
    build_inquiry,
    build_property,
    merge_inquiry,
    merge_property,
)

CREATED = datetime(2024, 12, 1, 9, 0, tzinfo=timezone.utc)
LATER = CREATED + timedelta(hours=5)


class TestBuildProperty:

    def test_assigns_id_and_timestamps(self, sample_property_payload):
        record = build_property(5, PropertyCreate.model_validate(sample_property_payload), now=CREATED)

        assert record.id == 5
        assert record.fecha_creacion == CREATED
        assert record.fecha_actualizacion == CREATED
        assert record.ubicacion.comuna == "Providencia"
        assert record.caracteristicas.metros_cuadrados == 90

    def test_defaults(self):
        data = PropertyCreate.model_validate(
            {"titulo": "Terreno", "precio": 1000, "tipo": "terreno", "estado": "venta"}
        )

        record = build_property(1, data, now=CREATED)

        assert record.caracteristicas.amoblado is False
        assert record.amenidades == []
        assert record.imagenes == []
        assert record.ubicacion.comuna is None


class TestMergeProperty:
    """Tests for explicit partial merge."""

    def test_only_supplied_fields_change(self, sample_property_payload):
        existing = build_property(3, PropertyCreate.model_validate(sample_property_payload), now=CREATED)
        patch = PropertyUpdate.model_validate({"precio": 900000})

        merged = merge_property(existing, patch, now=LATER)

        assert merged.precio == 900000
        assert merged.titulo == existing.titulo
        assert merged.ubicacion == existing.ubicacion
        assert merged.amenidades == existing.amenidades

    def test_id_and_creation_time_preserved(self, sample_property_payload):
        existing = build_property(3, PropertyCreate.model_validate(sample_property_payload), now=CREATED)
        patch = PropertyUpdate.model_validate({"id": 99, "fechaCreacion": "2000-01-01T00:00:00Z", "titulo": "Nuevo"})

        merged = merge_property(existing, patch, now=LATER)

        assert merged.id == 3
        assert merged.fecha_creacion == CREATED
        assert merged.fecha_actualizacion == LATER
        assert merged.titulo == "Nuevo"

    def test_nested_fields_merge_individually(self, sample_property_payload):
        existing = build_property(3, PropertyCreate.model_validate(sample_property_payload), now=CREATED)
        patch = PropertyUpdate.model_validate({"ubicacion": {"comuna": "Ñuñoa"}})

        merged = merge_property(existing, patch, now=LATER)

        assert merged.ubicacion.comuna == "Ñuñoa"
        assert merged.ubicacion.direccion == "Av. Providencia 1234"
        assert merged.ubicacion.ciudad == "Santiago"

    def test_null_nested_object_and_list_are_cleared(self, sample_property_payload):
        existing = build_property(3, PropertyCreate.model_validate(sample_property_payload), now=CREATED)
        patch = PropertyUpdate.model_validate({"agente": None, "imagenes": None})

        merged = merge_property(existing, patch, now=LATER)

        assert merged.agente.nombre is None
        assert merged.imagenes == []

    def test_existing_record_is_not_mutated(self, sample_property_payload):
        existing = build_property(3, PropertyCreate.model_validate(sample_property_payload), now=CREATED)

        merge_property(existing, PropertyUpdate.model_validate({"titulo": "Otro"}), now=LATER)

        assert existing.titulo == "Departamento Moderno en Providencia"
        assert existing.fecha_actualizacion == CREATED


class TestInquiryRecords:

    def test_new_inquiry_state_and_priority(self, sample_inquiry_payload):
        record = build_inquiry(1, InquiryCreate.model_validate(sample_inquiry_payload), now=CREATED)

        assert record.estado == "nueva"
        assert record.prioridad == "media"
        assert record.tipo_servicio == "arriendo"

    def test_supplied_priority_kept(self, sample_inquiry_payload):
        payload = dict(sample_inquiry_payload, prioridad="alta", estado="completada")

        record = build_inquiry(1, InquiryCreate.model_validate(payload), now=CREATED)

        assert record.prioridad == "alta"
        assert record.estado == "nueva"

    def test_merge_updates_workflow_state(self, sample_inquiry_payload):
        existing = build_inquiry(2, InquiryCreate.model_validate(sample_inquiry_payload), now=CREATED)

        merged = merge_inquiry(existing, InquiryUpdate.model_validate({"estado": "en_proceso"}), now=LATER)

        assert merged.id == 2
        assert merged.estado == "en_proceso"
        assert merged.email == existing.email
        assert merged.fecha_actualizacion == LATER
