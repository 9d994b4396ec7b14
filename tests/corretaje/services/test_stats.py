"""
Tests for listing and inquiry statistics.
"""
from datetime import datetime, timedelta, timezone

from src.corretaje.models.inquiry import InquiryCreate
from src.corretaje.models.property import PropertyCreate
from src.corretaje.services.records import build_inquiry, build_property
from src.corretaje.services.stats import inquiry_stats, property_stats

NOW = datetime(2024, 12, 20, 12, 0, tzinfo=timezone.utc)


def listing(property_id, estado, precio, tipo="casa"):
    data = PropertyCreate(titulo=f"Propiedad {property_id}", precio=precio, tipo=tipo, estado=estado)
    return build_property(property_id, data, now=NOW)


def inquiry(inquiry_id, created, tipo_servicio="compra", prioridad=None):
    data = InquiryCreate(
        nombre="Ana",
        apellido="Rojas",
        email="ana@example.com",
        telefono="123",
        tipo_servicio=tipo_servicio,
        prioridad=prioridad,
    )
    return build_inquiry(inquiry_id, data, now=created)


class TestPropertyStats:

    def test_empty_store_averages_are_zero(self):
        stats = property_stats([])

        assert stats.total == 0
        assert stats.en_venta == 0
        assert stats.en_arriendo == 0
        assert stats.por_tipo == {}
        assert stats.precio_promedio.venta == 0
        assert stats.precio_promedio.arriendo == 0

    def test_counts_and_rounded_averages(self):
        records = [
            listing(1, "venta", 100000000),
            listing(2, "venta", 200000001, tipo="departamento"),
            listing(3, "arriendo", 850000, tipo="departamento"),
        ]

        stats = property_stats(records)

        assert stats.total == 3
        assert stats.en_venta == 2
        assert stats.en_arriendo == 1
        assert stats.por_tipo == {"casa": 1, "departamento": 2}
        assert stats.precio_promedio.venta == 150000000
        assert stats.precio_promedio.arriendo == 850000

    def test_empty_group_average_is_zero(self):
        stats = property_stats([listing(1, "arriendo", 500000)])

        assert stats.precio_promedio.venta == 0

    def test_serialized_keys_are_camel_case(self):
        body = property_stats([]).model_dump(by_alias=True)

        assert set(body) == {"total", "enVenta", "enArriendo", "porTipo", "precioPromedio"}


class TestInquiryStats:

    def test_known_states_and_priorities_always_present(self):
        stats = inquiry_stats([], now=NOW)

        assert stats.total == 0
        assert stats.por_estado == {"nueva": 0, "pendiente": 0, "en_proceso": 0, "completada": 0}
        assert stats.por_prioridad == {"alta": 0, "media": 0, "baja": 0}
        assert stats.recientes == 0

    def test_breakdowns_and_recent_window(self):
        records = [
            inquiry(1, NOW - timedelta(days=1), prioridad="alta"),
            inquiry(2, NOW - timedelta(days=6), tipo_servicio="arriendo"),
            inquiry(3, NOW - timedelta(days=30), tipo_servicio="arriendo"),
        ]

        stats = inquiry_stats(records, now=NOW)

        assert stats.total == 3
        assert stats.por_estado["nueva"] == 3
        assert stats.por_tipo_servicio == {"compra": 1, "arriendo": 2}
        assert stats.por_prioridad == {"alta": 1, "media": 2, "baja": 0}
        assert stats.recientes == 2
